from __future__ import annotations

import html
import re

from mdexport.utils.constants import FALLBACK_FILENAME, MAX_FILENAME_LENGTH, PAGE_SIZES

_DISALLOWED_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")
_UNSAFE_CHARS = re.compile(r"[^\w\-.]")


def escape_html(text: str | None) -> str:
    """Escape user supplied text for element content and attribute values."""
    return html.escape(text or "", quote=True)


def sanitize_filename(filename: str, extension: str | None = None) -> str:
    """
    Make a download-safe file name.

    Windows-reserved characters are removed, whitespace becomes "_", anything
    that is not a word character, dash or dot is dropped and the stem is cut
    to 100 characters. The extension is appended unless already present.
    """
    sanitized = _DISALLOWED_CHARS.sub("", filename or "")
    sanitized = _WHITESPACE.sub("_", sanitized.strip())
    sanitized = _UNSAFE_CHARS.sub("", sanitized)[:MAX_FILENAME_LENGTH]

    if not sanitized:
        sanitized = FALLBACK_FILENAME

    if extension and not sanitized.endswith(extension):
        sanitized += extension
    return sanitized


def page_dimensions(page_size: str, orientation: str) -> tuple[str, str]:
    width, height = PAGE_SIZES.get(page_size, PAGE_SIZES["A4"])
    if orientation == "landscape":
        return height, width
    return width, height


def page_size_css(page_size: str, orientation: str, *, page_numbers: bool = False) -> str:
    width, height = page_dimensions(page_size, orientation)
    counter = (
        """
    @bottom-center {
        content: counter(page) " / " counter(pages);
        font-size: 9pt;
        color: #555555;
    }"""
        if page_numbers
        else ""
    )
    return f"""
@page {{
    size: {width} {height};
    margin: 1in;{counter}
}}
"""


_CSS_UNSAFE = re.compile(r"[^\w \-]")


def css_font_family(name: str | None, default: str = "Arial") -> str:
    """Font family name safe to place inside a quoted CSS string."""
    cleaned = _CSS_UNSAFE.sub("", name or "").strip()
    return cleaned or default
