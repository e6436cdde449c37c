from __future__ import annotations

import logging
import re

from mdexport.domain.models import ColorTarget, ThemeColors, ThemeConfig, ThemeProbe
from mdexport.utils.constants import DEFAULT_THEME, THEMES

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Neutral palettes used when the decided mode disagrees with the theme background
DARK_SURFACE = "#111827"
DARK_TEXT = "#e5e7eb"
DARK_MUTED = "#1f2937"
LIGHT_SURFACE = "#ffffff"
LIGHT_TEXT = "#111827"
LIGHT_MUTED = "#f8f9fa"
PRINT_TEXT = "#000000"
PRINT_BACKGROUND = "#ffffff"

# High contrast accent variants
ACCENT_ON_DARK = "#93c5fd"
ACCENT_ON_LIGHT = "#1d4ed8"

TEXT_CONTRAST_MIN = 4.5
ACCENT_CONTRAST_MIN = 3.0

_DARK_CLASSES = {"dark", "theme-dark"}
_LIGHT_CLASSES = {"light", "theme-light"}


def get_theme(name: str | None) -> ThemeConfig:
    return THEMES.get((name or "").strip().lower(), THEMES[DEFAULT_THEME])


# -------------------- color math --------------------


def _rgb(color: str) -> tuple[int, int, int]:
    m = _HEX_RE.match((color or "").strip())
    if not m:
        raise ValueError(f"Not a hex color: {color!r}")
    raw = m.group(1)
    if len(raw) == 3:
        raw = "".join(c * 2 for c in raw)
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)


def relative_luminance(color: str) -> float:
    """WCAG 2.x relative luminance of a hex color, 0 (black) .. 1 (white)."""

    def channel(v: int) -> float:
        c = v / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = _rgb(color)
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(a: str, b: str) -> float:
    la, lb = relative_luminance(a), relative_luminance(b)
    hi, lo = max(la, lb), min(la, lb)
    return (hi + 0.05) / (lo + 0.05)


def is_dark_color(color: str) -> bool:
    # 0.179 is the luminance where white and black text have equal contrast
    return relative_luminance(color) < 0.179


# -------------------- dark/light decision --------------------


def _host_signal(probe: ThemeProbe) -> bool | None:
    data_theme = (probe.data_theme or "").strip().lower()
    if data_theme == "dark":
        return True
    if data_theme == "light":
        return False

    classes = {c.lower() for c in probe.body_classes}
    if classes & _DARK_CLASSES:
        return True
    if classes & _LIGHT_CLASSES:
        return False

    if probe.host_theme is not None:
        try:
            return is_dark_color(probe.host_theme.background)
        except ValueError:
            logger.debug("Ignoring unparsable host background %r", probe.host_theme.background)
    return None


def _stored_signal(probe: ThemeProbe) -> bool | None:
    pref = (probe.stored_preference or "").strip().lower()
    if pref == "dark":
        return True
    if pref == "light":
        return False
    return None


def decide_dark_mode(theme: ThemeConfig, probe: ThemeProbe, explicit_theme: str | None = None) -> bool:
    """
    First signal with an opinion wins:
      1) explicit option theme "dark"
      2) export theme background is dark
      3) host data-theme, body classes, host theme background
      4) OS color-scheme preference
      5) stored user preference
      6) light
    """
    if (explicit_theme or "").strip().lower() == "dark":
        return True
    if is_dark_color(theme.background_color):
        return True

    for signal in (_host_signal(probe), probe.prefers_dark, _stored_signal(probe)):
        if signal is not None:
            return bool(signal)
    return False


def _readable(color: str, background: str, minimum: float, fallback: str) -> str:
    return color if contrast_ratio(color, background) >= minimum else fallback


# -------------------- public API --------------------


def resolve_theme_colors(
    theme_name: str | None,
    probe: ThemeProbe | None = None,
    *,
    target: ColorTarget = "screen",
    explicit_theme: str | None = None,
) -> ThemeColors:
    """
    Compute concrete colors for a theme. Pure given its inputs: every host
    signal comes in through `probe`.

    target="print" forces black text on white for print and Word output.
    """
    theme = get_theme(theme_name)
    probe = probe or ThemeProbe()

    if target == "print":
        background = PRINT_BACKGROUND
        accent = _readable(theme.accent_color, background, ACCENT_CONTRAST_MIN, ACCENT_ON_LIGHT)
        return ThemeColors(
            title_color=accent,
            body_text_color=PRINT_TEXT,
            author_color=PRINT_TEXT,
            border_color=accent,
            background_color=background,
            accent_color=accent,
            table_header_color=accent,
            muted_background=LIGHT_MUTED,
            is_dark=False,
        )

    dark = decide_dark_mode(theme, probe, explicit_theme if explicit_theme is not None else theme_name)
    theme_bg_dark = is_dark_color(theme.background_color)

    if dark == theme_bg_dark:
        background = theme.background_color
    else:
        background = DARK_SURFACE if dark else LIGHT_SURFACE

    neutral_text = DARK_TEXT if dark else LIGHT_TEXT
    body = _readable(theme.primary_color, background, TEXT_CONTRAST_MIN, neutral_text)
    accent = _readable(
        theme.accent_color, background, ACCENT_CONTRAST_MIN, ACCENT_ON_DARK if dark else ACCENT_ON_LIGHT
    )
    author = DARK_TEXT if dark else _readable(theme.primary_color, background, TEXT_CONTRAST_MIN, "#374151")

    return ThemeColors(
        title_color=accent,
        body_text_color=body,
        author_color=author,
        border_color=accent,
        background_color=background,
        accent_color=accent,
        table_header_color=accent,
        muted_background=DARK_MUTED if dark else LIGHT_MUTED,
        is_dark=dark,
    )
