"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    HTML_TEMPLATE,
    PAGE_SIZES,
    THEMES,
)
from .html_utils import escape_html, sanitize_filename

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "THEMES",
    "PAGE_SIZES",
    "FONT_SIZE_MIN",
    "FONT_SIZE_MAX",
    "HTML_TEMPLATE",
    "escape_html",
    "sanitize_filename",
]
