from mdexport.domain.models import ThemeConfig

APP_ORG = "QuickTools"
APP_NAME = "Markdown Export"

THEMES: dict[str, ThemeConfig] = {
    "default": ThemeConfig(
        name="Default", primary_color="#000000", background_color="#ffffff", accent_color="#0066cc"
    ),
    "professional": ThemeConfig(
        name="Professional", primary_color="#2c3e50", background_color="#ffffff", accent_color="#3498db"
    ),
    "modern": ThemeConfig(
        name="Modern", primary_color="#1a1a1a", background_color="#fafafa", accent_color="#6366f1"
    ),
    "academic": ThemeConfig(
        name="Academic", primary_color="#2d3748", background_color="#ffffff", accent_color="#805ad5"
    ),
    "dark": ThemeConfig(
        name="Dark", primary_color="#e5e7eb", background_color="#1f2937", accent_color="#60a5fa"
    ),
}
DEFAULT_THEME = "default"

FONT_FAMILIES = (
    "Arial",
    "Times New Roman",
    "Helvetica",
    "Georgia",
    "Verdana",
    "Roboto",
    "Open Sans",
)
FONT_SIZE_MIN = 8
FONT_SIZE_MAX = 24
FONT_SIZE_DEFAULT = 12

# (width, height) in portrait
PAGE_SIZES: dict[str, tuple[str, str]] = {
    "A4": ("210mm", "297mm"),
    "Letter": ("8.5in", "11in"),
    "Legal": ("8.5in", "14in"),
}
ORIENTATIONS = ("portrait", "landscape")

# Word page setup uses points
PAGE_SIZES_PT: dict[str, tuple[float, float]] = {
    "A4": (595.3, 841.9),
    "Letter": (612.0, 792.0),
    "Legal": (612.0, 1008.0),
}

PRINT_SETTLE_MS = 500
WORDS_PER_MINUTE = 200
MAX_FILENAME_LENGTH = 100
FALLBACK_FILENAME = "document"

SUCCESS_MESSAGES = {
    "print": 'Print export started. Choose "Save as PDF" in the print dialog.',
    "word": "Document exported as a Word-compatible file.",
    "ebook": "Document exported as HTML (e-book format).",
    "slides": "Document exported as an HTML presentation.",
}
FAILURE_TITLE = "Export failed"
SUCCESS_TITLE = "Export succeeded"
VALIDATION_TITLE = "Validation failed"

EMOJI_FONT_STACK = (
    "'Apple Color Emoji', 'Segoe UI Emoji', 'Noto Color Emoji', "
    "'Segoe UI Symbol', 'Android Emoji', 'EmojiSymbols', sans-serif"
)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en"{html_attrs}>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
{head}
</head>
<body{body_attrs}>
{body}
</body>
</html>
"""

SETTINGS_THEME_PREFERENCE = "theme/preference"
SETTINGS_LAST_FORMAT = "export/last_format"
SETTINGS_OUTPUT_DIR = "export/output_dir"
