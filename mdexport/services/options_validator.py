from __future__ import annotations

from mdexport.domain.errors import ValidationError
from mdexport.domain.models import ExportFormat, ExportOptions
from mdexport.utils.constants import FONT_SIZE_MAX, FONT_SIZE_MIN, ORIENTATIONS, PAGE_SIZES


def validate_options(options: ExportOptions) -> list[str]:
    """Collect every violation instead of stopping at the first one."""
    errors: list[str] = []

    if not (options.title or "").strip():
        errors.append("Title is required.")
    if not (options.author or "").strip():
        errors.append("Author is required.")

    size = options.font_size
    if isinstance(size, bool) or not isinstance(size, int) or not FONT_SIZE_MIN <= size <= FONT_SIZE_MAX:
        errors.append(f"Font size must be between {FONT_SIZE_MIN} and {FONT_SIZE_MAX} (got {size!r}).")

    try:
        ExportFormat(options.format)
    except ValueError:
        errors.append(f"Unknown export format: {options.format!r}.")
    if options.page_size not in PAGE_SIZES:
        errors.append(f"Unknown page size: {options.page_size!r}.")
    if options.orientation not in ORIENTATIONS:
        errors.append(f"Unknown orientation: {options.orientation!r}.")

    return errors


def ensure_valid(options: ExportOptions) -> ExportOptions:
    errors = validate_options(options)
    if errors:
        raise ValidationError(errors)
    return options
