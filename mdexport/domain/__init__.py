"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .errors import (
    EmptyContentError,
    ExportError,
    GenerationError,
    PopupBlockedError,
    ValidationError,
)
from .interfaces import (
    IDownloadTarget,
    IFormatGenerator,
    IMarkdownConverter,
    INotifier,
    IPrintHost,
    IThemeContext,
)
from .models import ExportFormat, ExportOptions, ExportPhase, ExportState, SlideRecord

__all__ = [
    "IMarkdownConverter",
    "IFormatGenerator",
    "IPrintHost",
    "IDownloadTarget",
    "IThemeContext",
    "INotifier",
    "ExportError",
    "EmptyContentError",
    "ValidationError",
    "PopupBlockedError",
    "GenerationError",
    "ExportFormat",
    "ExportOptions",
    "ExportPhase",
    "ExportState",
    "SlideRecord",
]
