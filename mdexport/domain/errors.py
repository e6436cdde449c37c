from __future__ import annotations

from collections.abc import Iterable

GENERIC_FAILURE = "Export failed. Please try again."


class ExportError(Exception):
    """Base class for export failures that carry a user-facing message."""

    default_message = GENERIC_FAILURE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        text = str(self).strip()
        return text or self.default_message


class EmptyContentError(ExportError):
    default_message = "Content must not be empty."


class ValidationError(ExportError):
    """All option violations, reported together."""

    default_message = "Export options are invalid."

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: list[str] = list(errors)
        super().__init__("; ".join(self.errors) or None)


class PopupBlockedError(ExportError):
    default_message = "Popup blocked. Please allow popups for this site."


class GenerationError(ExportError):
    """Unexpected failure while assembling a document. The cause is chained."""
