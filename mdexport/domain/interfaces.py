from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from mdexport.domain.models import (
    ConversionResult,
    ExportFormat,
    ExportOptions,
    ExportState,
    GeneratedDocument,
    GenerationContext,
    ThemeProbe,
)


class IMarkdownConverter(Protocol):
    """Convert Markdown text to an HTML fragment plus its top-level blocks."""

    def to_html(self, markdown_text: str, *, include_metadata: bool = False) -> ConversionResult: ...


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_theme_preference(self) -> str | None: ...
    def set_theme_preference(self, value: str | None) -> None: ...
    def get_last_format(self) -> str | None: ...
    def set_last_format(self, value: str) -> None: ...
    def get_output_dir(self) -> str | None: ...
    def set_output_dir(self, value: str) -> None: ...


class IConfigService(Protocol):
    """Read-only INI style configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...


@runtime_checkable
class IThemeContext(Protocol):
    """Collects host dark-mode signals. The only impure part of theme resolution."""

    def probe(self) -> ThemeProbe: ...


@runtime_checkable
class IPrintWindow(Protocol):
    """A temporary window holding one document for printing."""

    def on_load(self, callback: Callable[[], None]) -> None: ...
    def write(self, html: str) -> None: ...
    def print(self) -> None: ...
    def close(self) -> None: ...


@runtime_checkable
class IPrintHost(Protocol):
    def open_window(self) -> IPrintWindow | None:
        """Return a new window, or None when the host refuses to open one."""
        ...

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None: ...


@runtime_checkable
class IDownloadTarget(Protocol):
    """Receives finished artifacts (browser download equivalent)."""

    def deliver(self, document: GeneratedDocument) -> Path | None: ...


@runtime_checkable
class INotifier(Protocol):
    def success(self, title: str, text: str) -> None: ...
    def failure(self, title: str, text: str) -> None: ...


ProgressListener = Callable[[ExportState], None]


class IFormatGenerator(ABC):
    """
    One export target. Implementations build the four document parts and
    assemble them into a complete standalone document.

    `prepare` converts and resolves colors, `assemble` renders; the
    orchestrator calls them separately to report progress in between.
    """

    format: ExportFormat
    label: str  # e.g. "Word document"
    extension: str  # e.g. ".doc"
    mime_type: str
    success_message: str
    uses_styling_phase: bool = False

    @abstractmethod
    def prepare(self, markdown_text: str, options: ExportOptions) -> GenerationContext:
        raise NotImplementedError

    @abstractmethod
    def build_styles(self, ctx: GenerationContext) -> str:
        raise NotImplementedError

    @abstractmethod
    def build_header(self, ctx: GenerationContext) -> str:
        raise NotImplementedError

    @abstractmethod
    def build_body(self, ctx: GenerationContext) -> str:
        raise NotImplementedError

    @abstractmethod
    def build_footer(self, ctx: GenerationContext) -> str:
        raise NotImplementedError

    @abstractmethod
    def assemble(self, ctx: GenerationContext) -> str:
        """Return the complete document markup."""
        raise NotImplementedError

    @abstractmethod
    def suggest_filename(self, options: ExportOptions, fallback: str) -> str:
        """Download-safe file name including the extension."""
        raise NotImplementedError

    def generate(self, markdown_text: str, options: ExportOptions) -> str:
        return self.assemble(self.prepare(markdown_text, options))


class IGeneratorRegistry(Protocol):
    def register(self, g: IFormatGenerator) -> None: ...
    def get(self, fmt: ExportFormat | str) -> IFormatGenerator: ...
    def all(self) -> list[IFormatGenerator]: ...
