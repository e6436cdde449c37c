from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Literal


class ExportFormat(str, Enum):
    PRINT = "print"
    WORD = "word"
    EBOOK = "ebook"
    SLIDES = "slides"


PageSize = Literal["A4", "Letter", "Legal"]
Orientation = Literal["portrait", "landscape"]
ColorTarget = Literal["screen", "print"]
SlideKind = Literal["title", "content"]


@dataclass(frozen=True)
class ExportOptions:
    """Presentation options for one export. Validated by the options validator."""

    format: ExportFormat = ExportFormat.PRINT
    title: str = ""
    author: str = ""
    description: str = ""
    page_size: PageSize = "A4"
    orientation: Orientation = "portrait"
    font_size: int = 12
    font_family: str = "Arial"
    theme_name: str = "default"
    include_toc: bool = True
    include_page_numbers: bool = True
    header_footer: bool = True
    watermark_text: str = ""
    custom_css: str = ""

    def replace(self, **changes) -> ExportOptions:
        return replace(self, **changes)


@dataclass(frozen=True)
class ThemeConfig:
    name: str
    primary_color: str
    background_color: str
    accent_color: str


@dataclass(frozen=True)
class HostTheme:
    """Theme descriptor of the hosting editor (not the export theme)."""

    id: str
    background: str
    text: str
    primary: str
    accent: str
    surface: str = ""
    gradient: str = ""


@dataclass(frozen=True)
class ThemeProbe:
    """
    Host environment signals used for dark/light heuristics.
    Every field is optional; None means "no opinion".
    """

    host_theme: HostTheme | None = None
    data_theme: str | None = None
    body_classes: frozenset[str] = frozenset()
    prefers_dark: bool | None = None
    stored_preference: str | None = None


@dataclass(frozen=True)
class ThemeColors:
    title_color: str
    body_text_color: str
    author_color: str
    border_color: str
    background_color: str
    accent_color: str
    table_header_color: str
    muted_background: str
    is_dark: bool


@dataclass(frozen=True)
class Block:
    """One top-level block of converted markdown (heading, paragraph, list, ...)."""

    tag: str
    html: str
    text: str = ""


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    id: str


@dataclass(frozen=True)
class DocumentMetadata:
    headings: list[Heading] = field(default_factory=list)
    word_count: int = 0
    reading_time: int = 0


@dataclass(frozen=True)
class ConversionResult:
    html: str
    blocks: tuple[Block, ...] = ()
    metadata: DocumentMetadata | None = None
    degraded: bool = False


@dataclass(frozen=True)
class SlideRecord:
    title: str
    content: tuple[str, ...] = ()
    number: int = 1
    kind: SlideKind = "content"
    subtitle: str = ""
    author: str = ""


class ExportPhase(IntEnum):
    INITIALIZING = 10
    PROCESSING = 30
    GENERATING = 50
    STYLING = 70
    FINALIZING = 90
    COMPLETE = 100


@dataclass
class ExportState:
    is_exporting: bool = False
    progress: int = 0

    def advance(self, phase: ExportPhase) -> None:
        self.is_exporting = True
        self.progress = int(phase)

    def reset(self) -> None:
        self.is_exporting = False
        self.progress = 0


@dataclass(frozen=True)
class GeneratedDocument:
    format: ExportFormat
    markup: str
    filename: str
    mime_type: str


@dataclass(frozen=True)
class ExportOutcome:
    success: bool
    message: str
    document: GeneratedDocument | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class GenerationContext:
    """Everything a generator needs to render its four document parts."""

    options: ExportOptions
    conversion: ConversionResult
    colors: ThemeColors
    generated_on: str = ""
    slides: tuple[SlideRecord, ...] = ()

    @property
    def headings(self) -> list[Heading]:
        return self.conversion.metadata.headings if self.conversion.metadata else []
