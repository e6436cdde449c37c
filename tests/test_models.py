from dataclasses import FrozenInstanceError

import pytest

from mdexport.domain.errors import (
    EmptyContentError,
    ExportError,
    GenerationError,
    PopupBlockedError,
    ValidationError,
)
from mdexport.domain.models import (
    ConversionResult,
    DocumentMetadata,
    ExportFormat,
    ExportOptions,
    ExportPhase,
    ExportState,
    GenerationContext,
    Heading,
)
from mdexport.services.theme_resolver import resolve_theme_colors


def test_export_options_defaults():
    o = ExportOptions()
    assert o.format is ExportFormat.PRINT
    assert o.page_size == "A4"
    assert o.orientation == "portrait"
    assert o.font_size == 12
    assert o.include_toc and o.include_page_numbers and o.header_footer
    assert o.watermark_text == ""


def test_export_options_are_frozen_and_replace_copies():
    o = ExportOptions(title="A")
    with pytest.raises(FrozenInstanceError):
        o.title = "B"  # type: ignore[misc]
    o2 = o.replace(title="B")
    assert o.title == "A"
    assert o2.title == "B"


def test_export_format_accepts_string_values():
    assert ExportFormat("slides") is ExportFormat.SLIDES
    assert ExportFormat.WORD == "word"


def test_export_state_advance_and_reset():
    s = ExportState()
    assert (s.is_exporting, s.progress) == (False, 0)
    s.advance(ExportPhase.GENERATING)
    assert (s.is_exporting, s.progress) == (True, 50)
    s.reset()
    assert (s.is_exporting, s.progress) == (False, 0)


def test_phase_percentages():
    assert [int(p) for p in ExportPhase] == [10, 30, 50, 70, 90, 100]


def test_generation_context_headings():
    colors = resolve_theme_colors("default")
    meta = DocumentMetadata(headings=[Heading(1, "Intro", "intro")])
    ctx = GenerationContext(ExportOptions(), ConversionResult(html="", metadata=meta), colors)
    assert [h.id for h in ctx.headings] == ["intro"]

    bare = GenerationContext(ExportOptions(), ConversionResult(html=""), colors)
    assert bare.headings == []


def test_error_messages():
    assert EmptyContentError().user_message == "Content must not be empty."
    assert "allow popups" in PopupBlockedError().user_message
    assert GenerationError().user_message == "Export failed. Please try again."
    assert GenerationError("boom").user_message == "boom"
    assert isinstance(ValidationError(["x"]), ExportError)


def test_validation_error_joins_all_messages():
    e = ValidationError(["Title is required.", "Author is required."])
    assert e.errors == ["Title is required.", "Author is required."]
    assert e.user_message == "Title is required.; Author is required."
    assert ValidationError([]).user_message == "Export options are invalid."
