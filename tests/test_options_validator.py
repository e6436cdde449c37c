import pytest

from mdexport.domain.errors import ValidationError
from mdexport.domain.models import ExportOptions
from mdexport.services.options_validator import ensure_valid, validate_options


def test_valid_options_pass(options: ExportOptions):
    assert validate_options(options) == []
    assert ensure_valid(options) is options


def test_all_errors_reported_together():
    opts = ExportOptions(title="  ", author="Ann", font_size=30)
    with pytest.raises(ValidationError) as ei:
        ensure_valid(opts)
    errors = ei.value.errors
    assert errors == ["Title is required.", "Font size must be between 8 and 24 (got 30)."]
    assert "Title is required." in ei.value.user_message
    assert "Font size" in ei.value.user_message


@pytest.mark.parametrize("size, ok", [(8, True), (24, True), (7, False), (25, False), (True, False)])
def test_font_size_bounds(size, ok):
    opts = ExportOptions(title="t", author="a", font_size=size)
    assert (validate_options(opts) == []) is ok


def test_unknown_enums():
    opts = ExportOptions(title="t", author="a").replace(format="pdf", page_size="A3", orientation="diagonal")
    errors = validate_options(opts)
    assert len(errors) == 3
    assert any("export format" in e for e in errors)
    assert any("page size" in e for e in errors)
    assert any("orientation" in e for e in errors)


def test_missing_author():
    assert validate_options(ExportOptions(title="t")) == ["Author is required."]
