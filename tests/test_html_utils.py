import pytest

from mdexport.utils.html_utils import (
    css_font_family,
    escape_html,
    page_dimensions,
    page_size_css,
    sanitize_filename,
)


def test_escape_html_quotes_and_tags():
    assert escape_html('<b>"x" & \'y\'</b>') == "&lt;b&gt;&quot;x&quot; &amp; &#x27;y&#x27;&lt;/b&gt;"
    assert escape_html(None) == ""


@pytest.mark.parametrize(
    "name, ext, expected",
    [
        ("My/Report:2024", ".doc", "MyReport2024.doc"),
        ("Quarterly Report", ".html", "Quarterly_Report.html"),
        ("  spaced   out  ", None, "spaced_out"),
        ("notes.html", ".html", "notes.html"),
        ("", ".doc", "document.doc"),
        ("???", ".html", "document.html"),
    ],
)
def test_sanitize_filename(name, ext, expected):
    assert sanitize_filename(name, ext) == expected


def test_sanitize_filename_truncates_stem():
    out = sanitize_filename("a" * 300, ".html")
    assert out == "a" * 100 + ".html"


def test_page_dimensions_swap_for_landscape():
    assert page_dimensions("A4", "portrait") == ("210mm", "297mm")
    assert page_dimensions("A4", "landscape") == ("297mm", "210mm")
    assert page_dimensions("Bogus", "portrait") == ("210mm", "297mm")


def test_page_size_css_page_counter():
    css = page_size_css("Letter", "portrait", page_numbers=True)
    assert "size: 8.5in 11in" in css
    assert "counter(page)" in css
    assert "counter(page)" not in page_size_css("Letter", "portrait")


def test_css_font_family_strips_breakouts():
    assert css_font_family("Times New Roman") == "Times New Roman"
    assert css_font_family("Arial'; } body { x") == "Arial  body  x"
    assert css_font_family("") == "Arial"
    assert css_font_family("';{}", default="Georgia") == "Georgia"
