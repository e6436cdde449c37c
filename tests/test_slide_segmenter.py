from mdexport.domain.models import Block
from mdexport.services.markdown_converter import MarkdownConverter
from mdexport.services.slide_segmenter import to_slides


def test_one_slide_per_top_heading_plus_title(converter: MarkdownConverter, sample_markdown: str):
    slides = to_slides(converter.to_html(sample_markdown), title="Deck", author="Ann", description="Q1")
    # title slide + "Quarterly Report" + "Revenue" + "Outlook"
    assert len(slides) == 4
    first = slides[0]
    assert (first.kind, first.title, first.subtitle, first.author, first.number) == ("title", "Deck", "Q1", "Ann", 1)
    assert [s.title for s in slides[1:]] == ["Quarterly Report", "Revenue", "Outlook"]
    assert [s.number for s in slides] == [1, 2, 3, 4]
    assert any("<li>North</li>" in part for part in slides[2].content)


def test_content_before_first_heading_is_dropped():
    blocks = [Block("p", "<p>preamble</p>"), Block("h2", "<h2>A</h2>", "A"), Block("p", "<p>body</p>")]
    slides = to_slides(blocks, title="T", author="")
    assert len(slides) == 2
    assert slides[1].content == ("<p>body</p>",)


def test_h3_does_not_split():
    blocks = [Block("h1", "<h1>A</h1>", "A"), Block("h3", "<h3>x</h3>", "x"), Block("p", "<p>y</p>")]
    slides = to_slides(blocks, title="T", author="")
    assert len(slides) == 2
    assert slides[1].content == ("<h3>x</h3>", "<p>y</p>")


def test_no_headings_gives_single_catch_all_slide():
    blocks = [Block("p", "<p>one</p>"), Block("p", "<p>two</p>")]
    slides = to_slides(blocks, title="  ", author="")
    assert len(slides) == 2
    assert slides[0].title == "Untitled"
    assert slides[1].content == ("<p>one</p>", "<p>two</p>")


def test_empty_heading_text_gets_numbered_title():
    blocks = [Block("h2", "<h2></h2>", ""), Block("p", "<p>x</p>")]
    slides = to_slides(blocks, title="T", author="")
    assert slides[1].title == "Slide 2"
