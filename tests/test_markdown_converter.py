import re

from mdexport.domain.models import Heading
from mdexport.services.markdown_converter import (
    MarkdownConverter,
    build_metadata,
    build_table_of_contents,
    convert_simple,
    count_words,
    extract_headings,
    slugify,
)


def test_basic_conversion_and_blocks(converter: MarkdownConverter):
    res = converter.to_html("# Title\n\nHello **world**\n\n- a\n- b\n")
    assert re.search(r"<h1[^>]*>Title</h1>", res.html)
    assert "<strong>world</strong>" in res.html
    assert [b.tag for b in res.blocks] == ["h1", "p", "ul"]
    assert res.blocks[0].text == "Title"
    assert res.blocks[1].html == "<p>Hello <strong>world</strong></p>"
    assert res.degraded is False
    assert res.metadata is None


def test_empty_input(converter: MarkdownConverter):
    res = converter.to_html("", include_metadata=True)
    assert res.html == ""
    assert res.blocks == ()
    assert res.metadata is not None and res.metadata.headings == []


def test_gfm_features(converter: MarkdownConverter):
    md = "| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~\n\n- [x] done\n\n```python\nprint(1)\n```\n"
    res = converter.to_html(md)
    assert "<table>" in res.html
    assert "<del>gone</del>" in res.html
    assert 'type="checkbox"' in res.html
    assert "print" in res.html


def test_metadata_headings_have_ids(converter: MarkdownConverter):
    res = converter.to_html("# Intro\n\n## Next Step\n\ntext", include_metadata=True)
    headings = res.metadata.headings
    assert [(h.level, h.text, h.id) for h in headings] == [(1, "Intro", "intro"), (2, "Next Step", "next-step")]
    assert 'id="next-step"' in res.html


def test_falls_back_to_simple_conversion(monkeypatch, converter: MarkdownConverter):
    def boom(self, text):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(MarkdownConverter, "_convert", boom)
    res = converter.to_html("# Head\n\nsome *text* and `code`", include_metadata=True)
    assert res.degraded is True
    assert '<h1 id="head">Head</h1>' in res.html
    assert "<em>text</em>" in res.html
    assert "<code>code</code>" in res.html
    assert res.metadata.headings[0].text == "Head"


def test_convert_simple_blocks():
    html, blocks = convert_simple("## Sub\n\n> quoted\n\n1. one\n2. two\n\n```js\nx < 1\n```")
    assert [b.tag for b in blocks] == ["h2", "blockquote", "ol", "pre"]
    assert '<code class="language-js">x &lt; 1</code>' in html
    assert "<li>one</li><li>two</li>" in html


def test_extract_headings_skips_code_fences():
    md = "# Real\n\n```\n# not a heading\n```\n\n### Deep ###\n"
    assert [(h.level, h.text) for h in extract_headings(md)] == [(1, "Real"), (3, "Deep")]


def test_word_count_and_reading_time():
    assert count_words("Hello, world! It's fine.") == 4
    meta = build_metadata(" ".join(["word"] * 401))
    assert meta.word_count == 401
    assert meta.reading_time == 3


def test_slugify():
    assert slugify("Hello, World!") == "hello-world"


def test_table_of_contents():
    toc = build_table_of_contents([Heading(2, "A & B", "a-b"), Heading(3, "C", "c")])
    assert '<li class="toc-level-1"><a href="#a-b">A &amp; B</a></li>' in toc
    assert 'class="toc-level-2"' in toc
    assert build_table_of_contents([]) == ""
