from __future__ import annotations

import html
import logging
import math
import re
from xml.etree.ElementTree import Element

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from mdexport.domain.interfaces import IMarkdownConverter
from mdexport.domain.models import Block, ConversionResult, DocumentMetadata, Heading
from mdexport.utils.constants import WORDS_PER_MINUTE

logger = logging.getLogger(__name__)

_STASH_RE = re.compile("\x02[^\x03]*\x03")
_ATX_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
_PUNCT_RE = re.compile(r"[^\w\s]")
_SLUG_RE = re.compile(r"[^a-z0-9]+")


# -------------------- block capture --------------------


class _BlockCapture(Treeprocessor):
    """Keeps a reference to the finished element tree so blocks can be serialized one by one."""

    def __init__(self, md: markdown.Markdown, sink: _BlockCaptureExtension) -> None:
        super().__init__(md)
        self._sink = sink

    def run(self, root: Element) -> None:
        self._sink.root = root
        return None


class _BlockCaptureExtension(Extension):
    def __init__(self, **kwargs) -> None:
        self.root: Element | None = None
        super().__init__(**kwargs)

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.treeprocessors.register(_BlockCapture(md, self), "mdexport_blocks", 1)


def _element_text(el: Element) -> str:
    text = "".join(el.itertext())
    return " ".join(_STASH_RE.sub("", text).split())


def _serialize_block(md: markdown.Markdown, el: Element) -> str:
    saved_tail, el.tail = el.tail, None
    try:
        out = md.serializer(el)
    finally:
        el.tail = saved_tail
    for pp in md.postprocessors:
        out = pp.run(out)
    return out.strip()


# -------------------- metadata --------------------


def slugify(text: str) -> str:
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def extract_headings(markdown_text: str) -> list[Heading]:
    """ATX headings outside fenced code."""
    headings: list[Heading] = []
    in_fence = False
    for line in markdown_text.splitlines():
        if line.lstrip().startswith(("```", "~~~")):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        m = _ATX_HEADING_RE.match(line)
        if m:
            text = m.group(2).strip()
            headings.append(Heading(level=len(m.group(1)), text=text, id=slugify(text)))
    return headings


def count_words(text: str) -> int:
    return len([w for w in _PUNCT_RE.sub("", text).split() if w])


def build_metadata(markdown_text: str, headings: list[Heading] | None = None) -> DocumentMetadata:
    words = count_words(markdown_text)
    return DocumentMetadata(
        headings=headings if headings is not None else extract_headings(markdown_text),
        word_count=words,
        reading_time=math.ceil(words / WORDS_PER_MINUTE),
    )


def _flatten_toc_tokens(tokens: list[dict]) -> list[Heading]:
    out: list[Heading] = []
    for tok in tokens:
        out.append(
            Heading(level=int(tok["level"]), text=html.unescape(str(tok["name"])), id=str(tok["id"]))
        )
        out.extend(_flatten_toc_tokens(tok.get("children", [])))
    return out


def build_table_of_contents(headings: list[Heading], *, title: str = "Table of Contents") -> str:
    if not headings:
        return ""
    base = min(h.level for h in headings)
    items = "\n".join(
        f'    <li class="toc-level-{h.level - base + 1}"><a href="#{html.escape(h.id)}">'
        f"{html.escape(h.text)}</a></li>"
        for h in headings
    )
    return (
        f'<nav class="table-of-contents">\n  <h2>{html.escape(title)}</h2>\n  <ul>\n{items}\n  </ul>\n</nav>'
    )


# -------------------- regex fallback --------------------

_FENCE_OPEN_RE = re.compile(r"^\s*(```|~~~)\s*([\w+-]*)\s*$")
_UL_ITEM_RE = re.compile(r"^\s*[*+-]\s+(.*)$")
_OL_ITEM_RE = re.compile(r"^\s*\d+\.\s+(.*)$")
_QUOTE_RE = re.compile(r"^\s*>\s?(.*)$")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)\s]*)(?:\s+\"[^\"]*\")?\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)\s]*)(?:\s+\"[^\"]*\")?\)")
_BOLD_RE = re.compile(r"(\*\*|__)(.+?)\1")
_ITALIC_RE = re.compile(r"(?<![\w*])([*_])(?!\s)(.+?)(?<!\s)\1(?![\w*])")


def _inline_simple(text: str) -> str:
    codes: list[str] = []

    def stash(m: re.Match) -> str:
        codes.append(f"<code>{html.escape(m.group(1))}</code>")
        return f"\x00{len(codes) - 1}\x00"

    text = _INLINE_CODE_RE.sub(stash, text)
    text = _IMAGE_RE.sub(r'<img alt="\1" src="\2" style="max-width: 100%; height: auto;" />', text)
    text = _LINK_RE.sub(r'<a href="\2" target="_blank" rel="noopener noreferrer">\1</a>', text)
    text = _BOLD_RE.sub(r"<strong>\2</strong>", text)
    text = _ITALIC_RE.sub(r"<em>\2</em>", text)
    return re.sub("\x00(\\d+)\x00", lambda m: codes[int(m.group(1))], text)


def _split_chunks(markdown_text: str) -> list[list[str]]:
    chunks: list[list[str]] = []
    current: list[str] = []
    fence: str | None = None

    def flush() -> None:
        nonlocal current
        if current:
            chunks.append(current)
            current = []

    for line in markdown_text.splitlines():
        m = _FENCE_OPEN_RE.match(line)
        if fence is not None:
            current.append(line)
            if m and m.group(1) == fence and not m.group(2):
                fence = None
                flush()
            continue
        if m:
            flush()
            fence = m.group(1)
            current.append(line)
        elif not line.strip():
            flush()
        elif _ATX_HEADING_RE.match(line):
            flush()
            chunks.append([line])
        else:
            current.append(line)
    flush()
    return chunks


def _convert_chunk(lines: list[str]) -> Block:
    first = lines[0]
    fence = _FENCE_OPEN_RE.match(first)
    if fence:
        body = lines[1:-1] if len(lines) > 1 and _FENCE_OPEN_RE.match(lines[-1]) else lines[1:]
        lang = fence.group(2)
        cls = f' class="language-{html.escape(lang)}"' if lang else ""
        code = html.escape("\n".join(body))
        return Block(tag="pre", html=f"<pre><code{cls}>{code}</code></pre>", text="\n".join(body))

    heading = _ATX_HEADING_RE.match(first)
    if heading and len(lines) == 1:
        level = len(heading.group(1))
        text = heading.group(2).strip()
        return Block(
            tag=f"h{level}",
            html=f'<h{level} id="{slugify(text)}">{_inline_simple(text)}</h{level}>',
            text=text,
        )

    plain = " ".join(line.strip() for line in lines)
    if all(_QUOTE_RE.match(line) for line in lines):
        inner = "<br>".join(_inline_simple(_QUOTE_RE.match(line).group(1)) for line in lines)
        return Block(tag="blockquote", html=f"<blockquote><p>{inner}</p></blockquote>", text=plain)

    for tag, item_re in (("ul", _UL_ITEM_RE), ("ol", _OL_ITEM_RE)):
        if all(item_re.match(line) for line in lines):
            items = "".join(f"<li>{_inline_simple(item_re.match(line).group(1))}</li>" for line in lines)
            return Block(tag=tag, html=f"<{tag}>{items}</{tag}>", text=plain)

    inner = "<br>".join(_inline_simple(line.strip()) for line in lines)
    return Block(tag="p", html=f"<p>{inner}</p>", text=plain)


def convert_simple(markdown_text: str) -> tuple[str, tuple[Block, ...]]:
    """Regex based converter used when the real parser fails. Always yields HTML."""
    blocks = tuple(_convert_chunk(chunk) for chunk in _split_chunks(markdown_text))
    return "\n".join(b.html for b in blocks), blocks


# -------------------- converter --------------------


class MarkdownConverter(IMarkdownConverter):
    """
    Converts Markdown to an HTML fragment with GitHub flavoured extensions.

    Besides the HTML string it returns the top-level blocks (headings,
    paragraphs, lists, code, tables ...) so later stages can work on the
    block sequence instead of re-parsing markup.
    """

    EXTENSIONS = [
        "extra",
        "codehilite",
        "toc",
        "sane_lists",
        "pymdownx.tilde",
        "pymdownx.tasklist",
        "pymdownx.magiclink",
    ]

    EXTENSION_CONFIGS = {
        "codehilite": {"guess_lang": True, "noclasses": True},
        "pymdownx.tilde": {"subscript": False},
        "pymdownx.tasklist": {"custom_checkbox": False},
    }

    def to_html(self, markdown_text: str, *, include_metadata: bool = False) -> ConversionResult:
        if not markdown_text or not isinstance(markdown_text, str):
            return ConversionResult(
                html="", metadata=DocumentMetadata() if include_metadata else None
            )

        try:
            body, blocks, toc_headings = self._convert(markdown_text)
            degraded = False
        except Exception:
            logger.warning("Markdown parser failed; using simplified conversion", exc_info=True)
            body, blocks = convert_simple(markdown_text)
            toc_headings = None
            degraded = True

        metadata = build_metadata(markdown_text, toc_headings) if include_metadata else None
        return ConversionResult(html=body, blocks=blocks, metadata=metadata, degraded=degraded)

    # -------------------- helpers --------------------

    def _convert(self, markdown_text: str) -> tuple[str, tuple[Block, ...], list[Heading]]:
        capture = _BlockCaptureExtension()
        md = markdown.Markdown(
            extensions=[*self.EXTENSIONS, capture],
            extension_configs=self.EXTENSION_CONFIGS,
            output_format="html",
        )
        body = md.convert(markdown_text)

        blocks: tuple[Block, ...] = ()
        if capture.root is not None:
            blocks = tuple(
                Block(tag=el.tag, html=_serialize_block(md, el), text=_element_text(el))
                for el in capture.root
                if isinstance(el.tag, str)
            )
        headings = _flatten_toc_tokens(getattr(md, "toc_tokens", []))
        return body, blocks, headings
