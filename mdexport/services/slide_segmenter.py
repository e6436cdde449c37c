from __future__ import annotations

from collections.abc import Iterable

from mdexport.domain.models import Block, ConversionResult, SlideRecord

SPLIT_TAGS = frozenset({"h1", "h2"})
UNTITLED_DOCUMENT = "Untitled"


def to_slides(
    source: ConversionResult | Iterable[Block],
    *,
    title: str,
    author: str,
    description: str = "",
) -> list[SlideRecord]:
    """
    Split converted markdown into slides at level-1/level-2 headings.

    Index 0 is a synthesized title slide built from the document options.
    Blocks before the first qualifying heading are dropped; without any
    qualifying heading every block lands in a single catch-all slide.
    Content slides are numbered from 2.
    """
    blocks = source.blocks if isinstance(source, ConversionResult) else tuple(source)
    doc_title = title.strip() or UNTITLED_DOCUMENT

    slides: list[SlideRecord] = [
        SlideRecord(
            title=doc_title,
            number=1,
            kind="title",
            subtitle=description.strip(),
            author=author.strip(),
        )
    ]

    if not any(b.tag in SPLIT_TAGS for b in blocks):
        slides.append(SlideRecord(title=doc_title, content=tuple(b.html for b in blocks), number=2))
        return slides

    current_title: str | None = None
    current: list[str] = []

    def flush() -> None:
        if current_title is None:
            return
        number = len(slides) + 1
        slides.append(
            SlideRecord(title=current_title or f"Slide {number}", content=tuple(current), number=number)
        )

    for block in blocks:
        if block.tag in SPLIT_TAGS:
            flush()
            current_title = block.text.strip()
            current = []
        elif current_title is not None:
            current.append(block.html)
    flush()
    return slides
