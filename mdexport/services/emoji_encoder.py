from __future__ import annotations

import re

from mdexport.utils.constants import EMOJI_FONT_STACK

# Pictographic code points. Plain text marks (check/cross/star outlines) are
# left out on purpose; the colour table below handles those.
_EMOJI_BASE = (
    "["
    "\U0001F000-\U0001F0FF"  # mahjong, domino, playing cards
    "\U0001F170-\U0001F1E5"  # enclosed alphanumeric supplement (before regional indicators)
    "\U0001F200-\U0001F2FF"  # enclosed ideographic supplement
    "\U0001F300-\U0001F5FF"  # misc symbols and pictographs
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F680-\U0001F6FF"  # transport and map
    "\U0001F780-\U0001F7FF"  # geometric shapes extended
    "\U0001F900-\U0001F9FF"  # supplemental symbols and pictographs
    "\U0001FA70-\U0001FAFF"  # symbols and pictographs extended-A
    "\u2600-\u2604\u2607-\u26FF"  # misc symbols, minus outline stars
    "\u2700-\u2712\u2715\u2716\u2719-\u27BF"  # dingbats, minus text check/ballot marks
    "\u231A\u231B\u2328\u23CF\u23E9-\u23F3\u23F8-\u23FA"  # misc technical
    "\u2B05-\u2B07\u2B1B\u2B1C\u2B50\u2B55"  # arrows, squares, star, circle
    "\u2934\u2935\u3030\u303D\u3297\u3299"
    "]"
)
_SKIN_TONE = "[\U0001F3FB-\U0001F3FF]"
_MARKS = "[\uFE0E\uFE0F\u20E3]"
_FLAG = "[\U0001F1E6-\U0001F1FF]{2}"
_KEYCAP = "[0-9#*]\uFE0F?\u20E3"
_TAGS = "[\U000E0020-\U000E007F]"  # subdivision flag tag sequences

_PICTO = f"{_EMOJI_BASE}{_SKIN_TONE}?{_MARKS}*{_TAGS}*"
EMOJI_CLUSTER = f"(?:{_FLAG}|{_KEYCAP}|{_PICTO}(?:\u200D{_PICTO})*)"

# Segments that must be copied verbatim: already wrapped emoji, raw text elements, tags.
_SKIP = (
    r"<span\b[^>]*\bclass=\"emoji[^\"]*\"[^>]*>.*?</span>"
    r"|<(?P<raw>script|style|title|textarea)\b[^>]*>.*?</(?P=raw)\s*>"
    r"|<!--.*?-->"
    r"|<[^>]*>"
)

_PASS_ONE_RE = re.compile(f"(?P<skip>{_SKIP})|(?P<emoji>{EMOJI_CLUSTER})", re.DOTALL | re.IGNORECASE)

# High-frequency glyphs that get a literal colour. Pictographs are coloured
# while pass 1 wraps them; pass 2 catches the text-style marks pass 1 skips.
COLOR_OVERRIDES: dict[str, str] = {
    "✅": "#22c55e",  # white heavy check mark
    "✔": "#16a34a",  # heavy check mark
    "✓": "#16a34a",  # check mark
    "❌": "#ef4444",  # cross mark
    "✖": "#dc2626",  # heavy multiplication x
    "✗": "#dc2626",  # ballot x
    "✘": "#dc2626",  # heavy ballot x
    "⭐": "#f59e0b",  # star
    "★": "#f59e0b",  # black star
    "☆": "#f59e0b",  # white star
    "✨": "#fbbf24",  # sparkles
    "\U0001F680": "#6366f1",  # rocket
    "\U0001F525": "#f97316",  # fire
    "\U0001F4A1": "#eab308",  # light bulb
    "⚠": "#f59e0b",  # warning sign
    "❤": "#ef4444",  # heavy heart
    "\U0001F389": "#ec4899",  # party popper
}

_PASS_TWO_RE = re.compile(
    f"(?P<skip>{_SKIP})|(?P<glyph>(?:{'|'.join(re.escape(g) for g in COLOR_OVERRIDES)})\uFE0F?)",
    re.DOTALL | re.IGNORECASE,
)

_EMOJI_STYLE = (
    "color: inherit !important; "
    f"font-family: {EMOJI_FONT_STACK}; "
    "font-style: normal; font-weight: normal; "
    "-webkit-text-fill-color: initial; "
    "mso-font-charset: 0; mso-generic-font-family: auto; "
    "mso-ascii-font-family: 'Segoe UI Emoji'; mso-hansi-font-family: 'Segoe UI Emoji'"
)


def _wrap(glyph: str, *, color: str | None = None) -> str:
    if color is None:
        return f'<span class="emoji" role="img" aria-hidden="false" style="{_EMOJI_STYLE}">{glyph}</span>'
    style = _EMOJI_STYLE.replace("color: inherit !important", f"color: {color} !important")
    return f'<span class="emoji emoji-colored" role="img" style="{style}">{glyph}</span>'


def _pass_one(html: str) -> str:
    def repl(m: re.Match) -> str:
        if m.group("skip") is not None:
            return m.group("skip")
        cluster = m.group("emoji")
        return _wrap(cluster, color=COLOR_OVERRIDES.get(cluster.rstrip("\uFE0F")))

    return _PASS_ONE_RE.sub(repl, html)


def _pass_two(html: str) -> str:
    def repl(m: re.Match) -> str:
        if m.group("skip") is not None:
            return m.group("skip")
        glyph = m.group("glyph")
        return _wrap(glyph, color=COLOR_OVERRIDES[glyph.rstrip("\uFE0F")])

    return _PASS_TWO_RE.sub(repl, html)


def preserve_emoji(html: str) -> str:
    """
    Wrap emoji in spans that survive palette overrides.

    Only text is touched; tags, comments, script/style/title content and
    spans produced by an earlier run are copied unchanged, so the transform
    is idempotent.
    """
    if not html:
        return html
    return _pass_two(_pass_one(html))


def count_emoji(html: str) -> int:
    """Number of emoji clusters in text that are not wrapped yet."""
    return sum(1 for m in _PASS_ONE_RE.finditer(html or "") if m.group("emoji") is not None)
