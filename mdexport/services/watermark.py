from __future__ import annotations

import base64
import binascii
import hashlib
import json
import logging
import random
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from mdexport.utils.html_utils import escape_html

logger = logging.getLogger(__name__)

FORENSIC_META_NAME = "x-document-watermark"


@dataclass(frozen=True)
class Placement:
    top: float  # percent
    left: float  # percent
    rotation: int  # degrees
    opacity: float
    size_em: float


# Diagonal tiling: cropping any region of the page keeps at least one copy.
PLACEMENTS: tuple[Placement, ...] = (
    Placement(50, 50, -45, 0.10, 4.0),
    Placement(15, 20, -30, 0.06, 2.2),
    Placement(15, 80, -60, 0.06, 2.2),
    Placement(85, 20, -60, 0.06, 2.2),
    Placement(85, 80, -30, 0.06, 2.2),
    Placement(32, 50, -15, 0.05, 1.6),
    Placement(68, 50, 15, 0.05, 1.6),
)


@dataclass(frozen=True)
class ForensicPayload:
    text: str
    timestamp: str
    id: str
    checksum: str

    @property
    def valid(self) -> bool:
        return self.checksum == _checksum(self.text, self.timestamp, self.id)


def _checksum(text: str, timestamp: str, ident: str) -> str:
    return hashlib.sha256(f"{text}|{timestamp}|{ident}".encode("utf-8")).hexdigest()[:16]


def encode_forensic_payload(text: str, *, now: datetime | None = None, rng: random.Random | None = None) -> str:
    ts = (now or datetime.now(timezone.utc)).isoformat()
    ident = f"{(rng or random.SystemRandom()).getrandbits(64):016x}"
    body = {"t": text, "ts": ts, "id": ident, "c": _checksum(text, ts, ident)}
    raw = json.dumps(body, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


_META_RE = re.compile(rf'<meta name="{FORENSIC_META_NAME}" content="([A-Za-z0-9+/=]+)"')


def decode_forensic_payload(doc: str) -> ForensicPayload | None:
    """Recover the hidden watermark copy from a generated document, if present."""
    m = _META_RE.search(doc or "")
    if not m:
        return None
    try:
        data = json.loads(base64.b64decode(m.group(1)).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Watermark metadata present but unreadable")
        return None
    return ForensicPayload(text=data["t"], timestamp=data["ts"], id=data["id"], checksum=data["c"])


# -------------------- markup --------------------

WATERMARK_CSS = """
.wm-layer, .wm-print-overlay {
    position: fixed;
    inset: 0;
    overflow: hidden;
    pointer-events: none;
    z-index: 9999;
    user-select: none;
    -webkit-user-select: none;
    -moz-user-select: none;
    -ms-user-select: none;
    -webkit-user-drag: none;
    -webkit-print-color-adjust: exact;
    print-color-adjust: exact;
    color-adjust: exact;
}
.wm-mark {
    position: absolute;
    white-space: nowrap;
    font-weight: 700;
    color: #808080;
    transform-origin: center;
}
.wm-print-overlay { display: none; }
.wm-forensic { display: none !important; }
@media print {
    .wm-layer { position: fixed; }
    .wm-print-overlay {
        display: flex;
        align-items: center;
        justify-content: center;
    }
    .wm-print-overlay span {
        font-size: 6em;
        font-weight: 700;
        color: #808080;
        opacity: 0.08;
        transform: rotate(-45deg);
    }
}
"""

PROTECTION_SCRIPT = """
(function () {
    var SELECTOR = '.wm-layer, .wm-mark, .wm-print-overlay, .wm-forensic';
    function isWatermark(node) {
        return !!(node && node.nodeType === 1 && node.matches && node.matches(SELECTOR));
    }
    ['contextmenu', 'selectstart', 'dragstart'].forEach(function (evt) {
        document.addEventListener(evt, function (e) {
            if (e.target && e.target.closest && e.target.closest(SELECTOR)) {
                e.preventDefault();
            }
        }, true);
    });
    if (window.MutationObserver) {
        new MutationObserver(function (mutations) {
            mutations.forEach(function (m) {
                Array.prototype.forEach.call(m.removedNodes, function (node) {
                    if (isWatermark(node)) {
                        console.warn('Watermark element removed', node.className);
                    }
                });
            });
        }).observe(document.documentElement, { childList: true, subtree: true });
    }
    var originalRemove = Element.prototype.remove;
    if (originalRemove && !originalRemove.__wmGuarded) {
        var guarded = function () {
            if (isWatermark(this)) {
                console.warn('Watermark removal attempted', this.className);
            }
            return originalRemove.apply(this, arguments);
        };
        guarded.__wmGuarded = true;
        Element.prototype.remove = guarded;
    }
})();
"""


def _layer(text: str) -> str:
    marks = "\n".join(
        f'    <div class="wm-mark" style="top: {p.top}%; left: {p.left}%; '
        f"transform: translate(-50%, -50%) rotate({p.rotation}deg); "
        f'opacity: {p.opacity}; font-size: {p.size_em}em;">{text}</div>'
        for p in PLACEMENTS
    )
    return f'<div class="wm-layer" aria-hidden="true">\n{marks}\n</div>'


def _insert_after_open(doc: str, tag: str, markup: str) -> str | None:
    m = re.search(rf"<{tag}\b[^>]*>", doc, re.IGNORECASE)
    if not m:
        return None
    return doc[: m.end()] + "\n" + markup + doc[m.end() :]


def _insert_before_close(doc: str, tag: str, markup: str, *, first: bool = False) -> str | None:
    # head closes before any content; body closes after it
    lowered = doc.lower()
    idx = lowered.find(f"</{tag}>") if first else lowered.rfind(f"</{tag}>")
    if idx < 0:
        return None
    return doc[:idx] + markup + "\n" + doc[idx:]


def inject_watermark(
    doc: str,
    text: str | None,
    *,
    protect: bool = True,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """
    Overlay repeated watermark copies and a hidden forensic copy.

    Deterrence only: the script (protect=True, browsers) logs removal
    attempts but never blocks them. Empty text returns the document unchanged.
    """
    if not text or not text.strip():
        return doc

    safe = escape_html(text.strip())
    payload = encode_forensic_payload(text.strip(), now=now, rng=rng)

    head = f'<meta name="{FORENSIC_META_NAME}" content="{payload}">\n<style>{WATERMARK_CSS}</style>'
    body_top = "\n".join(
        [
            _layer(safe),
            f'<div class="wm-print-overlay" aria-hidden="true"><span>{safe}</span></div>',
            f'<div class="wm-forensic" hidden data-wm="{payload}"></div>',
        ]
    )
    body_end = f"<script>{PROTECTION_SCRIPT}</script>" if protect else ""

    out = _insert_before_close(doc, "head", head, first=True)
    if out is None:
        # fragment without a head
        out = head + "\n" + doc
    with_body = _insert_after_open(out, "body", body_top)
    out = with_body if with_body is not None else body_top + "\n" + out

    if body_end:
        closed = _insert_before_close(out, "body", body_end)
        out = closed if closed is not None else out + "\n" + body_end

    logger.debug("Watermark injected (%d placements, protect=%s)", len(PLACEMENTS), protect)
    return out
