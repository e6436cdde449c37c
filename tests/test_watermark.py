import random
from datetime import datetime, timezone

from mdexport.services.watermark import (
    FORENSIC_META_NAME,
    PLACEMENTS,
    decode_forensic_payload,
    encode_forensic_payload,
    inject_watermark,
)

DOC = "<html><head><title>x</title></head><body><p>content</p></body></html>"
NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_blank_text_is_noop():
    assert inject_watermark(DOC, "") == DOC
    assert inject_watermark(DOC, "   ") == DOC
    assert inject_watermark(DOC, None) == DOC


def test_marks_and_forensic_copy():
    out = inject_watermark(DOC, "CONFIDENTIAL", now=NOW, rng=random.Random(1))
    assert out.count('class="wm-mark"') == len(PLACEMENTS) == 7
    assert f'<meta name="{FORENSIC_META_NAME}"' in out
    assert 'class="wm-forensic"' in out
    assert 'class="wm-print-overlay"' in out
    assert "<p>content</p>" in out
    # layer goes right after <body>, head markup before </head>
    assert out.index('class="wm-layer"') > out.index("<body>")
    assert out.index(FORENSIC_META_NAME) < out.index("</head>")


def test_forensic_payload_round_trip_and_checksum():
    out = inject_watermark(DOC, "Internal", now=NOW, rng=random.Random(7))
    payload = decode_forensic_payload(out)
    assert payload is not None
    assert payload.text == "Internal"
    assert payload.timestamp == NOW.isoformat()
    assert len(payload.id) == 16
    assert len(payload.checksum) == 16
    assert payload.valid


def test_tampered_payload_is_invalid():
    encoded = encode_forensic_payload("a", now=NOW, rng=random.Random(3))
    payload = decode_forensic_payload(f'<meta name="{FORENSIC_META_NAME}" content="{encoded}">')
    assert payload.valid
    forged = payload.__class__(text="b", timestamp=payload.timestamp, id=payload.id, checksum=payload.checksum)
    assert not forged.valid


def test_unreadable_payload_decodes_to_none():
    assert decode_forensic_payload(DOC) is None
    assert decode_forensic_payload(f'<meta name="{FORENSIC_META_NAME}" content="bm90IGpzb24=">') is None


def test_protection_script_optional():
    assert "<script>" in inject_watermark(DOC, "W", now=NOW)
    assert "<script>" not in inject_watermark(DOC, "W", protect=False, now=NOW)


def test_text_is_escaped():
    out = inject_watermark(DOC, "<b>x</b>", now=NOW)
    assert "&lt;b&gt;x&lt;/b&gt;" in out
    assert "<b>x</b>" not in out


def test_fragment_without_head_or_body():
    out = inject_watermark("<p>frag</p>", "W", now=NOW)
    assert out.count('class="wm-mark"') == 7
    assert out.rstrip().endswith("</script>")
    assert decode_forensic_payload(out).text == "W"
