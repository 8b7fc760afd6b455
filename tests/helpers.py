from fontprint.core.font_classifier import classify
from fontprint.core.hasher import fingerprint_hash
from fontprint.core.models import FontPrint, GlyphBox, SourceCategory


def make_box(x0, y0, width, height, text="word", confidence=None) -> GlyphBox:
    return GlyphBox(x0=x0, y0=y0, x1=x0 + width, y1=y0 + height, text=text, confidence=confidence)


def make_page_boxes() -> list:
    """
    Three lines of two words each on a 200x300 page.

    Lines start at y=30, 70, 110 with 14px tall words, so line centers are
    40px apart. Words span x=20..80 and x=90..170.
    """
    boxes = []
    for y0 in (30, 70, 110):
        boxes.append(make_box(20, y0, 60, 14, text="apple"))
        boxes.append(make_box(90, y0, 80, 14, text="mist"))
    return boxes


def make_fontprint(
    vector,
    *,
    source: SourceCategory = SourceCategory.RECOGNIZED,
    font_size=None,
    line_gap=None,
    candidates=None,
    fontprint_id="fp-test",
) -> FontPrint:
    """Builds a FontPrint directly from an already-normalized vector."""
    if candidates is None:
        candidates = classify(1.2)
    return FontPrint(
        id=fontprint_id,
        created_at="2026-01-01T00:00:00+00:00",
        source=source,
        features={
            "font_candidates": [c.to_dict() for c in candidates],
            "avg_font_size_px": font_size,
            "line_gap_px": line_gap,
            "margin_mm": None,
            "glyph_signatures": [],
        },
        fingerprint_hash=fingerprint_hash(source, vector, candidates),
        vector=tuple(float(v) for v in vector),
    )
