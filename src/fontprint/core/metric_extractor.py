# -*- coding: utf-8 -*-
"""
src/fontprint/core/metric_extractor.py

Reduces the word/glyph boxes supplied by a text recognizer into raw scalar
layout metrics: dominant font height, inter-line spacing, page margins and
the median glyph aspect ratio.

Robust statistics are used throughout. Headings and large glyphs are
right-tail outliers, so the median (not the mean) is taken as the body-text
value.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence

import numpy as np

from ..config import DEFAULT_SETTINGS, Settings
from .models import GlyphBox, GlyphSignature, RawMetrics, Surface

logger = logging.getLogger(__name__)

# Characters whose shapes differ most between typefaces.
GLYPH_SAMPLE_CHARS = ("a", "e", "g", "1", "l", '"', "‘", "’", "“", "”")

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
TWIPS_PER_POINT = 20.0
MM_PER_POINT = 0.3528


# --- Robust statistics ---

def median(values: Iterable[float]) -> float:
    """
    Median of a sequence of numbers; 0 for an empty sequence.

    >>> median([1, 3, 2])
    2.0
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.median(arr))


def diffs(values: Sequence[float]) -> List[float]:
    """Differences between consecutive elements."""
    return [values[i] - values[i - 1] for i in range(1, len(values))]


def cluster_lines(y_centers: Iterable[float], threshold: float = DEFAULT_SETTINGS.line_merge_threshold_px) -> List[float]:
    """
    Merges vertical box centers into line positions.

    Centers are sorted; a center opens a new line only when it lies more than
    `threshold` pixels below the last accepted line. Closer centers are
    discarded as recognizer noise, so the first center of a line anchors it.

    >>> cluster_lines([10, 12, 13, 50])
    [10, 50]
    """
    merged: List[float] = []
    for y in sorted(y_centers):
        if not merged or y - merged[-1] > threshold:
            merged.append(y)
    return merged


def finite_or_zero(value: float) -> float:
    """Coerces NaN and infinities to 0."""
    if value is None or not math.isfinite(value):
        logger.debug(f"Non-finite metric {value!r} coerced to 0")
        return 0.0
    return float(value)


# --- Unit conversions ---

def px_to_mm(px: float, ppi: float = DEFAULT_SETTINGS.pixels_per_inch) -> float:
    """Converts pixels to millimetres, rounded to 0.1 mm."""
    return round(px / ppi * MM_PER_INCH, 1)


def pt_to_px(pt: float, ppi: float = DEFAULT_SETTINGS.pixels_per_inch) -> float:
    return pt / POINTS_PER_INCH * ppi


def twips_to_points(twips: float) -> float:
    """Converts twentieths of a point (the unit of DOCX page margins) to points."""
    return twips / TWIPS_PER_POINT


def points_to_mm(pt: float) -> float:
    return round(pt * MM_PER_POINT, 1)


def half_points_to_points(half_points: float) -> float:
    """Converts half-points (the unit of DOCX font sizes) to points."""
    return half_points * 0.5


# --- Extraction ---

def usable_boxes(boxes: Iterable[GlyphBox], settings: Settings = DEFAULT_SETTINGS) -> List[GlyphBox]:
    """
    Drops boxes without visible text or below the confidence threshold.

    Boxes carrying no confidence value are always kept.
    """
    kept = []
    for box in boxes:
        if not box.text.strip():
            continue
        if box.confidence is not None and box.confidence < settings.ocr_confidence_threshold:
            logger.debug(f"Rejected box '{box.text}' with confidence {box.confidence:.2f}")
            continue
        kept.append(box)
    return kept


def extract_raw_metrics(
    boxes: Sequence[GlyphBox],
    surface: Surface,
    settings: Settings = DEFAULT_SETTINGS,
) -> RawMetrics:
    """
    Computes raw layout metrics from recognized boxes.

    Args:
        boxes (Sequence[GlyphBox]): The boxes of one page, already filtered.
        surface (Surface): Page dimensions in pixels, used for the right and
                           bottom margins.
        settings (Settings): Clustering and gap thresholds.

    Returns:
        RawMetrics: The metrics, or the "no layout data" sentinel when no box
                    was supplied. Never contains NaN or infinities.
    """
    if not boxes:
        logger.info("No glyph boxes supplied; returning 'no layout data' metrics.")
        return RawMetrics.no_layout_data()

    font_size = median(b.height for b in boxes)

    line_positions = cluster_lines((b.center_y for b in boxes), settings.line_merge_threshold_px)
    line_deltas = [d for d in diffs(line_positions) if d > settings.min_line_gap_px]
    line_gap = median(line_deltas)
    logger.debug(f"Detected {len(line_positions)} lines, line gap median {line_gap:.2f}px")

    # Boxes running past the declared surface leave a zero margin on that side.
    left = max(0.0, min(b.x0 for b in boxes))
    right = max(0.0, surface.width - max(b.x1 for b in boxes))
    top = max(0.0, min(b.y0 for b in boxes))
    bottom = max(0.0, surface.height - max(b.y1 for b in boxes))

    # +1 keeps zero-height boxes from dividing by zero.
    aspect = median(b.width / (b.height + 1) for b in boxes)

    return RawMetrics(
        font_size_px=finite_or_zero(font_size),
        line_gap_px=finite_or_zero(line_gap),
        left_margin_px=finite_or_zero(left),
        right_margin_px=finite_or_zero(right),
        top_margin_px=finite_or_zero(top),
        bottom_margin_px=finite_or_zero(bottom),
        aspect=finite_or_zero(aspect),
    )


def sample_glyph_signatures(
    boxes: Sequence[GlyphBox],
    settings: Settings = DEFAULT_SETTINGS,
) -> List[GlyphSignature]:
    """
    Picks boxes containing typeface-revealing characters as glyph signatures.

    Only the first `glyph_scan_limit` boxes are scanned and at most
    `glyph_sample_limit` signatures are returned.
    """
    signatures: List[GlyphSignature] = []
    for box in boxes[: settings.glyph_scan_limit]:
        if len(signatures) >= settings.glyph_sample_limit:
            break
        text = box.text.strip()
        if not any(ch in text for ch in GLYPH_SAMPLE_CHARS):
            continue
        if box.width <= 0 or box.height <= 0:
            continue
        signatures.append(GlyphSignature(glyph=text[0], box=(box.x0, box.y0, box.width, box.height)))
    return signatures


def margins_px_to_mm(metrics: RawMetrics, ppi: float = DEFAULT_SETTINGS.pixels_per_inch) -> Optional[dict]:
    """Page margins of `metrics` in millimetres, or None without layout data."""
    if metrics.is_empty:
        return None
    return {
        "left": px_to_mm(metrics.left_margin_px, ppi),
        "right": px_to_mm(metrics.right_margin_px, ppi),
        "top": px_to_mm(metrics.top_margin_px, ppi),
        "bottom": px_to_mm(metrics.bottom_margin_px, ppi),
    }
