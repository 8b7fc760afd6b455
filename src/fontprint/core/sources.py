# -*- coding: utf-8 -*-
"""
src/fontprint/core/sources.py

The three ways a document's layout metrics can be obtained, as one tagged
variant. A source is chosen once at pipeline entry; everything downstream
only sees the `LayoutMetrics` it produces.

- RecognizedSource: word boxes from a text recognizer (images, rendered PDFs).
- StructuredSource: margins and font size declared by a structured document
  format (DOCX page settings).
- VirtualSource: plain text with no layout of its own, measured against an
  assumed rendering.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Sequence

from ..config import DEFAULT_SETTINGS, Settings
from .metric_extractor import (
    extract_raw_metrics,
    half_points_to_points,
    margins_px_to_mm,
    points_to_mm,
    pt_to_px,
    px_to_mm,
    sample_glyph_signatures,
    twips_to_points,
    usable_boxes,
)
from .models import VECTOR_LENGTHS, FontCandidate, GlyphBox, LayoutMetrics, SourceCategory, Surface

logger = logging.getLogger(__name__)

# Word's default body size when a document declares none.
DEFAULT_STRUCTURED_FONT_SIZE_PT = 11.0
MARGIN_SIDES = ("top", "bottom", "left", "right")

STRUCTURED_CANDIDATE = FontCandidate("(docx-styles)", 1.0)
VIRTUAL_CANDIDATE = FontCandidate("(virtual-render)", 1.0)


def _empty_metrics(category: SourceCategory, extras: Optional[Dict[str, Any]] = None) -> LayoutMetrics:
    """The "no layout data" result: null scalars and a zero-filled vector."""
    return LayoutMetrics(
        source=category,
        font_size_px=None,
        line_gap_px=None,
        margin_mm=None,
        vector_values=(0.0,) * VECTOR_LENGTHS[category],
        candidates=(),
        extras=extras or {},
    )


class MetricSource(ABC):
    """A producer of layout metrics for one document."""

    category: SourceCategory

    @abstractmethod
    def extract(self, settings: Settings = DEFAULT_SETTINGS) -> LayoutMetrics:
        """Measures the document and returns its layout metrics."""


class RecognizedSource(MetricSource):
    """Layout measured from recognizer boxes on a page surface."""

    category = SourceCategory.RECOGNIZED

    def __init__(self, boxes: Sequence[GlyphBox], surface: Surface):
        self.boxes = list(boxes)
        self.surface = surface

    def extract(self, settings: Settings = DEFAULT_SETTINGS) -> LayoutMetrics:
        boxes = usable_boxes(self.boxes, settings)
        logger.info(f"Extracting layout from {len(boxes)} of {len(self.boxes)} recognized boxes")

        raw = extract_raw_metrics(boxes, self.surface, settings)
        if raw.is_empty:
            return _empty_metrics(self.category)

        return LayoutMetrics(
            source=self.category,
            font_size_px=raw.font_size_px,
            line_gap_px=raw.line_gap_px,
            margin_mm=margins_px_to_mm(raw, settings.pixels_per_inch),
            vector_values=(
                raw.font_size_px,
                raw.line_gap_px,
                raw.left_margin_px,
                raw.right_margin_px,
                raw.top_margin_px,
                raw.bottom_margin_px,
            ),
            aspect=raw.aspect,
            glyph_signatures=tuple(sample_glyph_signatures(boxes, settings)),
        )


class StructuredSource(MetricSource):
    """
    Layout declared by a structured document.

    Args:
        margins_twips (Mapping[str, float]): Page margins keyed by
            top/bottom/left/right, in twentieths of a point. Missing sides
            count as 0. An empty mapping means the document declared nothing.
        font_size_half_points (float, optional): Average declared font size in
            half-points. Defaults to 11 pt when None.
    """

    category = SourceCategory.STRUCTURED

    def __init__(self, margins_twips: Mapping[str, float], font_size_half_points: Optional[float] = None):
        self.margins_twips = dict(margins_twips)
        self.font_size_half_points = font_size_half_points

    def extract(self, settings: Settings = DEFAULT_SETTINGS) -> LayoutMetrics:
        if not self.margins_twips and self.font_size_half_points is None:
            logger.info("Structured document declares no page layout; returning 'no layout data' metrics.")
            return _empty_metrics(self.category)

        margins_pt = {side: twips_to_points(float(self.margins_twips.get(side, 0))) for side in MARGIN_SIDES}
        if self.font_size_half_points is None:
            size_pt = DEFAULT_STRUCTURED_FONT_SIZE_PT
        else:
            size_pt = half_points_to_points(float(self.font_size_half_points))
        font_size_px = pt_to_px(size_pt, settings.pixels_per_inch)

        return LayoutMetrics(
            source=self.category,
            font_size_px=font_size_px,
            line_gap_px=font_size_px * 0.5,
            margin_mm={side: points_to_mm(margins_pt[side]) for side in MARGIN_SIDES},
            vector_values=(size_pt,) + tuple(margins_pt[side] for side in MARGIN_SIDES),
            candidates=(STRUCTURED_CANDIDATE,),
            extras={"margins_pt": margins_pt, "font_size_pt": size_pt},
        )


class VirtualSource(MetricSource):
    """Plain text measured against an assumed rendering."""

    category = SourceCategory.VIRTUAL

    def __init__(self, text: str):
        self.text = text

    def extract(self, settings: Settings = DEFAULT_SETTINGS) -> LayoutMetrics:
        if not self.text.strip():
            logger.info("Text is blank; returning 'no layout data' metrics.")
            return _empty_metrics(self.category, {"virtual": True, "characters": len(self.text)})

        font_size = settings.virtual_font_size_px
        ratio = settings.virtual_line_height_ratio
        padding = settings.virtual_padding_px
        padding_mm = px_to_mm(padding, settings.pixels_per_inch)

        return LayoutMetrics(
            source=self.category,
            font_size_px=font_size,
            line_gap_px=font_size * (ratio - 1),
            margin_mm={side: padding_mm for side in MARGIN_SIDES},
            vector_values=(font_size, ratio, padding),
            candidates=(VIRTUAL_CANDIDATE,),
            extras={"virtual": True, "characters": len(self.text)},
        )


def source_from_category(category: SourceCategory, **inputs: Any) -> MetricSource:
    """
    Selects the producer for a source category.

    Recognized takes `boxes` and `surface`; Structured takes `margins_twips`
    and optionally `font_size_half_points`; Virtual takes `text`.
    """
    category = SourceCategory(category)
    if category is SourceCategory.RECOGNIZED:
        return RecognizedSource(inputs.get("boxes") or [], inputs["surface"])
    if category is SourceCategory.STRUCTURED:
        return StructuredSource(inputs.get("margins_twips") or {}, inputs.get("font_size_half_points"))
    return VirtualSource(inputs.get("text") or "")
