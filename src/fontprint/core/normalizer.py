# -*- coding: utf-8 -*-
"""
src/fontprint/core/normalizer.py

Quantizes layout metrics into the canonical feature vector and the feature
record stored on a FontPrint.

Rounding to a fixed precision absorbs sub-pixel noise, so two independent
extractions of an unchanged document converge on the same vector (and hence
the same fingerprint hash).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..config import DEFAULT_SETTINGS, Settings
from ..exceptions import DimensionError
from .models import VECTOR_LENGTHS, FontCandidate, LayoutMetrics, SourceCategory, is_finite_number

logger = logging.getLogger(__name__)


def normalize_vector(values: Sequence[float], decimals: int = DEFAULT_SETTINGS.decimals) -> List[float]:
    """
    Rounds each value to `decimals` places, replacing NaN and infinities by 0.

    Vector components and feature scalars share `round_scalar`, so a font
    size reads the same in both places.

    Normalizing an already normalized vector returns it unchanged.
    """
    arr = np.asarray(values, dtype=float)
    arr = np.where(np.isfinite(arr), arr, 0.0)
    return [round_scalar(float(v), decimals) for v in arr]


def round_scalar(value: Optional[float], decimals: int = DEFAULT_SETTINGS.decimals) -> Optional[float]:
    """Rounds a finite scalar; missing or non-finite values become None."""
    if not is_finite_number(value):
        return None
    # Adding 0.0 turns -0.0 into 0.0 so equal values serialize identically.
    return round(float(value), decimals) + 0.0


def canonical_vector(
    source: SourceCategory,
    values: Sequence[float],
    decimals: int = DEFAULT_SETTINGS.decimals,
) -> List[float]:
    """
    Builds the fixed-length vector of a source category.

    Raises:
        DimensionError: If `values` does not have the category's length.
    """
    expected = VECTOR_LENGTHS[source]
    if len(values) != expected:
        raise DimensionError(
            f"{source.value} vectors have {expected} components, got {len(values)}"
        )
    return normalize_vector(values, decimals)


def build_feature_record(
    metrics: LayoutMetrics,
    candidates: Sequence[FontCandidate],
    settings: Settings = DEFAULT_SETTINGS,
) -> Dict[str, Any]:
    """
    Builds the `features` mapping of a FontPrint.

    Font size and line gap are rounded to the vector precision; without
    layout data they (and the margins) are None.
    """
    return {
        "font_candidates": [c.to_dict() for c in candidates],
        "avg_font_size_px": round_scalar(metrics.font_size_px, settings.decimals),
        "line_gap_px": round_scalar(metrics.line_gap_px, settings.decimals),
        "margin_mm": dict(metrics.margin_mm) if metrics.margin_mm is not None else None,
        "glyph_signatures": [g.to_dict() for g in metrics.glyph_signatures],
    }
