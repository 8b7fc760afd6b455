# -*- coding: utf-8 -*-
"""
The Core Processing Package for FontPrint.

This package holds the pure fingerprinting pipeline, from recognizer boxes
or declared page metadata to a hashed FontPrint, and the similarity engine
comparing two fingerprints. Nothing here touches the file system or keeps
mutable state.

Modules:
- `models`: Data records (GlyphBox, RawMetrics, FontPrint, ...).
- `metric_extractor`: Robust statistics and box -> metric reduction.
- `sources`: Recognized / Structured / Virtual metric producers.
- `font_classifier`: Aspect-ratio font style heuristic.
- `normalizer`: Fixed-precision feature vectors and feature records.
- `hasher`: Canonical serialization and content hash.
- `builder`: The pipeline producing a FontPrint.
- `similarity`: Cosine similarity, diff reports and nearest-match search.
- `image_processor`: Optional OCR adapter producing GlyphBoxes from images.
"""

from .builder import build_fontprint
from .font_classifier import classify
from .models import (
    UNAVAILABLE,
    ComparisonReport,
    FontCandidate,
    FontPrint,
    GlyphBox,
    RawMetrics,
    SourceCategory,
    Surface,
)
from .similarity import compare, cosine_similarity, rank_matches
from .sources import RecognizedSource, StructuredSource, VirtualSource, source_from_category

__all__ = [
    "UNAVAILABLE",
    "ComparisonReport",
    "FontCandidate",
    "FontPrint",
    "GlyphBox",
    "RawMetrics",
    "SourceCategory",
    "Surface",
    "build_fontprint",
    "classify",
    "compare",
    "cosine_similarity",
    "rank_matches",
    "RecognizedSource",
    "StructuredSource",
    "VirtualSource",
    "source_from_category",
]
