# -*- coding: utf-8 -*-
"""
src/fontprint/core/models.py

Data records shared by every stage of the FontPrint pipeline.

All records are frozen dataclasses. A FontPrint is created once by the
pipeline and never mutated afterwards; `to_dict` gives the stable JSON
shape used for export and corpus storage.
"""

import copy
import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import InvalidGlyphBoxError

# Sentinel emitted in comparison reports when one side has no value.
UNAVAILABLE = "unavailable"


class SourceCategory(str, Enum):
    """How the layout metrics of a document were obtained."""

    RECOGNIZED = "Recognized"
    STRUCTURED = "Structured"
    VIRTUAL = "Virtual"


# Fixed vector length per category. The order of fields inside each vector
# is part of the fingerprint identity and must never change.
VECTOR_LENGTHS: Dict[SourceCategory, int] = {
    SourceCategory.RECOGNIZED: 6,
    SourceCategory.STRUCTURED: 5,
    SourceCategory.VIRTUAL: 3,
}


@dataclass(frozen=True)
class GlyphBox:
    """An axis-aligned box around a recognized word or glyph."""

    x0: float
    y0: float
    x1: float
    y1: float
    text: str = ""
    confidence: Optional[float] = None

    def __post_init__(self):
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise InvalidGlyphBoxError(
                f"Inverted glyph box ({self.x0}, {self.y0}, {self.x1}, {self.y1}) for text {self.text!r}"
            )

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def center_y(self) -> float:
        return (self.y0 + self.y1) / 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlyphBox":
        """
        Builds a box from a recognizer record.

        Accepts either flat coordinates (`{"x0": .., "y0": .., ...}`) or a
        nested `{"bbox": {...}, "text": ..}` record.
        """
        coords = data.get("bbox", data)
        try:
            return cls(
                x0=float(coords["x0"]),
                y0=float(coords["y0"]),
                x1=float(coords["x1"]),
                y1=float(coords["y1"]),
                text=str(data.get("text") or ""),
                confidence=data.get("confidence"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidGlyphBoxError(f"Malformed glyph box record {data!r}: {e}") from e


@dataclass(frozen=True)
class Surface:
    """Dimensions of the page surface the boxes were recognized on, in pixels."""

    width: float
    height: float


@dataclass(frozen=True)
class RawMetrics:
    """
    Scalar layout metrics reduced from a list of glyph boxes.

    Every field is None for the "no layout data" sentinel. Otherwise all
    values are finite.
    """

    font_size_px: Optional[float]
    line_gap_px: Optional[float]
    left_margin_px: Optional[float]
    right_margin_px: Optional[float]
    top_margin_px: Optional[float]
    bottom_margin_px: Optional[float]
    aspect: Optional[float]

    @classmethod
    def no_layout_data(cls) -> "RawMetrics":
        return cls(None, None, None, None, None, None, None)

    @property
    def is_empty(self) -> bool:
        return self.font_size_px is None


@dataclass(frozen=True)
class FontCandidate:
    """A coarse font-style guess with its heuristic score."""

    name: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "score": self.score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FontCandidate":
        return cls(name=str(data["name"]), score=float(data["score"]))


@dataclass(frozen=True)
class GlyphSignature:
    """A sampled glyph: its first character and box as [x0, y0, width, height]."""

    glyph: str
    box: Tuple[float, float, float, float]

    def to_dict(self) -> Dict[str, Any]:
        return {"glyph": self.glyph, "box": list(self.box)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlyphSignature":
        return cls(glyph=str(data["glyph"]), box=tuple(float(v) for v in data["box"]))


@dataclass(frozen=True)
class LayoutMetrics:
    """
    The common output of every source producer.

    `vector_values` holds the raw, unrounded values in the category's fixed
    order. `candidates` is None when the candidates must be derived from
    `aspect` by the classifier.
    """

    source: SourceCategory
    font_size_px: Optional[float]
    line_gap_px: Optional[float]
    margin_mm: Optional[Dict[str, float]]
    vector_values: Tuple[float, ...]
    candidates: Optional[Tuple[FontCandidate, ...]] = None
    aspect: Optional[float] = None
    glyph_signatures: Tuple[GlyphSignature, ...] = ()
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.font_size_px is None


@dataclass(frozen=True)
class FontPrint:
    """The complete normalized and hashed layout fingerprint of one document."""

    id: str
    created_at: str
    source: SourceCategory
    features: Dict[str, Any]
    fingerprint_hash: str
    vector: Tuple[float, ...]
    extras: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # A FontPrint shares no mutable state with the caller that built it.
        object.__setattr__(self, "features", copy.deepcopy(self.features))
        object.__setattr__(self, "extras", copy.deepcopy(self.extras))

    @property
    def font_candidates(self) -> List[FontCandidate]:
        return [FontCandidate.from_dict(c) for c in self.features.get("font_candidates") or []]

    @property
    def avg_font_size_px(self) -> Optional[float]:
        return self.features.get("avg_font_size_px")

    @property
    def line_gap_px(self) -> Optional[float]:
        return self.features.get("line_gap_px")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at,
            "source": self.source.value,
            "features": {
                "font_candidates": [dict(c) for c in self.features.get("font_candidates") or []],
                "avg_font_size_px": self.features.get("avg_font_size_px"),
                "line_gap_px": self.features.get("line_gap_px"),
                "margin_mm": copy.deepcopy(self.features.get("margin_mm")),
                "glyph_signatures": copy.deepcopy(self.features.get("glyph_signatures") or []),
            },
            "fingerprint_hash": self.fingerprint_hash,
            "vector": list(self.vector),
            "extras": copy.deepcopy(self.extras),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FontPrint":
        features = data.get("features") or {}
        return cls(
            id=str(data["id"]),
            created_at=str(data["created_at"]),
            source=SourceCategory(data["source"]),
            features={
                "font_candidates": list(features.get("font_candidates") or []),
                "avg_font_size_px": features.get("avg_font_size_px"),
                "line_gap_px": features.get("line_gap_px"),
                "margin_mm": features.get("margin_mm"),
                "glyph_signatures": list(features.get("glyph_signatures") or []),
            },
            fingerprint_hash=str(data["fingerprint_hash"]),
            vector=tuple(float(v) for v in data.get("vector") or []),
            extras=dict(data.get("extras") or {}),
        )


Delta = Union[float, str]


@dataclass(frozen=True)
class ComparisonReport:
    """Similarity score and per-field differences between two fingerprints."""

    similarity: float
    font_overlap: Tuple[str, ...]
    font_size_delta: Delta
    line_gap_delta: Delta

    def to_dict(self) -> Dict[str, Any]:
        return {
            "similarity": self.similarity,
            "fontOverlap": list(self.font_overlap),
            "fontSizeDelta": self.font_size_delta,
            "lineGapDelta": self.line_gap_delta,
        }


def is_finite_number(value: Any) -> bool:
    """True for ints/floats that are neither NaN nor infinite."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
