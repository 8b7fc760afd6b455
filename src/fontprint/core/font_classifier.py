# -*- coding: utf-8 -*-
"""
src/fontprint/core/font_classifier.py

A weak heuristic guessing the font style of a page from its median glyph
aspect ratio. Narrow glyphs (aspect below 1.0) lean serif, wide glyphs lean
sans-serif. The result is a ranked list of style candidates, never an
identification of an actual font.
"""

from typing import List

from ..config import DEFAULT_SETTINGS, Settings
from .models import FontCandidate

SERIF_LIKE = "Serif-like"
SANS_LIKE = "Sans-like"
MONO_LIKE = "Mono-like"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def classify(aspect: float, settings: Settings = DEFAULT_SETTINGS) -> List[FontCandidate]:
    """
    Ranks the Serif/Sans/Mono style candidates for a glyph aspect ratio.

    Inside the deadband [0.9, 1.1] both raw scores are small and nearly
    equal, which yields a near tie between serif and sans.

    Args:
        aspect (float): Median width / (height + 1) of the page's boxes.
        settings (Settings): Supplies the sans penalty and the fixed mono score.

    Returns:
        List[FontCandidate]: Candidates sorted by descending score; ties keep
                             the Serif, Sans, Mono order.
    """
    serif_score = clamp(1.1 - aspect, 0.0, 1.0)
    sans_score = clamp(aspect - 0.9, 0.0, 1.0)
    norm = (serif_score + sans_score) or 1.0

    candidates = [
        FontCandidate(SERIF_LIKE, serif_score / norm),
        FontCandidate(SANS_LIKE, sans_score / norm * settings.sans_penalty),
        FontCandidate(MONO_LIKE, settings.mono_score),
    ]
    # sorted() is stable, so equal scores keep declaration order.
    return sorted(candidates, key=lambda c: c.score, reverse=True)
