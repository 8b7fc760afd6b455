import pytest

from fontprint.config import Settings
from fontprint.core.font_classifier import MONO_LIKE, SANS_LIKE, SERIF_LIKE, classify


def names(candidates):
    return [c.name for c in candidates]


def test_narrow_glyphs_rank_serif_first():
    candidates = classify(0.8)

    assert names(candidates)[0] == SERIF_LIKE
    assert candidates[0].score == pytest.approx(1.0)


def test_wide_glyphs_rank_sans_first():
    candidates = classify(1.2)

    assert names(candidates) == [SANS_LIKE, MONO_LIKE, SERIF_LIKE]
    assert candidates[0].score == pytest.approx(0.9)
    assert candidates[2].score == 0


def test_deadband_yields_near_tie():
    scores = {c.name: c.score for c in classify(1.0)}

    assert scores[SERIF_LIKE] == pytest.approx(0.5)
    assert scores[SANS_LIKE] == pytest.approx(0.45)
    assert scores[MONO_LIKE] == 0.1


def test_ties_keep_declaration_order():
    # Penalized sans score equals the mono score.
    candidates = classify(1.2, Settings(sans_penalty=0.1, mono_score=0.1))

    assert names(candidates) == [SANS_LIKE, MONO_LIKE, SERIF_LIKE]


def test_constants_come_from_settings():
    scores = {c.name: c.score for c in classify(1.5, Settings(sans_penalty=0.5, mono_score=0.3))}

    assert scores[SANS_LIKE] == pytest.approx(0.5)
    assert scores[MONO_LIKE] == 0.3
