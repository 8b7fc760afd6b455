# -*- coding: utf-8 -*-
"""
src/fontprint/core/similarity.py

Compares FontPrints: cosine similarity of their feature vectors plus a
per-field diff report, and nearest-match search across a corpus.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import DEFAULT_SETTINGS, Settings
from .models import UNAVAILABLE, ComparisonReport, FontPrint, is_finite_number

logger = logging.getLogger(__name__)


def _pad(vec: Sequence[float], length: int) -> np.ndarray:
    arr = np.zeros(length, dtype=float)
    arr[: len(vec)] = np.asarray(vec, dtype=float)
    return arr


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Calculates the cosine similarity between two feature vectors.

    Vectors of different lengths are compared after zero-padding the shorter
    one. If either vector has a zero norm (e.g. a fingerprint without layout
    data) the similarity is 0.

    Args:
        vec_a (Sequence[float]): The first vector.
        vec_b (Sequence[float]): The second vector.

    Returns:
        The similarity, a float between 0.0 and 1.0.
    """
    length = max(len(vec_a), len(vec_b))
    if len(vec_a) != len(vec_b):
        logger.debug(f"Zero-padding vectors of length {len(vec_a)} and {len(vec_b)} to {length}")
    a = _pad(vec_a, length)
    b = _pad(vec_b, length)

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = np.dot(a, b) / (norm_a * norm_b)

    # Clamp to handle floating point inaccuracies; opposed vectors score 0
    return float(np.clip(similarity, 0.0, 1.0))


def font_overlap(left: FontPrint, right: FontPrint, limit: int = DEFAULT_SETTINGS.overlap_limit) -> List[str]:
    """
    Names shared by both fingerprints' leading candidates, in the left
    fingerprint's order.
    """
    right_names = {c.name for c in right.font_candidates[:limit]}
    shared = [c.name for c in left.font_candidates[:limit] if c.name in right_names]
    return shared[:limit]


def scalar_delta(
    left: Optional[float],
    right: Optional[float],
    decimals: int = DEFAULT_SETTINGS.decimals,
) -> Union[float, str]:
    """`left - right` rounded, or the "unavailable" sentinel when either is missing."""
    if not is_finite_number(left) or not is_finite_number(right):
        return UNAVAILABLE
    return round(float(left) - float(right), decimals) + 0.0


def compare(left: FontPrint, right: FontPrint, settings: Settings = DEFAULT_SETTINGS) -> ComparisonReport:
    """
    Builds the comparison report between two fingerprints.

    Never fails on fingerprints without layout data: their similarity is 0
    and their scalar deltas are "unavailable".
    """
    report = ComparisonReport(
        similarity=cosine_similarity(left.vector, right.vector),
        font_overlap=tuple(font_overlap(left, right, settings.overlap_limit)),
        font_size_delta=scalar_delta(left.avg_font_size_px, right.avg_font_size_px, settings.decimals),
        line_gap_delta=scalar_delta(left.line_gap_px, right.line_gap_px, settings.decimals),
    )
    logger.debug(f"Compared {left.id} with {right.id}: similarity {report.similarity:.4f}")
    return report


def rank_matches(
    target: FontPrint,
    corpus: Iterable[FontPrint],
    top_n: int = 3,
    max_workers: Optional[int] = None,
) -> List[Tuple[FontPrint, float]]:
    """
    Finds the corpus fingerprints most similar to `target`.

    Each comparison is independent, so with `max_workers` the similarities
    are computed on a thread pool.

    Args:
        target (FontPrint): The fingerprint to match.
        corpus (Iterable[FontPrint]): Stored fingerprints; an entry with the
                                      target's id is skipped.
        top_n (int): The number of matches to return.
        max_workers (int, optional): Thread pool size. Sequential when None.

    Returns:
        A list of (fingerprint, similarity) tuples sorted by descending
        similarity; equal scores keep corpus order.
    """
    candidates = [fp for fp in corpus if fp.id != target.id]
    if not candidates:
        logger.warning("Corpus is empty. Cannot perform matching.")
        return []

    if max_workers:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            scores = list(pool.map(lambda fp: cosine_similarity(target.vector, fp.vector), candidates))
    else:
        scores = [cosine_similarity(target.vector, fp.vector) for fp in candidates]

    ranked = sorted(zip(candidates, scores), key=lambda item: item[1], reverse=True)
    return ranked[:top_n]
