# -*- coding: utf-8 -*-
"""
src/fontprint/core/hasher.py

Derives the content hash that identifies a FontPrint.

The hash covers only the normalized triple (source, vector, leading font
candidates), serialized as canonical JSON. It is a deduplication key for
corpus lookups, not a secret.
"""

import hashlib
import json
import logging
from typing import Sequence

from ..config import DEFAULT_SETTINGS, Settings
from ..exceptions import HashingUnavailableError
from .models import FontCandidate, SourceCategory

logger = logging.getLogger(__name__)


def canonical_payload(
    source: SourceCategory,
    vector: Sequence[float],
    candidates: Sequence[FontCandidate],
    candidate_count: int = DEFAULT_SETTINGS.hash_candidate_count,
) -> str:
    """
    Serializes the hashed triple with sorted keys and compact separators.

    Equal inputs always produce byte-identical payloads.
    """
    payload = {
        "source": source.value,
        "vec": [float(v) for v in vector],
        "font": [c.to_dict() for c in list(candidates)[:candidate_count]],
    }
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def fingerprint_hash(
    source: SourceCategory,
    vector: Sequence[float],
    candidates: Sequence[FontCandidate],
    settings: Settings = DEFAULT_SETTINGS,
) -> str:
    """
    Computes the lowercase hex digest of the canonical payload.

    Raises:
        HashingUnavailableError: If the configured digest algorithm is not
            provided by this interpreter or has no fixed digest length.
            A fingerprint without its identity is never returned.
    """
    payload = canonical_payload(source, vector, candidates, settings.hash_candidate_count)
    try:
        digest = hashlib.new(settings.hash_algorithm)
    except (ValueError, TypeError) as e:
        logger.error(f"Digest algorithm '{settings.hash_algorithm}' is unavailable: {e}")
        raise HashingUnavailableError(
            f"Cannot compute fingerprint hash with '{settings.hash_algorithm}'"
        ) from e
    if digest.digest_size == 0:
        logger.error(f"Digest algorithm '{settings.hash_algorithm}' has no fixed digest length")
        raise HashingUnavailableError(
            f"Cannot compute fingerprint hash with variable-length digest '{settings.hash_algorithm}'"
        )
    digest.update(payload.encode("utf-8"))
    return digest.hexdigest().lower()
