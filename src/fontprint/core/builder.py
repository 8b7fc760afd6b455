# -*- coding: utf-8 -*-
"""
src/fontprint/core/builder.py

Runs the FontPrint pipeline for one document:

    source.extract -> classify + normalize -> hash -> FontPrint

The pipeline is pure apart from the record id and timestamp, which can be
injected for reproducible output.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from ..config import DEFAULT_SETTINGS, Settings
from .font_classifier import classify
from .hasher import fingerprint_hash
from .models import FontPrint
from .normalizer import build_feature_record, canonical_vector
from .sources import MetricSource

logger = logging.getLogger(__name__)


def new_fontprint_id() -> str:
    return f"fontprint-{uuid.uuid4().hex}"


def build_fontprint(
    source: MetricSource,
    settings: Settings = DEFAULT_SETTINGS,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = new_fontprint_id,
) -> FontPrint:
    """
    Builds the fingerprint of one document.

    Args:
        source (MetricSource): The producer selected for the document.
        settings (Settings): Pipeline constants.
        now (datetime, optional): Creation time. Defaults to the current UTC time.
        id_factory (Callable[[], str]): Generates the record id.

    Returns:
        FontPrint: A complete record. Documents without layout data yield null
                   font and margin fields and a zero-filled vector.

    Raises:
        HashingUnavailableError: If the fingerprint hash cannot be computed.
    """
    metrics = source.extract(settings)

    if metrics.candidates is not None:
        candidates = list(metrics.candidates)
    else:
        candidates = classify(metrics.aspect, settings)

    vector = canonical_vector(metrics.source, metrics.vector_values, settings.decimals)
    features = build_feature_record(metrics, candidates, settings)
    digest = fingerprint_hash(metrics.source, vector, candidates, settings)

    created = (now or datetime.now(timezone.utc)).isoformat()
    fontprint = FontPrint(
        id=id_factory(),
        created_at=created,
        source=metrics.source,
        features=features,
        fingerprint_hash=digest,
        vector=tuple(vector),
        extras=dict(metrics.extras),
    )
    logger.info(f"Built {fontprint.source.value} fingerprint {fontprint.fingerprint_hash[:12]} (vector {vector})")
    return fontprint
