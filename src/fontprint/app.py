# -*- coding: utf-8 -*-
"""
src/fontprint/app.py

Application controller for FontPrint.

`FontPrintApp` orchestrates the analyse -> store -> compare workflow around
the pure core. Storage is an injected `CorpusRepository`, so the same
controller works with the JSON corpus used by the CLI and with an in-memory
corpus in tests or batch jobs.
"""

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .config import DEFAULT_SETTINGS, Settings
from .core.builder import build_fontprint
from .core.models import ComparisonReport, FontPrint, GlyphBox, Surface
from .core.similarity import compare, rank_matches
from .core.sources import MetricSource, RecognizedSource, StructuredSource, VirtualSource
from .corpus import CorpusRepository

logger = logging.getLogger(__name__)


class FontPrintApp:
    """
    Builds, stores and compares fingerprints.
    """

    def __init__(self, repository: CorpusRepository, settings: Settings = DEFAULT_SETTINGS):
        """
        Args:
            repository (CorpusRepository): Where saved fingerprints go.
            settings (Settings): Pipeline constants.
        """
        self.repository = repository
        self.settings = settings

    # --- Analysis ---

    def analyze(self, source: MetricSource, save: bool = False) -> FontPrint:
        """Runs the pipeline on one source, optionally storing the result."""
        fontprint = build_fontprint(source, self.settings)
        if save:
            self.repository.append(fontprint)
        return fontprint

    def analyze_boxes(self, boxes: Sequence[GlyphBox], surface: Surface, save: bool = False) -> FontPrint:
        if not boxes:
            logger.warning("No text boxes were supplied; the fingerprint carries no layout data.")
        return self.analyze(RecognizedSource(boxes, surface), save)

    def analyze_structured(
        self,
        margins_twips: Mapping[str, float],
        font_size_half_points: Optional[float] = None,
        save: bool = False,
    ) -> FontPrint:
        return self.analyze(StructuredSource(margins_twips, font_size_half_points), save)

    def analyze_text(self, text: str, save: bool = False) -> FontPrint:
        return self.analyze(VirtualSource(text), save)

    def analyze_image(self, path: Union[str, Path], save: bool = False, languages: Optional[List[str]] = None) -> FontPrint:
        """
        Recognizes a page image and fingerprints its layout.

        Requires the optional EasyOCR dependency.
        """
        from .core.image_processor import ImageProcessor

        processor = ImageProcessor(languages, confidence_threshold=self.settings.ocr_confidence_threshold)
        boxes, surface = processor.process_file(str(path))
        logger.info(f"Recognized {len(boxes)} words on {surface.width:.0f}x{surface.height:.0f} page")
        return self.analyze_boxes(boxes, surface, save)

    # --- Comparison ---

    def compare(self, left: FontPrint, right: FontPrint) -> ComparisonReport:
        return compare(left, right, self.settings)

    def find_best_matches(self, target: FontPrint, top_n: int = 3) -> List[Tuple[FontPrint, float]]:
        """Nearest stored fingerprints to `target`, most similar first."""
        return rank_matches(target, self.repository.list(), top_n)
