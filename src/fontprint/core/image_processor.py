# -*- coding: utf-8 -*-
"""
src/fontprint/core/image_processor.py

Adapter between a page image and the fingerprint pipeline. The image is
preprocessed for clarity, run through an OCR engine, and the recognized words
are returned as GlyphBox records in the original image's pixel coordinates.

EasyOCR is an optional dependency (the `ocr` extra). It is imported when an
ImageProcessor is created, so the rest of the package works without it.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .models import GlyphBox, Surface

logger = logging.getLogger(__name__)

# --- Module-level Configuration ---

# Factor by which to upscale the image before OCR. Helps with small text.
UPSCALE_FACTOR = 2

# Parameters for cv2.adaptiveThreshold.
# Block size must be an odd number.
ADAPTIVE_THRESH_BLOCK_SIZE = 15
ADAPTIVE_THRESH_C = 7


def preprocess_image(image: np.ndarray, upscale_factor: int = UPSCALE_FACTOR) -> np.ndarray:
    """
    Upscales, grayscales and binarizes a page image for OCR.

    Args:
        image (np.ndarray): BGR, BGRA or single-channel page image.
        upscale_factor (int): Integer scale applied before thresholding.

    Returns:
        np.ndarray: Binarized image, text white (255) on black (0).
    """
    if image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

    h, w = image.shape[:2]
    upscaled = cv2.resize(image, (w * upscale_factor, h * upscale_factor), interpolation=cv2.INTER_CUBIC)

    if upscaled.ndim == 3:
        gray = cv2.cvtColor(upscaled, cv2.COLOR_BGR2GRAY)
    else:
        gray = upscaled

    # Adaptive thresholding copes with non-uniform backgrounds.
    return cv2.adaptiveThreshold(
        gray,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY_INV,
        ADAPTIVE_THRESH_BLOCK_SIZE,
        ADAPTIVE_THRESH_C,
    )


def glyph_boxes_from_ocr_results(
    ocr_results: Iterable[Tuple[Sequence[Sequence[float]], str, float]],
    scale: float = 1.0,
    confidence_threshold: float = 0.0,
) -> List[GlyphBox]:
    """
    Converts EasyOCR `readtext` results into GlyphBoxes.

    EasyOCR reports each word as four corner points; the axis-aligned box
    around them is divided by `scale` to undo preprocessing upscaling.

    Args:
        ocr_results: (points, text, confidence) triples.
        scale (float): The upscale factor applied before OCR.
        confidence_threshold (float): Results below this confidence are dropped.

    Returns:
        List[GlyphBox]: Boxes with non-blank text, in recognition order.
    """
    boxes = []
    for points, text, conf in ocr_results:
        if not str(text).strip():
            continue
        if conf < confidence_threshold:
            logger.debug(f"Rejected word: '{text}' with confidence {conf:.2f}")
            continue
        xs = [float(p[0]) for p in points]
        ys = [float(p[1]) for p in points]
        boxes.append(GlyphBox(
            x0=min(xs) / scale,
            y0=min(ys) / scale,
            x1=max(xs) / scale,
            y1=max(ys) / scale,
            text=str(text),
            confidence=float(conf),
        ))
    return boxes


class ImageProcessor:
    """
    Holds the EasyOCR reader and turns page images into GlyphBoxes.

    Creating the reader loads model weights, so one instance should be
    created and reused.
    """

    def __init__(self, languages: Optional[List[str]] = None, confidence_threshold: float = 0.0):
        """
        Args:
            languages (List[str]): Language codes for EasyOCR. Defaults to ['en'].
            confidence_threshold (float): Minimum word confidence (0-1).
        """
        import easyocr

        if languages is None:
            languages = ["en"]
        self.confidence_threshold = confidence_threshold

        logger.info(f"Initializing EasyOCR Reader for languages: {languages}...")
        # gpu=False is a safe default where CUDA might not be available.
        self.reader = easyocr.Reader(languages, gpu=False)
        logger.info("EasyOCR Reader initialized successfully.")

    def process_image(self, image: np.ndarray) -> Tuple[List[GlyphBox], Surface]:
        """
        Recognizes the words of a page image.

        Args:
            image (np.ndarray): The page image as loaded by cv2.imread.

        Returns:
            A tuple of the recognized boxes and the page surface. An empty
            image yields no boxes.
        """
        if image is None or image.size == 0:
            logger.warning("process_image called with an empty image.")
            return [], Surface(0, 0)

        h, w = image.shape[:2]
        binarized = preprocess_image(image, UPSCALE_FACTOR)
        ocr_results: List[Any] = self.reader.readtext(binarized, detail=1, paragraph=False)
        boxes = glyph_boxes_from_ocr_results(ocr_results, UPSCALE_FACTOR, self.confidence_threshold)

        if not boxes:
            logger.warning("OCR did not find any words with sufficient confidence.")
        return boxes, Surface(float(w), float(h))

    def process_file(self, path: str) -> Tuple[List[GlyphBox], Surface]:
        """Loads an image file with OpenCV and recognizes its words."""
        image = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if image is None:
            raise FileNotFoundError(f"Could not read image file '{path}'")
        return self.process_image(image)
