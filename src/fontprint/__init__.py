# -*- coding: utf-8 -*-
"""
FontPrint Package.

Derives a compact, reproducible fingerprint of a document's typographic
layout (character height, line spacing, page margins and a coarse font-style
guess) and compares fingerprints for similarity.

The pure pipeline lives in `fontprint.core`; `FontPrintApp` wires it to an
injected corpus repository.
"""

__version__ = "0.1.0"

from .app import FontPrintApp
from .config import Config, Settings

__all__ = ["FontPrintApp", "Config", "Settings", "__version__"]
