# -*- coding: utf-8 -*-
"""
src/fontprint/exceptions.py

Exception hierarchy for FontPrint.

Empty input and non-finite metrics are not errors: they degrade to a
"no layout data" fingerprint. Only the conditions below are raised.
"""


class FontPrintError(Exception):
    """Base class for all FontPrint errors."""


class InvalidGlyphBoxError(FontPrintError, ValueError):
    """A glyph box is malformed (inverted coordinates or missing fields)."""


class DimensionError(FontPrintError, ValueError):
    """A source produced a vector whose length does not match its category."""


class HashingUnavailableError(FontPrintError):
    """The configured digest algorithm cannot be used to identify a fingerprint."""


class CorpusError(FontPrintError):
    """The fingerprint corpus could not be read, written or indexed."""
