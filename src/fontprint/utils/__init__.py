# -*- coding: utf-8 -*-
"""
The Utilities Package for FontPrint.

Helpers supporting the command line front end that do not belong to the
fingerprinting core.

Modules:
- clipboard_manager: Copies exported fingerprint JSON to the system clipboard.
"""

from .clipboard_manager import copy_to_clipboard

__all__ = [
    "copy_to_clipboard",
]
