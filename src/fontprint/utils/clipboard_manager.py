# -*- coding: utf-8 -*-
"""
src/fontprint/utils/clipboard_manager.py

A simple wrapper utility for interacting with the system clipboard, used to
copy exported FontPrint JSON.
"""

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str, description: str = "text") -> bool:
    """
    Copies the given text to the system clipboard.

    Args:
        text (str): The string to be copied.
        description (str): What the text is, for the log line.

    Returns:
        bool: True if the text was copied successfully, False otherwise.
    """
    try:
        pyperclip.copy(text)
        logger.info(f"Copied {description} to clipboard")
        return True
    except pyperclip.PyperclipException as e:
        # Happens on systems without a clipboard (e.g. headless Linux servers)
        logger.error(f"Failed to copy {description} to clipboard: {e}")
        logger.warning(
            "Clipboard functionality may not be available on this system. "
            "If on Linux, please ensure 'xclip' or 'xsel' is installed."
        )
        return False
