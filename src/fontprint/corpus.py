# -*- coding: utf-8 -*-
"""
src/fontprint/corpus.py

Storage for collections of FontPrints.

The fingerprint pipeline never touches storage itself; whatever orchestrates
extraction and storage receives a repository implementing `CorpusRepository`
(append / list / remove). Two implementations are provided: an in-memory
list and a JSON file whose writes replace the whole file atomically.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Protocol, Union

from .core.models import FontPrint
from .exceptions import CorpusError

logger = logging.getLogger(__name__)


class CorpusRepository(Protocol):
    """Capability to persist fingerprints."""

    def append(self, fontprint: FontPrint) -> None:
        ...

    def list(self) -> List[FontPrint]:
        ...

    def remove(self, index: int) -> FontPrint:
        ...


class InMemoryCorpus:
    """A corpus held in a Python list. Useful for tests and batch jobs."""

    def __init__(self, fontprints=None):
        self._items: List[FontPrint] = list(fontprints or [])

    def append(self, fontprint: FontPrint) -> None:
        self._items.append(fontprint)

    def list(self) -> List[FontPrint]:
        return list(self._items)

    def remove(self, index: int) -> FontPrint:
        check_index(index, len(self._items))
        try:
            return self._items.pop(index)
        except IndexError as e:
            raise CorpusError(f"No fingerprint at index {index}") from e


def check_index(index: int, size: int) -> None:
    """Rejects negative positions, which Python would count from the end."""
    if index < 0:
        raise CorpusError(f"No fingerprint at index {index} (corpus has {size} entries)")


def read_fontprints(path: Union[str, Path]) -> List[FontPrint]:
    """
    Reads a JSON array of exported FontPrints.

    Raises:
        CorpusError: If the file is not a JSON array of fingerprint records.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusError(f"Error loading corpus file '{path}': {e}") from e

    if not isinstance(data, list):
        raise CorpusError(f"Corpus file '{path}' does not contain a list of fingerprints")
    try:
        return [FontPrint.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise CorpusError(f"Corpus file '{path}' holds a malformed fingerprint: {e}") from e


def write_fontprints(path: Union[str, Path], fontprints: List[FontPrint]) -> None:
    """Writes fingerprints as a JSON array, replacing `path` atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps([fp.to_dict() for fp in fontprints], indent=2, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise CorpusError(f"Failed to save corpus file '{path}': {e}") from e


class JsonFileCorpus:
    """A corpus persisted as one JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def list(self) -> List[FontPrint]:
        if not self.path.exists():
            return []
        return read_fontprints(self.path)

    def append(self, fontprint: FontPrint) -> None:
        items = self.list()
        items.append(fontprint)
        write_fontprints(self.path, items)
        logger.info(f"Saved fingerprint {fontprint.id} to corpus ({len(items)} entries)")

    def remove(self, index: int) -> FontPrint:
        items = self.list()
        check_index(index, len(items))
        try:
            removed = items.pop(index)
        except IndexError as e:
            raise CorpusError(f"No fingerprint at index {index} (corpus has {len(items)} entries)") from e
        write_fontprints(self.path, items)
        logger.info(f"Removed fingerprint {removed.id} from corpus")
        return removed

    def export_to(self, destination: Union[str, Path]) -> int:
        """Copies the corpus to `destination`. Returns the number of entries."""
        items = self.list()
        write_fontprints(destination, items)
        return len(items)

    def import_from(self, source: Union[str, Path]) -> int:
        """Replaces the corpus with the fingerprints stored in `source`."""
        items = read_fontprints(source)
        write_fontprints(self.path, items)
        logger.info(f"Imported {len(items)} fingerprints from {source}")
        return len(items)
