"""Append-only file sink."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Optional, TextIO

from .base import LineSink

LOG = logging.getLogger(__name__)


class FileSink(LineSink):
    """Append each line to ``path``, one per line.

    The file is opened lazily and line buffered. A lock serialises writers
    because several sources may emit at once.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = Lock()
        self._fh: Optional[TextIO] = None

    @property
    def path(self) -> Path:
        return self._path

    def _open(self) -> TextIO:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        LOG.info("Writing rendered events to %s", self._path)
        return self._path.open("a", buffering=1, encoding="utf-8")

    def emit(self, line: str) -> None:
        with self._lock:
            if self._fh is None:
                self._fh = self._open()
            self._fh.write(line + "\n")

    def close(self) -> None:
        with self._lock:
            if self._fh is not None:
                self._fh.close()
                self._fh = None
