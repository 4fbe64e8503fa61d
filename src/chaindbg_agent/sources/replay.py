"""JSON-lines replay source."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Event, Thread

from chaindbg_dispatch import SinkRegistry

from .utils import record_from_mapping

LOG = logging.getLogger(__name__)


class ReplayEventSource(Thread):
    """Tail a JSON-lines file and publish one event per complete line.

    Lines written after the last poll are picked up on the next one. A file
    that shrinks is treated as rotated and read again from the start.
    """

    def __init__(
        self,
        registry: SinkRegistry,
        path: Path,
        interval: float,
        stop_event: Event,
    ) -> None:
        super().__init__(daemon=True, name=f"replay:{path}")
        self._registry = registry
        self._path = Path(path)
        self._interval = interval
        self._stop_event = stop_event
        self._offset = 0

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll()
            except Exception:  # pragma: no cover - logged below
                LOG.exception("replay source encountered an error")
            self._stop_event.wait(self._interval)

    def poll(self) -> int:
        """Publish new lines and return how many records were handled."""

        if not self._path.exists():
            LOG.debug("events file %s does not exist yet", self._path)
            return 0

        size = self._path.stat().st_size
        if size < self._offset:
            LOG.info("events file %s was truncated, rereading", self._path)
            self._offset = 0

        with self._path.open("rb") as fh:
            fh.seek(self._offset)
            chunk = fh.read()

        end = chunk.rfind(b"\n")
        if end < 0:
            return 0
        self._offset += end + 1

        handled = 0
        for raw in chunk[:end].splitlines():
            text = raw.decode("utf-8", errors="replace").strip()
            if not text or text.startswith("#"):
                continue
            try:
                record = record_from_mapping(json.loads(text))
            except (ValueError, TypeError, KeyError) as exc:
                LOG.warning("skipping invalid event in %s: %s", self._path, exc)
                continue
            self._registry.handle(record)
            handled += 1
        return handled
