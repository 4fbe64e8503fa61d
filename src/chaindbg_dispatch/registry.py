"""Dispatch event records to the renderer and registered sinks."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from chaindbg.events import AddressEvent, DeviceEvent, EventRecord
from chaindbg.renderer import EventRenderer

from .sinks import LineSink

LOG = logging.getLogger(__name__)


class SinkRegistry:
    """Render incoming records once and hand the line to every sink.

    Sources call :meth:`handle` from their own threads. Sinks are expected to
    be registered before sources start.
    """

    def __init__(self, renderer: Optional[EventRenderer] = None) -> None:
        self._renderer = renderer or EventRenderer()
        self._sinks: Dict[str, LineSink] = {}

    @property
    def renderer(self) -> EventRenderer:
        return self._renderer

    def register(self, name: str, sink: LineSink) -> None:
        if name in self._sinks:
            raise ValueError(f"sink '{name}' already registered")
        self._sinks[name] = sink

    def unregister(self, name: str) -> Optional[LineSink]:
        return self._sinks.pop(name, None)

    def handle(self, event: EventRecord) -> bool:
        """Render ``event`` and emit it. Returns ``False`` if nothing was emitted."""

        if not isinstance(event, (DeviceEvent, AddressEvent)):
            raise TypeError(f"Unsupported event type: {type(event)!r}")

        line = self._renderer.render(event)
        if line is None:
            LOG.debug("event %#x has no resolvable device, skipping", event.code)
            return False

        for name, sink in list(self._sinks.items()):
            try:
                sink.emit(line)
            except Exception:
                LOG.exception("sink '%s' failed to emit line", name)
        return True

    def close(self) -> None:
        for name, sink in list(self._sinks.items()):
            try:
                sink.close()
            except Exception:
                LOG.exception("failed to close sink '%s'", name)
