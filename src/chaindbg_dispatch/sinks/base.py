"""Abstract interface for rendered line sinks."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LineSink(ABC):
    """Base class for destinations managed by :class:`SinkRegistry`."""

    @abstractmethod
    def emit(self, line: str) -> None:
        """Write one rendered ``line``. Must not block on retries."""

    def close(self) -> None:
        """Release any resources held by the sink."""
