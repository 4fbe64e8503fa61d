"""Fan-out of rendered event lines to log destinations."""

from .registry import SinkRegistry  # noqa: F401
from .sinks import LineSink, build_sink  # noqa: F401

__all__ = [
    "LineSink",
    "SinkRegistry",
    "build_sink",
]
