"""Line sinks exposed to the registry and the agent."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from .base import LineSink
from .file import FileSink
from .logger import EVENTS_LOGGER, LoggerSink, SyslogSink, parse_syslog_address

__all__ = [
    "EVENTS_LOGGER",
    "FileSink",
    "LineSink",
    "LoggerSink",
    "SyslogSink",
    "build_sink",
]


def build_sink(type_: str, options: Optional[Mapping[str, Any]] = None) -> LineSink:
    """Create a sink from its configured ``type`` and ``options``."""

    options = options or {}
    if type_ == "log":
        return LoggerSink(logger_name=str(options.get("logger", EVENTS_LOGGER)))
    if type_ == "file":
        path = options.get("path")
        if not path:
            raise ValueError("file sink requires a 'path' option")
        return FileSink(Path(path))
    if type_ == "syslog":
        return SyslogSink(
            address=parse_syslog_address(str(options.get("address", "/dev/log"))),
            facility=str(options.get("facility", "daemon")),
        )
    raise ValueError(f"unsupported sink type '{type_}'")
