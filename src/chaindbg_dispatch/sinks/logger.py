"""Sinks backed by the :mod:`logging` machinery."""

from __future__ import annotations

import logging
import logging.handlers
from typing import Tuple, Union

from .base import LineSink

EVENTS_LOGGER = "chaindbg.events"

SyslogAddress = Union[str, Tuple[str, int]]


class LoggerSink(LineSink):
    """Emit lines through a named logger, at INFO by default."""

    def __init__(self, logger_name: str = EVENTS_LOGGER, level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(logger_name)
        self._level = level

    def emit(self, line: str) -> None:
        self._logger.log(self._level, "%s", line)


def parse_syslog_address(value: str) -> SyslogAddress:
    """``/dev/log`` stays a socket path, ``host:514`` becomes a UDP tuple."""

    if value.startswith("/"):
        return value
    host, sep, port = value.rpartition(":")
    if not sep:
        return (value, logging.handlers.SYSLOG_UDP_PORT)
    return (host, int(port))


class SyslogSink(LineSink):
    """Send lines to syslog tagged ``chaindbg:``."""

    def __init__(
        self,
        address: SyslogAddress = "/dev/log",
        facility: str = "daemon",
        ident: str = "chaindbg: ",
    ) -> None:
        facility_code = logging.handlers.SysLogHandler.facility_names.get(facility)
        if facility_code is None:
            raise ValueError(f"unknown syslog facility '{facility}'")
        self._handler = logging.handlers.SysLogHandler(
            address=address, facility=facility_code
        )
        self._handler.ident = ident
        # Private logger so lines never reach the root handlers twice.
        self._logger = logging.Logger("chaindbg.syslog", logging.INFO)
        self._logger.addHandler(self._handler)

    def emit(self, line: str) -> None:
        self._logger.info("%s", line)

    def close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()
