import logging
import socket
from pathlib import Path

import pytest

from chaindbg_dispatch.sinks import EVENTS_LOGGER, FileSink, LoggerSink, SyslogSink, build_sink
from chaindbg_dispatch.sinks.logger import parse_syslog_address


def test_logger_sink_logs_at_info(caplog):
    sink = LoggerSink()

    with caplog.at_level(logging.INFO, logger=EVENTS_LOGGER):
        sink.emit("C: NETDEV DEV: eth0 EVENT: NETDEV_UP (0x1)")

    assert caplog.records[-1].name == EVENTS_LOGGER
    assert caplog.records[-1].getMessage() == "C: NETDEV DEV: eth0 EVENT: NETDEV_UP (0x1)"


def test_file_sink_appends_lines(tmp_path: Path):
    path = tmp_path / "logs" / "chaindbg.log"
    sink = FileSink(path)

    sink.emit("first")
    sink.emit("second")
    sink.close()
    sink.emit("third")
    sink.close()

    assert path.read_text() == "first\nsecond\nthird\n"


def test_build_sink_types(tmp_path: Path):
    assert isinstance(build_sink("log"), LoggerSink)
    file_sink = build_sink("file", {"path": str(tmp_path / "out.log")})
    assert isinstance(file_sink, FileSink)
    assert file_sink.path == tmp_path / "out.log"

    with pytest.raises(ValueError):
        build_sink("file")
    with pytest.raises(ValueError):
        build_sink("kafka")


def test_parse_syslog_address():
    assert parse_syslog_address("/dev/log") == "/dev/log"
    assert parse_syslog_address("loghost:1514") == ("loghost", 1514)
    assert parse_syslog_address("loghost") == ("loghost", 514)


@pytest.mark.parametrize("facility, priority", [(None, b"<30>"), ("local0", b"<134>")])
def test_syslog_sink_sends_datagram(facility, priority):
    receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    receiver.bind(("127.0.0.1", 0))
    receiver.settimeout(2)
    options = {"address": f"127.0.0.1:{receiver.getsockname()[1]}"}
    if facility:
        options["facility"] = facility

    sink = build_sink("syslog", options)
    try:
        sink.emit("C: NETDEV DEV: eth0 EVENT: NETDEV_UP (0x1)")
        payload = receiver.recv(1024)
    finally:
        sink.close()
        receiver.close()

    assert isinstance(sink, SyslogSink)
    assert payload == priority + b"chaindbg: C: NETDEV DEV: eth0 EVENT: NETDEV_UP (0x1)\x00"


def test_syslog_sink_rejects_unknown_facility():
    with pytest.raises(ValueError):
        SyslogSink(address=("127.0.0.1", 514), facility="nope")
