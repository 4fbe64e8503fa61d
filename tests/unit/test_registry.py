import pytest

from chaindbg.events import AddressEvent, DeviceContext, DeviceEvent
from chaindbg.renderer import EventRenderer
from chaindbg.tables import EventKind
from chaindbg_dispatch import LineSink, SinkRegistry


class RecordingSink(LineSink):
    def __init__(self):
        self.lines: list[str] = []
        self.closed = False

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def close(self) -> None:
        self.closed = True


class BrokenSink(LineSink):
    def emit(self, line: str) -> None:
        raise OSError("disk full")


def test_registry_dispatches_rendered_lines():
    registry = SinkRegistry()
    first, second = RecordingSink(), RecordingSink()
    registry.register("first", first)
    registry.register("second", second)

    handled = registry.handle(DeviceEvent(EventKind.UP, DeviceContext(name="eth0")))

    assert handled is True
    assert first.lines == ["C: NETDEV DEV: eth0 EVENT: NETDEV_UP (0x1)"]
    assert second.lines == first.lines


def test_registry_skips_records_without_device():
    registry = SinkRegistry()
    sink = RecordingSink()
    registry.register("rec", sink)

    assert registry.handle(AddressEvent(EventKind.UP, None)) is False
    assert sink.lines == []


def test_failing_sink_does_not_stop_others():
    registry = SinkRegistry()
    sink = RecordingSink()
    registry.register("broken", BrokenSink())
    registry.register("rec", sink)

    registry.handle(DeviceEvent(EventKind.DOWN, DeviceContext(name="eth0")))

    assert len(sink.lines) == 1


def test_registry_uses_given_renderer():
    registry = SinkRegistry(EventRenderer(capacity=9))
    sink = RecordingSink()
    registry.register("rec", sink)

    registry.handle(DeviceEvent(EventKind.UP, DeviceContext(name="eth0")))

    assert sink.lines == ["C: NETDEV"]


def test_registry_rejects_duplicate_registration():
    registry = SinkRegistry()
    sink = RecordingSink()

    registry.register("rec", sink)

    with pytest.raises(ValueError):
        registry.register("rec", sink)


def test_registry_unregister_and_close():
    registry = SinkRegistry()
    kept, dropped = RecordingSink(), RecordingSink()
    registry.register("kept", kept)
    registry.register("dropped", dropped)

    assert registry.unregister("dropped") is dropped
    assert registry.unregister("missing") is None
    registry.close()

    assert kept.closed is True
    assert dropped.closed is False


def test_registry_rejects_unknown_event_types():
    with pytest.raises(TypeError):
        SinkRegistry().handle(object())  # type: ignore[arg-type]
