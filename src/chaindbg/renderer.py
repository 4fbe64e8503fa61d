"""Render event records into single diagnostic lines."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .bitmask import decode_bits
from .events import AddressEvent, DeviceContext, DeviceEvent, EventRecord, format_hwaddr
from .tables import (
    IFF_FLAGS_WIDTH,
    NETDEV_FEATURES,
    NETDEV_FEATURES_WIDTH,
    NETDEV_FLAGS,
    EventKind,
    event_name,
)

LOG = logging.getLogger(__name__)

LINE_PREFIX = "C:"
NETDEV_TAG = "NETDEV"
INETADDR_TAG = "INETADDR"
INET6ADDR_TAG = "INET6ADDR"
EMPTY_NAME = '""'

# Fixed base plus a margin per known feature name, enough for a fully set
# feature mask.
DEFAULT_CAPACITY = 128 + len(NETDEV_FEATURES) * 32

IFF_FLAGS_MASK = (1 << IFF_FLAGS_WIDTH) - 1
NETDEV_FEATURES_MASK = (1 << NETDEV_FEATURES_WIDTH) - 1

FieldRenderer = Callable[[int, DeviceContext], List[str]]


class _LineBuffer:
    """Bounded accumulator for the segments of one line.

    Segments that do not fit are dropped whole and nothing is accepted after
    the first miss. The leading segment is cut at the capacity instead.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._parts: List[str] = []
        self._length = 0
        self.truncated = False

    def append(self, text: str) -> bool:
        if self.truncated:
            return False
        segment = f" {text}" if self._parts else text
        room = self._capacity - self._length
        if len(segment) > room:
            self.truncated = True
            if not self._parts:
                self._parts.append(segment[:room])
                self._length = room
            return False
        self._parts.append(segment)
        self._length += len(segment)
        return True

    def extend(self, segments: List[str]) -> None:
        for segment in segments:
            if not self.append(segment):
                return

    def text(self) -> str:
        return "".join(self._parts)


class EventRenderer:
    """Turn :class:`DeviceEvent` / :class:`AddressEvent` records into text.

    The renderer holds no mutable state; one instance may be shared by every
    event source thread.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        self._capacity = capacity if capacity is not None else DEFAULT_CAPACITY
        if self._capacity <= 0:
            raise ValueError("renderer capacity must be positive")
        self._device_fields: Dict[int, FieldRenderer] = {
            EventKind.CHANGEADDR: self._render_hwaddr,
            EventKind.PRECHANGEMTU: self._render_mtu,
            EventKind.CHANGEMTU: self._render_mtu,
            EventKind.PRE_TYPE_CHANGE: self._render_type,
            EventKind.POST_TYPE_CHANGE: self._render_type,
            EventKind.CHANGE: self._render_flags,
            EventKind.FEAT_CHANGE: self._render_features,
        }

    @property
    def capacity(self) -> int:
        return self._capacity

    def render(self, record: EventRecord) -> Optional[str]:
        """Return the line for ``record`` or ``None`` if it has no device."""

        if isinstance(record, DeviceEvent):
            return self._render_device_event(record)
        if isinstance(record, AddressEvent):
            return self._render_address_event(record)
        raise TypeError(f"Unsupported event record: {type(record)!r}")

    # ------------------------------------------------------------------
    # Record types
    # ------------------------------------------------------------------
    def _render_device_event(self, record: DeviceEvent) -> Optional[str]:
        device = record.device
        if device is None:
            return None

        buf = _LineBuffer(self._capacity)
        buf.append(self._header(NETDEV_TAG, device.name, record.code))
        fields = self._device_fields.get(record.code)
        if fields is not None:
            buf.extend(fields(record.code, device))
        return self._finish(buf)

    def _render_address_event(self, record: AddressEvent) -> Optional[str]:
        context = record.context
        if context is None:
            return None

        tag = INET6ADDR_TAG if context.version == 6 else INETADDR_TAG
        buf = _LineBuffer(self._capacity)
        buf.append(self._header(tag, context.device, record.code))
        buf.append(f"ADDR: {context.address.compressed}")
        return self._finish(buf)

    def _header(self, tag: str, device_name: str, code: int) -> str:
        name = device_name or EMPTY_NAME
        return (
            f"{LINE_PREFIX} {tag} DEV: {name} "
            f"EVENT: {self._event_label(code)} ({code:#x})"
        )

    @staticmethod
    def _event_label(code: int) -> str:
        name = event_name(code)
        if name is None:
            return f"unrecognized event code {code}"
        return f"NETDEV_{name}"

    def _finish(self, buf: _LineBuffer) -> str:
        line = buf.text()
        if buf.truncated:
            LOG.debug("rendered line truncated at %d characters", self._capacity)
        return line

    # ------------------------------------------------------------------
    # Per-event fields
    # ------------------------------------------------------------------
    @staticmethod
    def _render_hwaddr(code: int, device: DeviceContext) -> List[str]:
        return [f"MAC: {format_hwaddr(device.address) or '<none>'}"]

    @staticmethod
    def _render_mtu(code: int, device: DeviceContext) -> List[str]:
        label = "NEW" if code == EventKind.CHANGEMTU else "OLD"
        return [f"{label} MTU: {device.mtu}"]

    @staticmethod
    def _render_type(code: int, device: DeviceContext) -> List[str]:
        label = "NEW" if code == EventKind.POST_TYPE_CHANGE else "OLD"
        return [f"{label} TYPE: {device.type:#x}"]

    @staticmethod
    def _render_flags(code: int, device: DeviceContext) -> List[str]:
        return [
            f"FLAGS: ({device.flags & IFF_FLAGS_MASK:#x})",
            *decode_bits(device.flags, IFF_FLAGS_WIDTH, NETDEV_FLAGS),
        ]

    @staticmethod
    def _render_features(code: int, device: DeviceContext) -> List[str]:
        return [
            f"FEATURES: ({device.features & NETDEV_FEATURES_MASK:#x})",
            *decode_bits(device.features, NETDEV_FEATURES_WIDTH, NETDEV_FEATURES),
        ]


_DEFAULT_RENDERER = EventRenderer()


def render_event(record: EventRecord) -> Optional[str]:
    """Render ``record`` with the default capacity."""

    return _DEFAULT_RENDERER.render(record)
