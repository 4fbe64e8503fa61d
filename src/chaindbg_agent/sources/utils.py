from __future__ import annotations

import ipaddress
from typing import Any, Mapping, Optional

from chaindbg.events import (
    AddressContext,
    AddressEvent,
    DeviceContext,
    DeviceEvent,
    EventRecord,
    parse_hwaddr,
)
from chaindbg.tables import parse_event


def parse_int(value: Any, default: int = 0) -> int:
    """Accept ints and ``"0x1043"`` / ``"4163"`` style strings."""

    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"invalid integer {value!r}")
    if isinstance(value, int):
        return value
    return int(str(value).strip(), 0)


def device_from_mapping(data: Optional[Mapping[str, Any]]) -> Optional[DeviceContext]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ValueError("'device' must be a mapping for device events")
    return DeviceContext(
        name=str(data.get("name") or ""),
        flags=parse_int(data.get("flags")),
        features=parse_int(data.get("features")),
        mtu=parse_int(data.get("mtu")),
        type=parse_int(data.get("type")),
        address=parse_hwaddr(data.get("address")),
    )


def record_from_mapping(entry: Mapping[str, Any]) -> EventRecord:
    """Build an event record from a decoded JSON object.

    Objects with an ``address`` key are address events whose ``device`` is
    the interface name; everything else is a device event.
    """

    if "event" not in entry:
        raise ValueError("event entry missing 'event' key")
    code = parse_event(entry["event"])

    if "address" in entry:
        address = ipaddress.ip_address(str(entry["address"]))
        device = entry.get("device")
        context = AddressContext(device=str(device), address=address) if device else None
        return AddressEvent(code=code, context=context)

    return DeviceEvent(code=code, device=device_from_mapping(entry.get("device")))
