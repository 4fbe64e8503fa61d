"""Event records handed from event sources to the renderer.

Records are frozen snapshots taken when the notification arrives. They carry
no identity and are dropped as soon as they have been rendered.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass(frozen=True)
class DeviceContext:
    """State of a net device at the time of an event.

    Attributes
    ----------
    name:
        Interface name. May be empty when the source could not resolve it.
    flags:
        ``IFF_*`` interface flags (32 bits).
    features:
        ``NETIF_F_*`` feature bits (64 bits).
    mtu:
        Current MTU.
    type:
        ``ARPHRD_*`` link-layer type.
    address:
        Hardware address bytes, ``None`` when the device has none.
    """

    name: str = ""
    flags: int = 0
    features: int = 0
    mtu: int = 0
    type: int = 0
    address: Optional[bytes] = None


@dataclass(frozen=True)
class AddressContext:
    """An IPv4 or IPv6 address bound to a named device."""

    device: str
    address: IPAddress

    @property
    def version(self) -> int:
        return self.address.version


@dataclass(frozen=True)
class DeviceEvent:
    """Notification from the netdevice chain.

    ``device`` is ``None`` when the source could not resolve a device.
    """

    code: int
    device: Optional[DeviceContext]


@dataclass(frozen=True)
class AddressEvent:
    """Notification from the inetaddr / inet6addr chains."""

    code: int
    context: Optional[AddressContext]


EventRecord = Union[DeviceEvent, AddressEvent]


def parse_hwaddr(value: Union[str, bytes, None]) -> Optional[bytes]:
    """Convert ``aa:bb:cc:dd:ee:ff`` (or ``-`` separated) text to bytes."""

    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    text = value.strip()
    if not text:
        return None
    return bytes(int(part, 16) for part in text.replace("-", ":").split(":"))


def format_hwaddr(value: Optional[bytes]) -> str:
    return ":".join(f"{octet:02x}" for octet in value or b"")
