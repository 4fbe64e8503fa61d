"""Symbol tables for netdevice notifier events and bitfields.

The names mirror ``include/linux/netdevice.h``, ``include/uapi/linux/if.h``
and the ethtool feature strings in ``net/core/ethtool.c``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional, Sequence, Tuple

IFF_FLAGS_WIDTH = 32
NETDEV_FEATURES_WIDTH = 64


@dataclass(frozen=True)
class SymbolTable:
    """Positional bit-name table.

    The index of a slot is the bit it names. A ``None`` slot terminates the
    table: lookups at or past it return ``None`` and decoding stops there,
    even if a later slot carries a name.
    """

    name: str
    names: Tuple[Optional[str], ...]
    _known: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        known = len(self.names)
        for index, value in enumerate(self.names):
            if not value:
                known = index
                break
        object.__setattr__(self, "_known", known)

    @classmethod
    def of(cls, name: str, names: Sequence[Optional[str]]) -> "SymbolTable":
        return cls(name=name, names=tuple(names))

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self.names)

    def lookup(self, bit_index: int) -> Optional[str]:
        if bit_index < 0 or bit_index >= self._known:
            return None
        return self.names[bit_index]

    def known_length(self) -> int:
        """Number of slots before the first terminator."""

        return self._known


NETDEV_FLAGS = SymbolTable.of(
    "netdev_flags",
    [
        "IFF_UP",
        "IFF_BROADCAST",
        "IFF_DEBUG",
        "IFF_LOOPBACK",
        "IFF_POINTOPOINT",
        "IFF_NOTRAILERS",
        "IFF_RUNNING",
        "IFF_NOARP",
        "IFF_PROMISC",
        "IFF_ALLMULTI",
        "IFF_MASTER",
        "IFF_SLAVE",
        "IFF_MULTICAST",
        "IFF_PORTSEL",
        "IFF_AUTOMEDIA",
        "IFF_DYNAMIC",
        "IFF_LOWER_UP",
        "IFF_DORMANT",
        "IFF_ECHO",
    ],
)

NETDEV_FEATURES = SymbolTable.of(
    "netdev_features",
    [
        "tx-scatter-gather",
        "tx-checksum-ipv4",
        "UNUSED_NETIF_F_1",
        "tx-checksum-ip-generic",
        "tx-checksum-ipv6",
        "highdma",
        "tx-scatter-gather-fraglist",
        "tx-vlan-hw-insert",
        "rx-vlan-hw-parse",
        "rx-vlan-filter",
        "vlan-challenged",
        "tx-generic-segmentation",
        "tx-lockless",
        "netns-local",
        "rx-gro",
        "rx-lro",
        "tx-tcp-segmentation",
        "tx-udp-fragmentation",
        "tx-gso-robust",
        "tx-tcp-ecn-segmentation",
        "tx-tcp6-segmentation",
        "tx-fcoe-segmentation",
        "GSO_RESERVED1",
        "GSO_RESERVED2",
        "tx-checksum-fcoe-crc",
        "tx-checksum-sctp",
        "fcoe-mtu",
        "rx-ntuple-filter",
        "rx-hashing",
        "rx-checksum",
        "tx-nocache-copy",
        "loopback",
        "rx-fcs",
        "rx-all",
        "tx-vlan-stag-hw-insert",
        "rx-vlan-stag-hw-parse",
        "rx-vlan-stag-filter",
        "l2-fwd-offload",
        "busy-poll",
    ],
)


class EventKind(IntEnum):
    """Netdevice notifier chain event codes. Code 0 is unused."""

    UP = 1
    DOWN = 2
    REBOOT = 3
    CHANGE = 4
    REGISTER = 5
    UNREGISTER = 6
    CHANGEMTU = 7
    CHANGEADDR = 8
    GOING_DOWN = 9
    CHANGENAME = 10
    FEAT_CHANGE = 11
    BONDING_FAILOVER = 12
    PRE_UP = 13
    PRE_TYPE_CHANGE = 14
    POST_TYPE_CHANGE = 15
    POST_INIT = 16
    UNREGISTER_FINAL = 17
    RELEASE = 18
    NOTIFY_PEERS = 19
    JOIN = 20
    CHANGEUPPER = 21
    RESEND_IGMP = 22
    PRECHANGEMTU = 23
    CHANGEINFODATA = 24


# Slot 0 is the reserved code.
NETDEV_EVENTS: Tuple[Optional[str], ...] = (None,) + tuple(
    kind.name for kind in sorted(EventKind)
)
LAST_EVENT_CODE = len(NETDEV_EVENTS) - 1


def event_name(code: int) -> Optional[str]:
    """Return the short event name for ``code`` or ``None`` if unknown."""

    if code < 1 or code > LAST_EVENT_CODE:
        return None
    return NETDEV_EVENTS[code]


def parse_event(value) -> int:
    """Resolve an event given as a code, a hex string or a name.

    ``"CHANGE"``, ``"NETDEV_CHANGE"``, ``4`` and ``"0x4"`` all give ``4``.
    Unknown names raise ``ValueError``; unknown numbers pass through.
    """

    if isinstance(value, bool):
        raise ValueError(f"invalid event code {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text, 0)
    except ValueError:
        pass
    key = text.upper()
    if key.startswith("NETDEV_"):
        key = key[len("NETDEV_"):]
    try:
        return int(EventKind[key])
    except KeyError:
        raise ValueError(f"unknown event name '{value}'") from None
