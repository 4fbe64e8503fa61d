"""Net device notifier chain debugging helpers.

This package holds the pure-Python core that turns network interface and
address notifications into one diagnostic line each.  It covers:

* the symbol tables for ``IFF_*`` interface flags, ``NETIF_F_*`` feature bits
  and netdevice event codes;
* decoding of bitmask values into flag names; and
* rendering of device and address event records, with extra fields chosen by
  event kind.

Nothing in here talks to the kernel or touches shared state, so the renderer
can be called from any number of event source threads.  Subscribing to
notifications lives in :mod:`chaindbg_agent`; delivering lines to log
destinations lives in :mod:`chaindbg_dispatch`.
"""

from .bitmask import decode_bits  # noqa: F401
from .events import AddressContext, AddressEvent, DeviceContext, DeviceEvent  # noqa: F401
from .renderer import EventRenderer, render_event  # noqa: F401
from .tables import NETDEV_FEATURES, NETDEV_FLAGS, EventKind, SymbolTable  # noqa: F401

__all__ = [
    "AddressContext",
    "AddressEvent",
    "DeviceContext",
    "DeviceEvent",
    "EventKind",
    "EventRenderer",
    "NETDEV_FEATURES",
    "NETDEV_FLAGS",
    "SymbolTable",
    "decode_bits",
    "render_event",
]
