"""rtnetlink event source built on pyroute2.

rtnetlink only broadcasts the resulting link and address state, not the
notifier chain event that produced it.  :class:`LinkStateTracker` keeps the
last seen state of every link and derives the netdevice events from the
difference, in the order the kernel would have raised them.
"""

from __future__ import annotations

import ipaddress
import logging
import select
from threading import Event, Thread
from typing import Callable, Dict, Iterable, List, Optional

from pyroute2 import IPRoute
from pyroute2.netlink.rtnl import RTMGRP_IPV4_IFADDR, RTMGRP_IPV6_IFADDR, RTMGRP_LINK

from chaindbg.events import (
    AddressContext,
    AddressEvent,
    DeviceContext,
    DeviceEvent,
    EventRecord,
    parse_hwaddr,
)
from chaindbg.tables import EventKind
from chaindbg_dispatch import SinkRegistry

LOG = logging.getLogger(__name__)

IFF_UP = 0x1

# From /usr/include/linux/socket.h: AF_BRIDGE = 7. Bridge port updates reuse
# RTM_NEWLINK/RTM_DELLINK while the device itself stays registered.
AF_BRIDGE = 7


def link_snapshot(msg, features: int = 0) -> DeviceContext:
    """Build a :class:`DeviceContext` from an ``ifinfmsg``."""

    return DeviceContext(
        name=msg.get_attr("IFLA_IFNAME") or "",
        flags=int(msg.get("flags") or 0),
        features=features,
        mtu=int(msg.get_attr("IFLA_MTU") or 0),
        type=int(msg.get("ifi_type") or 0),
        address=parse_hwaddr(msg.get_attr("IFLA_ADDRESS")),
    )


class LinkStateTracker:
    """Translate rtnetlink messages into event records.

    Not thread safe; each netlink source owns one tracker.
    """

    def __init__(self) -> None:
        self._links: Dict[int, DeviceContext] = {}

    def prime(self, links: Iterable) -> None:
        """Record the current links without raising events for them."""

        for msg in links:
            self._links[int(msg.get("index"))] = link_snapshot(msg)
        LOG.debug("link cache primed with %d links", len(self._links))

    def device(self, index: int) -> Optional[DeviceContext]:
        return self._links.get(index)

    def process(self, msg) -> List[EventRecord]:
        event = msg.get("event")
        if event in ("RTM_NEWLINK", "RTM_DELLINK") and msg.get("family") == AF_BRIDGE:
            LOG.debug("ignoring bridge port message %s", event)
            return []
        if event == "RTM_NEWLINK":
            return self._on_newlink(msg)
        if event == "RTM_DELLINK":
            return self._on_dellink(msg)
        if event == "RTM_NEWADDR":
            return self._on_addr(msg, EventKind.UP)
        if event == "RTM_DELADDR":
            return self._on_addr(msg, EventKind.DOWN)
        LOG.debug("ignoring netlink message %s", event)
        return []

    def _on_newlink(self, msg) -> List[EventRecord]:
        index = int(msg.get("index"))
        old = self._links.get(index)
        new = link_snapshot(msg, features=old.features if old else 0)
        self._links[index] = new

        if old is None:
            return [DeviceEvent(EventKind.REGISTER, new)]

        records: List[EventRecord] = []
        if new.name != old.name:
            records.append(DeviceEvent(EventKind.CHANGENAME, new))
        if new.mtu != old.mtu:
            records.append(DeviceEvent(EventKind.PRECHANGEMTU, old))
            records.append(DeviceEvent(EventKind.CHANGEMTU, new))
        if new.type != old.type:
            records.append(DeviceEvent(EventKind.PRE_TYPE_CHANGE, old))
            records.append(DeviceEvent(EventKind.POST_TYPE_CHANGE, new))
        if new.address != old.address:
            records.append(DeviceEvent(EventKind.CHANGEADDR, new))

        changed = old.flags ^ new.flags
        if changed & IFF_UP:
            if new.flags & IFF_UP:
                records.append(DeviceEvent(EventKind.UP, new))
            else:
                records.append(DeviceEvent(EventKind.GOING_DOWN, old))
                records.append(DeviceEvent(EventKind.DOWN, new))
        if changed & ~IFF_UP:
            records.append(DeviceEvent(EventKind.CHANGE, new))
        return records

    def _on_dellink(self, msg) -> List[EventRecord]:
        index = int(msg.get("index"))
        last = self._links.pop(index, None) or link_snapshot(msg)
        return [DeviceEvent(EventKind.UNREGISTER, last)]

    def _on_addr(self, msg, code: EventKind) -> List[EventRecord]:
        raw = msg.get_attr("IFA_ADDRESS") or msg.get_attr("IFA_LOCAL")
        if not raw:
            LOG.debug("address message without IFA_ADDRESS, skipping")
            return []
        address = ipaddress.ip_address(raw)

        link = self._links.get(int(msg.get("index") or 0))
        name = link.name if link else msg.get_attr("IFA_LABEL")
        if not name:
            return [AddressEvent(code, None)]
        return [AddressEvent(code, AddressContext(device=name, address=address))]


class NetlinkEventSource(Thread):
    """Subscribe to rtnetlink link/address groups and publish events."""

    def __init__(
        self,
        registry: SinkRegistry,
        *,
        interval: float,
        stop_event: Event,
        ipv6: bool = True,
        tracker: Optional[LinkStateTracker] = None,
        iproute_factory: Callable[[], IPRoute] = IPRoute,
    ) -> None:
        super().__init__(daemon=True, name="netlink")
        self._registry = registry
        self._interval = interval
        self._stop = stop_event
        self._ipv6 = ipv6
        self._tracker = tracker or LinkStateTracker()
        self._iproute_factory = iproute_factory

    @property
    def groups(self) -> int:
        groups = RTMGRP_LINK | RTMGRP_IPV4_IFADDR
        if self._ipv6:
            groups |= RTMGRP_IPV6_IFADDR
        return groups

    def run(self) -> None:
        LOG.info("Starting netlink event source (ipv6=%s)", self._ipv6)
        while not self._stop.is_set():
            try:
                self._listen()
            except Exception:
                LOG.exception("netlink event source encountered an error")
            self._stop.wait(self._interval)
        LOG.info("Stopping netlink event source")

    def _listen(self) -> None:
        with self._iproute_factory() as ipr:
            ipr.bind(groups=self.groups)
            self._tracker.prime(ipr.get_links())
            while not self._stop.is_set():
                ready, _, _ = select.select([ipr], [], [], self._interval)
                if not ready:
                    continue
                try:
                    messages = ipr.get()
                except Exception:  # pragma: no cover - socket level failure
                    LOG.exception("failed to read netlink messages")
                    continue
                for msg in messages:
                    self.dispatch(msg)

    def dispatch(self, msg) -> int:
        """Feed one netlink message through the tracker and the registry."""

        try:
            records = self._tracker.process(msg)
        except (ValueError, TypeError) as exc:
            LOG.warning("could not decode netlink message: %s", exc)
            return 0
        for record in records:
            self._registry.handle(record)
        return len(records)
