"""Event source implementations used by the chaindbg agent."""

from __future__ import annotations

from threading import Event, Thread

from chaindbg_dispatch import SinkRegistry

from ..config import SourceConfig
from .netlink import LinkStateTracker, NetlinkEventSource  # noqa: F401
from .replay import ReplayEventSource  # noqa: F401

__all__ = [
    "LinkStateTracker",
    "NetlinkEventSource",
    "ReplayEventSource",
    "create_source",
]


def create_source(registry: SinkRegistry, config: SourceConfig, stop_event: Event) -> Thread:
    if config.type == "netlink":
        return NetlinkEventSource(
            registry,
            interval=config.interval,
            stop_event=stop_event,
            ipv6=bool(config.options.get("ipv6", True)),
        )
    if config.type == "replay":
        if config.path is None:
            raise ValueError("replay source requires a 'path'")
        return ReplayEventSource(
            registry=registry,
            path=config.path,
            interval=config.interval,
            stop_event=stop_event,
        )
    raise ValueError(f"unsupported source type '{config.type}'")
