"""Entry point for the chaindbg agent."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from threading import Event

from chaindbg.renderer import EventRenderer
from chaindbg_dispatch import SinkRegistry, build_sink

from .config import AgentConfig, load_config
from .sources import create_source

LOG = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def build_registry(config: AgentConfig) -> SinkRegistry:
    registry = SinkRegistry(EventRenderer(capacity=config.renderer.capacity))
    for index, sink_cfg in enumerate(config.sinks):
        registry.register(f"{sink_cfg.type}-{index}", build_sink(sink_cfg.type, sink_cfg.options))
    return registry


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Log network interface and address notifications"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("/etc/chaindbg/chaindbg.yaml"),
        help="Path to the agent configuration file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    config = load_config(args.config)
    registry = build_registry(config)

    stop_event = Event()

    def _shutdown(signum, frame):  # pragma: no cover - signal handler
        LOG.info("received signal %s, shutting down", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    LOG.info("CHAINDBG loading")
    sources = []
    for source_cfg in config.sources:
        source = create_source(registry, source_cfg, stop_event)
        source.start()
        sources.append(source)

    if not sources:
        LOG.warning("no event sources configured; agent will idle")

    try:
        while not stop_event.is_set():
            stop_event.wait(1.0)
    except KeyboardInterrupt:  # pragma: no cover - fallback if signal not set
        stop_event.set()

    for source in sources:
        source.join(timeout=5)
    registry.close()

    LOG.info("CHAINDBG unloading")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
