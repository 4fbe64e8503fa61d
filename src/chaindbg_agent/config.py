"""YAML configuration loader for the chaindbg agent."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import yaml

LOG = logging.getLogger(__name__)


@dataclass
class RendererConfig:
    capacity: Optional[int] = None


@dataclass
class SourceConfig:
    type: str
    path: Optional[Path] = None
    interval: float = 1.0
    options: dict = field(default_factory=dict)


@dataclass
class SinkConfig:
    type: str
    options: dict = field(default_factory=dict)


@dataclass
class AgentConfig:
    renderer: RendererConfig = field(default_factory=RendererConfig)
    sources: Sequence[SourceConfig] = field(default_factory=list)
    sinks: Sequence[SinkConfig] = field(default_factory=list)


def default_config() -> AgentConfig:
    """Watch rtnetlink and log every line, the behaviour with no config file."""

    return AgentConfig(
        sources=[SourceConfig(type="netlink")],
        sinks=[SinkConfig(type="log")],
    )


def _parse_options(entry: dict, kind: str) -> dict:
    options = entry.get("options", {})
    if not isinstance(options, dict):
        raise ValueError(f"{kind} 'options' must be a mapping if provided")
    return options


def _parse_renderer(section: dict) -> RendererConfig:
    if not isinstance(section, dict):
        raise ValueError("'renderer' section must be a mapping")
    capacity = section.get("capacity")
    return RendererConfig(capacity=int(capacity) if capacity is not None else None)


def _parse_sources(entries: Iterable[dict]) -> List[SourceConfig]:
    sources: List[SourceConfig] = []
    for entry in entries:
        path = entry.get("path")
        sources.append(
            SourceConfig(
                type=str(entry["type"]),
                path=Path(path) if path is not None else None,
                interval=float(entry.get("interval", entry.get("poll_interval", 1.0))),
                options=_parse_options(entry, "source"),
            )
        )
    return sources


def _parse_sinks(entries: Iterable[dict]) -> List[SinkConfig]:
    return [
        SinkConfig(type=str(entry["type"]), options=_parse_options(entry, "sink"))
        for entry in entries
    ]


def _section_list(data: dict, key: str) -> list:
    section = data.get(key, [])
    if not isinstance(section, list):
        raise ValueError(f"'{key}' section must be a list")
    return section


def load_config(path: Path) -> AgentConfig:
    if not path.exists():
        LOG.warning("config file %s not found, using defaults", path)
        return default_config()

    data = yaml.safe_load(path.read_text())
    if data is None:
        return default_config()
    if not isinstance(data, dict):
        raise ValueError("Agent configuration must be a mapping")

    renderer = _parse_renderer(data.get("renderer", {}))

    sources = _parse_sources(_section_list(data, "sources"))
    sinks = _parse_sinks(_section_list(data, "sinks"))
    if not sinks:
        sinks = [SinkConfig(type="log")]

    return AgentConfig(renderer=renderer, sources=sources, sinks=sinks)
