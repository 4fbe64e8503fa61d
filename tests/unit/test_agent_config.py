from pathlib import Path

import pytest

from chaindbg_agent.config import load_config


def test_load_config(tmp_path: Path):
    config_path = tmp_path / "chaindbg.yaml"
    config_path.write_text(
        """
renderer:
  capacity: 512
sources:
  - type: netlink
    interval: 2
    options:
      ipv6: false
  - type: replay
    path: /var/lib/chaindbg/events.jsonl
sinks:
  - type: log
  - type: file
    options:
      path: /var/log/chaindbg.log
"""
    )

    cfg = load_config(config_path)

    assert cfg.renderer.capacity == 512
    assert len(cfg.sources) == 2
    netlink = cfg.sources[0]
    assert netlink.type == "netlink"
    assert netlink.path is None
    assert netlink.interval == pytest.approx(2.0)
    assert netlink.options == {"ipv6": False}

    replay = cfg.sources[1]
    assert replay.type == "replay"
    assert replay.path == Path("/var/lib/chaindbg/events.jsonl")
    assert replay.interval == pytest.approx(1.0)
    assert replay.options == {}

    assert [sink.type for sink in cfg.sinks] == ["log", "file"]
    assert cfg.sinks[1].options["path"] == "/var/log/chaindbg.log"


def test_missing_file_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path / "absent.yaml")

    assert cfg.renderer.capacity is None
    assert [source.type for source in cfg.sources] == ["netlink"]
    assert [sink.type for sink in cfg.sinks] == ["log"]


def test_sinks_default_to_log(tmp_path: Path):
    config_path = tmp_path / "chaindbg.yaml"
    config_path.write_text("sources: []\n")

    cfg = load_config(config_path)

    assert cfg.sources == []
    assert [sink.type for sink in cfg.sinks] == ["log"]


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "sources: netlink\n",
        "sinks:\n  - type: file\n    options: [1, 2]\n",
        "renderer: 12\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str):
    config_path = tmp_path / "chaindbg.yaml"
    config_path.write_text(content)

    with pytest.raises(ValueError):
        load_config(config_path)
