#!/usr/bin/env python3
"""Decode interface flag or feature bitmasks into their symbolic names."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from chaindbg.bitmask import format_bits  # noqa: E402
from chaindbg.tables import (  # noqa: E402
    IFF_FLAGS_WIDTH,
    NETDEV_FEATURES,
    NETDEV_FEATURES_WIDTH,
    NETDEV_FLAGS,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--flags",
        type=lambda value: int(value, 0),
        help="IFF_* flags value, e.g. 0x1043",
    )
    group.add_argument(
        "--features",
        type=lambda value: int(value, 0),
        help="NETIF_F_* features value, e.g. 0x1ffffffff",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.flags is not None:
        print(f"FLAGS: ({args.flags:#x}) {format_bits(args.flags, IFF_FLAGS_WIDTH, NETDEV_FLAGS)}")
    else:
        print(
            f"FEATURES: ({args.features:#x}) "
            f"{format_bits(args.features, NETDEV_FEATURES_WIDTH, NETDEV_FEATURES)}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
