"""Decode bitmask values into symbolic names."""

from __future__ import annotations

from typing import List

from .tables import SymbolTable


def decode_bits(bits: int, bit_width: int, table: SymbolTable) -> List[str]:
    """Return the names of the set bits in ``bits``, lowest bit first.

    Only positions below both ``bit_width`` and the table length are looked
    at. Scanning stops at the first position the table has no name for, so
    set bits beyond a gap are never reported. Set bits without a name are
    dropped silently.
    """

    if bit_width <= 0 or not bits:
        return []

    bits &= (1 << bit_width) - 1
    names: List[str] = []
    for index in range(min(bit_width, len(table))):
        name = table.lookup(index)
        if name is None:
            break
        if (bits >> index) & 1:
            names.append(name)
    return names


def format_bits(bits: int, bit_width: int, table: SymbolTable) -> str:
    return " ".join(decode_bits(bits, bit_width, table))
