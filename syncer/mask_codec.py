"""
Module: mask_codec.py
Description:
    Converts between named notification flags and the integer bitmask stored
    in the service's `notificationTypes.email` field.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    The flag → bit table is not fixed: it moved between service revisions
    ({64, 32, 128} on the legacy user endpoint, {2, 4, 16} on the settings
    endpoint). Always pass the table in; never look bits up globally.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from syncer.errors import ConfigError

FLAG_TABLES: dict[str, tuple[tuple[str, int], ...]] = {
    "legacy": (("Approved", 64), ("Declined", 32), ("Available", 128)),
    "settings": (("Approved", 2), ("Declined", 4), ("Available", 16)),
}


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


class FlagTable(Mapping[str, int]):
    """
    Ordered, read-only mapping of flag name → bit value.

    Bits must be pairwise disjoint powers of two; anything else is a
    configuration mistake and raises ConfigError.
    """

    def __init__(self, pairs: Iterable[tuple[str, int]]):
        items: dict[str, int] = {}
        seen = 0
        for name, bit in pairs:
            name = name.strip()
            if not name:
                raise ConfigError("Notification flag names cannot be empty")
            if name in items:
                raise ConfigError(f"Duplicate notification flag: {name}")
            if not isinstance(bit, int) or not _is_power_of_two(bit):
                raise ConfigError(f"Flag {name} has value {bit}, which is not a power of two")
            if seen & bit:
                raise ConfigError(f"Flag {name} reuses bit {bit}")
            seen |= bit
            items[name] = bit
        self._items = items

    @classmethod
    def for_revision(cls, revision: str) -> "FlagTable":
        try:
            return cls(FLAG_TABLES[revision])
        except KeyError:
            known = ", ".join(sorted(FLAG_TABLES))
            raise ConfigError(f"Unknown API revision '{revision}' (expected one of: {known})")

    @classmethod
    def parse(cls, text: str) -> "FlagTable":
        """Build a table from `Name=bit,Name=bit` (as found in .env)."""
        pairs = []
        for chunk in text.split(","):
            if not chunk.strip():
                continue
            name, sep, value = chunk.partition("=")
            if not sep:
                raise ConfigError(f"Invalid flag entry '{chunk.strip()}' (expected Name=bit)")
            try:
                pairs.append((name, int(value.strip())))
            except ValueError:
                raise ConfigError(f"Invalid bit value for flag {name.strip()}: '{value.strip()}'")
        if not pairs:
            raise ConfigError("NOTIFICATION_FLAGS is set but defines no flags")
        return cls(pairs)

    def __getitem__(self, name: str) -> int:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v}" for k, v in self._items.items())
        return f"FlagTable({body})"


def encode(selected_flags: Iterable[str], flag_table: Mapping[str, int]) -> int:
    """OR together the bits of the selected flags. No flags → 0 (channel off)."""
    mask = 0
    for name in selected_flags:
        mask |= flag_table[name]
    return mask


def decode(mask: int, flag_table: Mapping[str, int]) -> list[str]:
    return [name for name, bit in flag_table.items() if mask & bit]


def population_count(mask: int) -> int:
    """Number of set bits, clearing the lowest set bit on each pass."""
    if mask < 0:
        raise ValueError(f"Mask must be non-negative, got {mask}")
    count = 0
    while mask:
        mask &= mask - 1
        count += 1
    return count
