"""Door bookkeeping.

A door is a perimeter tile whose passability is decided only by its ``open``
flag: open doors are absent from the blocked set, closed doors are present.
The router registers doors closed; toggling happens on thawed copies.
"""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Set

from .tiles import TileKey


class DoorLedger:
    """Working door map bound to the blocked set it keeps in sync."""

    __slots__ = ("_doors", "_blocked")

    def __init__(self, blocked: Set[TileKey], doors: Optional[Dict[TileKey, bool]] = None):
        self._blocked = blocked
        self._doors: Dict[TileKey, bool] = {}
        for key, is_open in (doors or {}).items():
            self.add(key, is_open)

    def add(self, key: TileKey, is_open: bool = False) -> TileKey:
        self._doors[key] = bool(is_open)
        self._sync(key)
        return key

    def toggle(self, key: TileKey) -> Optional[bool]:
        """Flip the door at ``key``; returns the new ``open`` flag or None if no door is there."""
        if key not in self._doors:
            return None
        self._doors[key] = not self._doors[key]
        self._sync(key)
        return self._doors[key]

    def set_open(self, key: TileKey, is_open: bool) -> None:
        if key not in self._doors:
            raise KeyError(key)
        self._doors[key] = bool(is_open)
        self._sync(key)

    def is_open(self, key: TileKey) -> bool:
        return self._doors[key]

    def _sync(self, key: TileKey) -> None:
        if self._doors[key]:
            self._blocked.discard(key)
        else:
            self._blocked.add(key)

    def __contains__(self, key) -> bool:
        return key in self._doors

    def __iter__(self) -> Iterator[TileKey]:
        return iter(self._doors)

    def __len__(self) -> int:
        return len(self._doors)

    def items(self):
        return self._doors.items()

    def snapshot(self) -> Dict[TileKey, bool]:
        return dict(self._doors)


__all__ = ["DoorLedger"]
