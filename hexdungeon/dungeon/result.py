"""Immutable dungeon output and its mutable working counterpart.

``DungeonResult`` is what the builder hands out: every collection is a frozen
copy, so any number of readers may share one. A caller that needs a variant
(toggling a door, forcing an extra doorway) calls :meth:`DungeonResult.thaw`,
edits the returned :class:`MutableDungeonState` and freezes it again.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from .doors import DoorLedger
from .rooms import RoomDraft
from .tiles import TileKey
from .walls import WallSegment


@dataclass(frozen=True)
class Door:
    open: bool = False


@dataclass(frozen=True)
class Room:
    left: int
    right: int
    top: int
    bottom: int
    door_keys: Tuple[TileKey, ...] = ()

    @property
    def center(self) -> Tuple[int, int]:
        return ((self.left + self.right) // 2, (self.top + self.bottom) // 2)

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    def to_draft(self) -> RoomDraft:
        return RoomDraft(self.left, self.right, self.top, self.bottom, list(self.door_keys))

    @classmethod
    def from_draft(cls, draft: RoomDraft) -> "Room":
        return cls(draft.left, draft.right, draft.top, draft.bottom, tuple(draft.door_keys))

    def to_dict(self):
        return {
            "left": self.left,
            "right": self.right,
            "top": self.top,
            "bottom": self.bottom,
            "door_keys": [str(k) for k in self.door_keys],
        }


def _freeze_value(value):
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze_value(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze_value(v) for v in value)
    return value


def _thaw_value(value):
    if isinstance(value, Mapping):
        return {k: _thaw_value(v) for k, v in value.items()}
    if isinstance(value, tuple) and not hasattr(value, "_fields"):
        return [_thaw_value(v) for v in value]
    return value


def _plain(value):
    if isinstance(value, TileKey):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class DungeonResult:
    meta: Mapping[str, Any]
    rooms: Tuple[Room, ...]
    spawn: TileKey
    floor: frozenset
    blocked: frozenset
    doors: Mapping[TileKey, Door]
    walls: Tuple[WallSegment, ...]

    def thaw(self) -> "MutableDungeonState":
        """Fresh mutable copies of every collection; this result is left untouched."""
        blocked = set(self.blocked)
        return MutableDungeonState(
            meta=_thaw_value(self.meta),
            rooms=[r.to_draft() for r in self.rooms],
            spawn=self.spawn,
            floor=set(self.floor),
            blocked=blocked,
            doors=DoorLedger(blocked, {k: d.open for k, d in self.doors.items()}),
            walls=list(self.walls),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view; tile keys become ``"col,row,level"`` strings, sets are sorted."""
        return {
            "meta": _plain(self.meta),
            "rooms": [r.to_dict() for r in self.rooms],
            "spawn": self.spawn.to_dict(),
            "floor": [str(k) for k in sorted(self.floor)],
            "blocked": [str(k) for k in sorted(self.blocked)],
            "doors": {str(k): {"open": d.open} for k, d in sorted(self.doors.items(), key=lambda kv: kv[0])},
            "walls": [w.to_dict() for w in self.walls],
        }


@dataclass
class MutableDungeonState:
    meta: Dict[str, Any]
    rooms: List[RoomDraft]
    spawn: TileKey
    floor: Set[TileKey]
    blocked: Set[TileKey]
    doors: DoorLedger
    walls: List[WallSegment] = field(default_factory=list)

    def toggle_door(self, key: TileKey) -> Optional[bool]:
        return self.doors.toggle(key)

    def freeze(self) -> DungeonResult:
        return freeze_dungeon(self.meta, self.rooms, self.spawn, self.floor, self.blocked, self.doors, self.walls)


def freeze_dungeon(meta, rooms, spawn, floor, blocked, doors, walls) -> DungeonResult:
    return DungeonResult(
        meta=_freeze_value(dict(meta)),
        rooms=tuple(Room.from_draft(r) for r in rooms),
        spawn=spawn,
        floor=frozenset(floor),
        blocked=frozenset(blocked),
        doors=MappingProxyType({k: Door(bool(v)) for k, v in doors.items()}),
        walls=tuple(walls),
    )


__all__ = ["Door", "Room", "DungeonResult", "MutableDungeonState", "freeze_dungeon"]
