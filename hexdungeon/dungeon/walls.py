"""Render-only wall segments along room perimeters, with gaps at doorways."""
from __future__ import annotations

from typing import Iterable, List, NamedTuple

from .rooms import RoomDraft
from .tiles import TileKey, WorldSize


class WallSegment(NamedTuple):
    start: TileKey
    end: TileKey

    def to_dict(self):
        return {"from": self.start.to_dict(), "to": self.end.to_dict()}


def rebuild_wall_segments(room: RoomDraft, door_keys: Iterable[TileKey], level: int, world: WorldSize) -> List[WallSegment]:
    """Unit edges between adjacent perimeter tiles, skipping any edge that touches one of the room's doors.

    Edges are emitted top, bottom, left, right; never consulted for collision.
    """
    door_set = set(door_keys)
    segments: List[WallSegment] = []

    def edge(a_col, a_row, b_col, b_row):
        a = TileKey(a_col, a_row, level)
        b = TileKey(b_col, b_row, level)
        if a in door_set or b in door_set:
            return
        if not (world.contains(a_col, a_row) and world.contains(b_col, b_row)):
            return
        segments.append(WallSegment(a, b))

    for row in (room.top, room.bottom):
        for col in range(room.left, room.right):
            edge(col, row, col + 1, row)
    for col in (room.left, room.right):
        for row in range(room.top, room.bottom):
            edge(col, row, col, row + 1)
    return segments


__all__ = ["WallSegment", "rebuild_wall_segments"]
