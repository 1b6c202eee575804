"""Room rectangles, rejection-sampled placement and tile stamping."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Set, Tuple

from ..logging_utils import get_logger
from .config import PLACEMENT_MARGIN, ROOM_STEP_MAX, ROOM_STEP_MIN, BuildOptions
from .errors import RoomPlacementError
from .tiles import DIRECTIONS, Coord2D, NeighborFn, TileKey, WorldSize, neighbor_odd_r

log = get_logger("hexdungeon.rooms")

RandomFn = Callable[[], float]


def rand_int(rng: RandomFn, lo: int, hi: int) -> int:
    """Uniform integer in ``[lo, hi]`` drawn from a ``[0, 1)`` float source."""
    return lo + int(rng() * (hi - lo + 1))


@dataclass
class RoomDraft:
    """Inclusive rectangle plus the door keys punched into its perimeter so far."""

    left: int
    right: int
    top: int
    bottom: int
    door_keys: List[TileKey] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def center(self) -> Coord2D:
        return ((self.left + self.right) // 2, (self.top + self.bottom) // 2)

    def contains(self, col: int, row: int) -> bool:
        return self.left <= col <= self.right and self.top <= row <= self.bottom

    def is_perimeter(self, col: int, row: int) -> bool:
        return self.contains(col, row) and (
            col in (self.left, self.right) or row in (self.top, self.bottom)
        )

    def interior(self) -> Iterator[Coord2D]:
        for row in range(self.top + 1, self.bottom):
            for col in range(self.left + 1, self.right):
                yield col, row

    def perimeter(self) -> Iterator[Coord2D]:
        for row in range(self.top, self.bottom + 1):
            for col in range(self.left, self.right + 1):
                if col in (self.left, self.right) or row in (self.top, self.bottom):
                    yield col, row


def rects_overlap(a: RoomDraft, b: RoomDraft, pad: int = 0) -> bool:
    """True unless one rectangle lies strictly outside the other (after padding) along some axis."""
    return not (
        a.right + pad < b.left
        or a.left - pad > b.right
        or a.bottom + pad < b.top
        or a.top - pad > b.bottom
    )


def room_centered_at(world: WorldSize, col: int, row: int, w: int, h: int, margin: int = PLACEMENT_MARGIN) -> Optional[RoomDraft]:
    left = col - w // 2
    right = left + w - 1
    top = row - h // 2
    bottom = top + h - 1
    if left < margin or top < margin or right >= world.w - margin or bottom >= world.h - margin:
        return None
    return RoomDraft(left, right, top, bottom)


def stamp_room(room: RoomDraft, world: WorldSize, level: int, floor: Set[TileKey], blocked: Set[TileKey]) -> None:
    # Every room starts fully enclosed; doors and corridors open it later.
    for col, row in room.interior():
        if world.contains(col, row):
            floor.add(TileKey(col, row, level))
    for col, row in room.perimeter():
        if world.contains(col, row):
            blocked.add(TileKey(col, row, level))


def walk(start: Coord2D, direction: str, steps: int, neighbor: NeighborFn) -> Coord2D:
    col, row = start
    for _ in range(steps):
        col, row = neighbor(col, row, direction)
    return col, row


def place_rooms(
    world: WorldSize,
    options: BuildOptions,
    target: int,
    rng: RandomFn,
    floor: Set[TileKey],
    blocked: Set[TileKey],
    *,
    neighbor: NeighborFn = neighbor_odd_r,
) -> Tuple[List[RoomDraft], int]:
    """Place up to ``target`` rooms, stamping each accepted one into ``floor``/``blocked``.

    Room 0 is centred on the grid; failing that raises :class:`RoomPlacementError`.
    Each later room walks 6-14 hops in a random direction from the previous
    room's centre and is retried up to ``options.max_room_attempts`` times.
    Exhausting the budget ends placement early and keeps what was placed.

    Returns ``(rooms, attempts_used)``.
    """
    level = options.z
    rooms: List[RoomDraft] = []
    attempts_used = 1

    center_col = (world.w - 1) // 2
    center_row = (world.h - 1) // 2
    rw = rand_int(rng, options.room_min_w, options.room_max_w)
    rh = rand_int(rng, options.room_min_h, options.room_max_h)
    first = room_centered_at(world, center_col, center_row, rw, rh)
    if first is None:
        log.error(event="room_placement_failed", room=0, world_w=world.w, world_h=world.h, room_w=rw, room_h=rh)
        raise RoomPlacementError(
            f"Failed to place initial {rw}x{rh} room in a {world.w}x{world.h} world. "
            "Increase the estimated world size."
        )
    rooms.append(first)
    stamp_room(first, world, level, floor, blocked)

    for i in range(1, target):
        placed = None
        for _ in range(options.max_room_attempts):
            attempts_used += 1
            rw = rand_int(rng, options.room_min_w, options.room_max_w)
            rh = rand_int(rng, options.room_min_h, options.room_max_h)
            dist = rand_int(rng, ROOM_STEP_MIN, ROOM_STEP_MAX)
            direction = DIRECTIONS[rand_int(rng, 0, len(DIRECTIONS) - 1)]
            col, row = walk(rooms[i - 1].center, direction, dist, neighbor)
            candidate = room_centered_at(world, col, row, rw, rh)
            if candidate is None:
                continue
            if any(rects_overlap(candidate, existing, options.room_pad) for existing in rooms):
                continue
            placed = candidate
            break
        if placed is None:
            log.info(event="room_placement_exhausted", room=i, target=target, placed=len(rooms))
            break
        rooms.append(placed)
        stamp_room(placed, world, level, floor, blocked)
    return rooms, attempts_used


__all__ = [
    "RandomFn",
    "RoomDraft",
    "rand_int",
    "rects_overlap",
    "room_centered_at",
    "stamp_room",
    "place_rooms",
]
