"""Corridor routing between consecutive rooms.

Strategy per room pair (previous, current):
  * Pick the perimeter tile on each room that faces the other room's centre.
  * Register both tiles as closed doors.
  * Carve the tile just outside each door so every corridor has a foothold.
  * Breadth-first search between the two footholds over the whole grid. Only
    leaving the grid is forbidden: room walls are carved through, so a corridor
    may puncture a third room's perimeter.
  * Carve the returned path (one tile wide).
Unreachable goals leave the pair unconnected; nothing is repaired afterwards.
"""
from collections import deque
from typing import Deque, Dict, List, Optional, Set

from ..logging_utils import get_logger
from .doors import DoorLedger
from .rooms import RoomDraft
from .tiles import DIRECTIONS, Coord2D, NeighborFn, TileKey, WorldSize, clamp, neighbor_odd_r

log = get_logger("hexdungeon.tunnels")


def pick_perimeter_door_toward(room: RoomDraft, target_col: int, target_row: int) -> Coord2D:
    cx, cy = room.center
    dc = target_col - cx
    dr = target_row - cy
    if abs(dc) >= abs(dr):
        row = clamp(target_row, room.top + 1, room.bottom - 1)
        return (room.right, row) if dc >= 0 else (room.left, row)
    col = clamp(target_col, room.left + 1, room.right - 1)
    return (col, room.bottom) if dr >= 0 else (col, room.top)


def step_out(room: RoomDraft, door: Coord2D) -> Coord2D:
    """Tile one step outward from a perimeter door, away from the room interior."""
    col, row = door
    if row == room.top:
        return col, row - 1
    if row == room.bottom:
        return col, row + 1
    if col == room.left:
        return col - 1, row
    if col == room.right:
        return col + 1, row
    return col, row


def carve_tile(key: TileKey, floor: Set[TileKey], blocked: Set[TileKey]) -> None:
    floor.add(key)
    blocked.discard(key)


def _carve_unless_door(key: TileKey, floor: Set[TileKey], blocked: Set[TileKey], doors: DoorLedger) -> None:
    # Door passability belongs to the door flag; corridors run up to a door but never reopen it.
    if key in doors:
        return
    carve_tile(key, floor, blocked)


def bfs_path(
    world: WorldSize,
    start: Coord2D,
    goal: Coord2D,
    level: int = 0,
    neighbor: NeighborFn = neighbor_odd_r,
) -> Optional[List[TileKey]]:
    """Shortest hop path from ``start`` to ``goal``; only out-of-bounds cells are impassable.

    Neighbours expand in ``DIRECTIONS`` order (E, W, NE, NW, SE, SW). The
    returned list excludes ``start`` and includes ``goal``; it is empty when
    they coincide and None when the goal cannot be reached.
    """
    start_key = TileKey(start[0], start[1], level)
    goal_key = TileKey(goal[0], goal[1], level)
    q: Deque[TileKey] = deque([start_key])
    visited = {start_key}
    parent: Dict[TileKey, TileKey] = {}
    while q:
        cur = q.popleft()
        if cur == goal_key:
            break
        for direction in DIRECTIONS:
            nc, nr = neighbor(cur.col, cur.row, direction)
            if not world.contains(nc, nr):
                continue
            nk = TileKey(nc, nr, level)
            if nk in visited:
                continue
            visited.add(nk)
            parent[nk] = cur
            q.append(nk)
    if goal_key != start_key and goal_key not in parent:
        return None
    path: List[TileKey] = []
    k = goal_key
    while k != start_key:
        path.append(k)
        k = parent[k]
    path.reverse()
    return path


def connect_rooms(
    world: WorldSize,
    rooms: List[RoomDraft],
    level: int,
    floor: Set[TileKey],
    blocked: Set[TileKey],
    doors: DoorLedger,
    *,
    neighbor: NeighborFn = neighbor_odd_r,
) -> Dict[str, int]:
    """Join each room to the previous one with a door pair and a carved corridor.

    Returns counts ``{"corridors_carved", "corridors_failed", "doors_created"}``.
    """
    counts = {"corridors_carved": 0, "corridors_failed": 0, "doors_created": 0}
    for i in range(1, len(rooms)):
        a, b = rooms[i - 1], rooms[i]
        ac, bc = a.center, b.center
        a_door = pick_perimeter_door_toward(a, bc[0], bc[1])
        b_door = pick_perimeter_door_toward(b, ac[0], ac[1])
        for room, (col, row) in ((a, a_door), (b, b_door)):
            key = TileKey(col, row, level)
            # A room whose two neighbours lie the same way reuses one door tile
            if key not in doors:
                counts["doors_created"] += 1
            room.door_keys.append(doors.add(key, False))

        start = step_out(a, a_door)
        goal = step_out(b, b_door)
        for col, row in (start, goal):
            if world.contains(col, row):
                _carve_unless_door(TileKey(col, row, level), floor, blocked, doors)

        path = bfs_path(world, start, goal, level, neighbor)
        if path is None:
            counts["corridors_failed"] += 1
            log.debug(event="corridor_unreachable", room_from=i - 1, room_to=i, start=start, goal=goal)
            continue
        for key in path:
            _carve_unless_door(key, floor, blocked, doors)
        counts["corridors_carved"] += 1
    return counts


__all__ = [
    "pick_perimeter_door_toward",
    "step_out",
    "carve_tile",
    "bfs_path",
    "connect_rooms",
]
