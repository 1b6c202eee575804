"""Difficulty-driven sizing: how many rooms to ask for and how big a grid to allocate."""
from __future__ import annotations

import math
from typing import NamedTuple

from .tiles import MIN_WORLD_SIDE

MIN_ROOMS = 3
DELTA_BONUS_K = 1.35


class WorldEstimate(NamedTuple):
    room_count: int
    w: int
    h: int


def base_rooms_from_delta(delta: int) -> int:
    if delta <= -4:
        return 3
    if delta in (-3, -2):
        return 4
    return 5


def delta_bonus(delta: int, k: float = DELTA_BONUS_K) -> int:
    """Diminishing extra rooms for a player who outlevels the monsters (delta >= 1)."""
    return math.ceil(k * math.sqrt(delta))


def compute_room_count(player_level: int, monster_level: int, difficulty_level: int) -> int:
    delta = int(player_level) - int(monster_level)
    rooms = base_rooms_from_delta(delta) + int(difficulty_level) * 2
    if delta >= 1:
        rooms += delta_bonus(delta)
    return max(MIN_ROOMS, int(rooms))


def estimate_world_size(
    player_level: int,
    monster_level: int,
    difficulty_level: int,
    room_min_w: int = 7,
    room_max_w: int = 11,
    room_min_h: int = 5,
    room_max_h: int = 9,
    margin: int = 6,
    corridor_pad: int = 3,
) -> WorldEstimate:
    """Conservative grid size for ``compute_room_count`` rooms packed on a square of cells.

    Each cell covers the largest room plus ``corridor_pad``; ``margin`` pads every
    edge. Advisory only: the builder does not enforce that its footprint fits.
    ``room_min_w``/``room_min_h`` are accepted for signature symmetry with the
    build knobs and do not affect the estimate.
    """
    room_count = compute_room_count(player_level, monster_level, difficulty_level)
    side = math.ceil(math.sqrt(room_count))
    cell_w = room_max_w + corridor_pad
    cell_h = room_max_h + corridor_pad
    w = side * cell_w + margin * 2
    h = side * cell_h + margin * 2
    return WorldEstimate(room_count, max(MIN_WORLD_SIDE, int(w)), max(MIN_WORLD_SIDE, int(h)))


__all__ = [
    "MIN_ROOMS",
    "WorldEstimate",
    "base_rooms_from_delta",
    "delta_bonus",
    "compute_room_count",
    "estimate_world_size",
]
