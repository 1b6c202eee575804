"""Tile keys, grid bounds and odd-r neighbour topology.

The generator never stores per-tile data on a grid; everything is expressed as
sets and maps keyed by :class:`TileKey`. Grid topology is supplied as a
``neighbor(col, row, direction)`` callable so the builder stays independent of
how the surrounding game projects its cells.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple, Tuple

MIN_WORLD_SIDE = 15

# Expansion order matters: corridor search and room walks both iterate in this order.
EAST, WEST, NORTH_EAST, NORTH_WEST, SOUTH_EAST, SOUTH_WEST = "E", "W", "NE", "NW", "SE", "SW"
DIRECTIONS: Tuple[str, ...] = (EAST, WEST, NORTH_EAST, NORTH_WEST, SOUTH_EAST, SOUTH_WEST)


class TileKey(NamedTuple):
    col: int
    row: int
    level: int = 0

    def __str__(self) -> str:
        return f"{self.col},{self.row},{self.level}"

    @classmethod
    def parse(cls, text: str) -> "TileKey":
        parts = text.split(",")
        if len(parts) != 3:
            raise ValueError(f"tile key must look like 'col,row,level': {text!r}")
        col, row, level = (int(p) for p in parts)
        return cls(col, row, level)

    def to_dict(self):
        return {"col": self.col, "row": self.row, "z": self.level}


@dataclass(frozen=True)
class WorldSize:
    w: int
    h: int

    def __post_init__(self):
        for name in ("w", "h"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"world {name} must be an int, got {value!r}")
            if value < MIN_WORLD_SIDE:
                raise ValueError(f"world {name}={value} below minimum {MIN_WORLD_SIDE}")

    def contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.w and 0 <= row < self.h

    def to_dict(self):
        return {"w": self.w, "h": self.h}


Coord2D = Tuple[int, int]
NeighborFn = Callable[[int, int, str], Coord2D]


def neighbor_odd_r(col: int, row: int, direction: str) -> Coord2D:
    """Neighbour of ``(col, row)`` on a pointy-top odd-r offset grid.

    Odd rows are shoved half a cell to the right, so the diagonal steps depend
    on row parity. Unknown directions return the cell itself.
    """
    odd = row & 1
    if direction == EAST:
        return col + 1, row
    if direction == WEST:
        return col - 1, row
    if direction == NORTH_EAST:
        return (col + 1, row - 1) if odd else (col, row - 1)
    if direction == NORTH_WEST:
        return (col, row - 1) if odd else (col - 1, row - 1)
    if direction == SOUTH_EAST:
        return (col + 1, row + 1) if odd else (col, row + 1)
    if direction == SOUTH_WEST:
        return (col, row + 1) if odd else (col - 1, row + 1)
    return col, row


def clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


__all__ = [
    "DIRECTIONS",
    "MIN_WORLD_SIDE",
    "TileKey",
    "WorldSize",
    "NeighborFn",
    "neighbor_odd_r",
    "clamp",
]
