"""ASCII preview of a generated dungeon for terminals and test failure messages.

Legend: ``#`` wall, ``.`` floor, ``+`` closed door, ``'`` open door,
``@`` spawn, space for untouched grid.
"""
from __future__ import annotations

from typing import List

from .result import DungeonResult
from .tiles import TileKey, WorldSize

WALL, FLOOR, DOOR_CLOSED, DOOR_OPEN, SPAWN, EMPTY = "#", ".", "+", "'", "@", " "


def render_ascii(dungeon: DungeonResult, world: WorldSize, level: int | None = None) -> str:
    if level is None:
        level = dungeon.spawn.level
    lines: List[str] = []
    for row in range(world.h):
        chars = []
        for col in range(world.w):
            k = TileKey(col, row, level)
            if k == dungeon.spawn:
                chars.append(SPAWN)
            elif k in dungeon.doors:
                chars.append(DOOR_OPEN if dungeon.doors[k].open else DOOR_CLOSED)
            elif k in dungeon.blocked:
                chars.append(WALL)
            elif k in dungeon.floor:
                chars.append(FLOOR)
            else:
                chars.append(EMPTY)
        lines.append("".join(chars).rstrip())
    return "\n".join(lines)


__all__ = ["render_ascii"]
