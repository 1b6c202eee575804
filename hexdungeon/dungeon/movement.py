"""Blocked-aware movement search over a generated dungeon.

These are the reads a game's input layer performs against ``DungeonResult``
(or a thawed copy after a door toggle): closed doors and walls stop movement,
everything else inside the grid is steppable.
"""
from __future__ import annotations

from collections import deque
from typing import AbstractSet, Deque, Dict, List, Optional, Set, Tuple

from .tiles import DIRECTIONS, NeighborFn, TileKey, WorldSize, neighbor_odd_r


def find_path_within_range(
    world: WorldSize,
    blocked: AbstractSet[TileKey],
    start: TileKey,
    target: TileKey,
    max_steps: int,
    neighbor: NeighborFn = neighbor_odd_r,
) -> Optional[List[TileKey]]:
    """Steps from ``start`` to ``target`` (start excluded) within ``max_steps``.

    Returns ``[]`` when already there and None when the target is blocked, on
    another level, or farther than ``max_steps`` hops.
    """
    if start == target:
        return []
    if target.level != start.level or target in blocked:
        return None
    level = start.level
    q: Deque[Tuple[TileKey, int]] = deque([(start, 0)])
    visited = {start}
    parent: Dict[TileKey, TileKey] = {}
    while q:
        cur, dist = q.popleft()
        if dist >= max_steps:
            continue
        for direction in DIRECTIONS:
            nc, nr = neighbor(cur.col, cur.row, direction)
            if not world.contains(nc, nr):
                continue
            nk = TileKey(nc, nr, level)
            if nk in visited or nk in blocked:
                continue
            visited.add(nk)
            parent[nk] = cur
            if nk == target:
                path = [nk]
                while path[-1] in parent and parent[path[-1]] != start:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            q.append((nk, dist + 1))
    return None


def reachable_tiles(
    world: WorldSize,
    blocked: AbstractSet[TileKey],
    start: TileKey,
    max_steps: int,
    neighbor: NeighborFn = neighbor_odd_r,
) -> Set[TileKey]:
    """Every tile reachable from ``start`` in at most ``max_steps`` unblocked hops, start included."""
    seen = {start}
    q: Deque[Tuple[TileKey, int]] = deque([(start, 0)])
    while q:
        cur, dist = q.popleft()
        if dist >= max_steps:
            continue
        for direction in DIRECTIONS:
            nc, nr = neighbor(cur.col, cur.row, direction)
            nk = TileKey(nc, nr, start.level)
            if not world.contains(nc, nr) or nk in seen or nk in blocked:
                continue
            seen.add(nk)
            q.append((nk, dist + 1))
    return seen


__all__ = ["find_path_within_range", "reachable_tiles"]
