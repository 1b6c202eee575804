"""Pipeline orchestration for dungeon generation.

``DungeonBuilder`` owns every mutable collection for the duration of one
``build_dungeon`` call, runs the phases in order and freezes the outcome:

    place_rooms -> connect_rooms -> build_walls -> freeze

Nothing escapes by reference; two builds never share state. Reproducibility
comes only from the injected random source.
"""
from __future__ import annotations

import os
import random
import time
from typing import Any, Dict, List, Optional, Set

from ..logging_utils import get_logger
from .config import SPAWN_INSET, BuildOptions
from .doors import DoorLedger
from .metrics import init_metrics
from .result import DungeonResult, freeze_dungeon
from .rooms import RandomFn, RoomDraft, place_rooms
from .sizing import WorldEstimate, compute_room_count, estimate_world_size
from .tiles import NeighborFn, TileKey, WorldSize, clamp, neighbor_odd_r
from .tunnels import connect_rooms
from .walls import WallSegment, rebuild_wall_segments

log = get_logger("hexdungeon.pipeline")

DEFAULT_NAME = "Procedural Dungeon"
DEFAULT_NOTES = (
    "Rooms + corridors. Perimeters blocked as walls. Doors are tiles stored in the door map "
    "and reflected into blocked when closed."
)
_FALSEY = {'0', 'false', 'no', ''}


def _metrics_enabled_default() -> bool:
    from flask import current_app, has_app_context

    enabled = True
    if 'DUNGEON_ENABLE_GENERATION_METRICS' in os.environ:
        enabled = os.environ['DUNGEON_ENABLE_GENERATION_METRICS'].lower() not in _FALSEY
    # Flask app config wins when building inside a request or app context
    if has_app_context() and 'DUNGEON_ENABLE_GENERATION_METRICS' in current_app.config:
        enabled = bool(current_app.config['DUNGEON_ENABLE_GENERATION_METRICS'])
    return enabled


class DungeonBuilder:
    def __init__(
        self,
        world: WorldSize,
        rng: Optional[RandomFn] = None,
        *,
        neighbor: NeighborFn = neighbor_odd_r,
        enable_metrics: Optional[bool] = None,
        seed: Optional[int] = None,
    ):
        if not isinstance(world, WorldSize):
            raise TypeError("DungeonBuilder requires a WorldSize")
        if rng is None:
            rng = random.Random().random
        if not callable(rng):
            raise TypeError("rng must be a zero-argument callable returning a float in [0, 1)")
        self.world = world
        self.rng = rng
        self.neighbor = neighbor
        self.seed = seed
        self.enable_metrics = _metrics_enabled_default() if enable_metrics is None else enable_metrics

    @classmethod
    def from_seed(cls, world: WorldSize, seed: int, **kwargs) -> "DungeonBuilder":
        # Local RNG so other users of the random module cannot perturb generation
        return cls(world, random.Random(seed).random, seed=seed, **kwargs)

    # ---------------- Sizing helpers ----------------------------------------------
    @staticmethod
    def compute_room_count(player_level: int, monster_level: int, difficulty_level: int) -> int:
        return compute_room_count(player_level, monster_level, difficulty_level)

    @staticmethod
    def estimate_world_size(player_level: int, monster_level: int, difficulty_level: int, **knobs) -> WorldEstimate:
        return estimate_world_size(player_level, monster_level, difficulty_level, **knobs)

    # ---------------- Main build --------------------------------------------------
    def build_dungeon(self, options: Optional[BuildOptions] = None, **overrides) -> DungeonResult:
        """Generate rooms, corridors, doors and walls; return them frozen.

        Raises :class:`~hexdungeon.dungeon.errors.RoomPlacementError` when the first
        room cannot be centred. Later placement failures and unreachable
        corridors degrade the result instead of raising.
        """
        options = options or BuildOptions()
        if overrides:
            options = options.with_overrides(**overrides)
        world = self.world
        level = options.z
        metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        phase_times: Dict[str, int] = {}
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        target = options.room_count
        if target is None:
            target = compute_room_count(options.player_level, options.monster_level, options.difficulty_level)
        blog = log.bind(seed=self.seed)
        blog.debug(event="dungeon_build_start", world_w=world.w, world_h=world.h, target=target)

        floor: Set[TileKey] = set()
        blocked: Set[TileKey] = set()
        doors = DoorLedger(blocked)

        rooms, attempts = _phase(
            'place_rooms', place_rooms, world, options, target, self.rng, floor, blocked, neighbor=self.neighbor
        )
        counts = _phase(
            'connect_rooms', connect_rooms, world, rooms, level, floor, blocked, doors, neighbor=self.neighbor
        )
        walls = _phase('build_walls', self._build_walls, rooms, level)

        r0 = rooms[0]
        spawn = TileKey(
            clamp(r0.left + SPAWN_INSET, 0, world.w - 1),
            clamp(r0.top + SPAWN_INSET, 0, world.h - 1),
            level,
        )
        meta: Dict[str, Any] = {
            'name': DEFAULT_NAME,
            'notes': DEFAULT_NOTES,
            'room_count_target': target,
            'seed': self.seed,
        }
        if self.enable_metrics:
            metrics.update(counts)
            metrics['rooms_requested'] = target
            metrics['rooms_placed'] = len(rooms)
            metrics['placement_attempts'] = attempts
            metrics['tiles_floor'] = len(floor)
            metrics['tiles_blocked'] = len(blocked)
            metrics['wall_segments'] = len(walls)
            metrics['phase_ms'] = phase_times
            metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            meta['metrics'] = metrics
        result = freeze_dungeon(meta, rooms, spawn, floor, blocked, doors, walls)
        blog.info(
            event="dungeon_built",
            rooms=len(rooms),
            target=target,
            doors=len(doors),
            corridors_failed=counts['corridors_failed'],
        )
        return result

    def _build_walls(self, rooms: List[RoomDraft], level: int) -> List[WallSegment]:
        walls: List[WallSegment] = []
        for r in rooms:
            walls.extend(rebuild_wall_segments(r, r.door_keys, level, self.world))
        return walls

    def build_default(self, z: int = 0) -> DungeonResult:
        """Single 9x7 room with a closed door at the centre of its bottom wall."""
        d = self.build_dungeon(
            BuildOptions(
                player_level=1,
                monster_level=1,
                difficulty_level=0,
                z=z,
                room_min_w=9,
                room_max_w=9,
                room_min_h=7,
                room_max_h=7,
                max_room_attempts=1,
                room_count=1,
            )
        )
        r0 = d.rooms[0]
        door_key = TileKey((r0.left + r0.right) // 2, r0.bottom, z)
        state = d.thaw()
        state.meta.update(name="Single Room + Door", notes="Default test room.", door=door_key)
        if door_key not in d.doors:
            # d is frozen; every edit goes through the thawed copies.
            state.doors.add(door_key, False)
            room = state.rooms[0]
            room.door_keys.append(door_key)
            state.walls = self._build_walls(state.rooms, z)
            if 'metrics' in state.meta:
                state.meta['metrics']['doors_created'] += 1
                state.meta['metrics']['wall_segments'] = len(state.walls)
                state.meta['metrics']['tiles_blocked'] = len(state.blocked)
        return state.freeze()


__all__ = ["DungeonBuilder", "DEFAULT_NAME"]
