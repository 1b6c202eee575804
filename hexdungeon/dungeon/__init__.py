"""Public dungeon package interface."""

from .config import BuildOptions
from .errors import DungeonGenerationError, RoomPlacementError
from .movement import find_path_within_range, reachable_tiles
from .pipeline import DungeonBuilder
from .result import Door, DungeonResult, MutableDungeonState, Room
from .sizing import WorldEstimate, compute_room_count, estimate_world_size
from .tiles import DIRECTIONS, TileKey, WorldSize, neighbor_odd_r
from .walls import WallSegment

__all__ = [
    "BuildOptions",
    "DIRECTIONS",
    "Door",
    "DungeonBuilder",
    "DungeonGenerationError",
    "DungeonResult",
    "MutableDungeonState",
    "Room",
    "RoomPlacementError",
    "TileKey",
    "WallSegment",
    "WorldEstimate",
    "WorldSize",
    "compute_room_count",
    "estimate_world_size",
    "find_path_within_range",
    "neighbor_odd_r",
    "reachable_tiles",
]
