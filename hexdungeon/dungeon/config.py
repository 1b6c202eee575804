from dataclasses import dataclass, fields, replace
from typing import Optional

# Distance kept between any room rectangle and the grid edge.
PLACEMENT_MARGIN = 2
# Random walk length (in single hops) from the previous room centre to a candidate centre.
ROOM_STEP_MIN = 6
ROOM_STEP_MAX = 14
# Spawn sits this many tiles inside room 0's top-left corner.
SPAWN_INSET = 2


@dataclass(frozen=True)
class BuildOptions:
    player_level: int = 1
    monster_level: int = 1
    difficulty_level: int = 1
    z: int = 0
    room_min_w: int = 7
    room_max_w: int = 11
    room_min_h: int = 5
    room_max_h: int = 9
    room_pad: int = 2
    max_room_attempts: int = 80
    corridor_width: int = 1
    # Explicit room target; None derives it from the level triple.
    room_count: Optional[int] = None

    def __post_init__(self):
        if self.room_min_w < 5:
            raise ValueError("rooms need at least 5 tiles across (perimeter plus a 3-wide interior)")
        if self.room_min_h < 3:
            raise ValueError("rooms need at least 3 tiles down (perimeter plus interior)")
        if self.room_min_w > self.room_max_w:
            raise ValueError(f"room_min_w={self.room_min_w} exceeds room_max_w={self.room_max_w}")
        if self.room_min_h > self.room_max_h:
            raise ValueError(f"room_min_h={self.room_min_h} exceeds room_max_h={self.room_max_h}")
        if self.room_pad < 0:
            raise ValueError("room_pad must be >= 0")
        if self.max_room_attempts < 1:
            raise ValueError("max_room_attempts must be >= 1")
        if self.corridor_width != 1:
            raise ValueError("only one-tile corridors are supported")
        if self.room_count is not None and self.room_count < 1:
            raise ValueError("room_count must be >= 1 when given")

    def with_overrides(self, **overrides) -> "BuildOptions":
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"unknown build option(s): {', '.join(sorted(unknown))}")
        return replace(self, **overrides)


__all__ = [
    "BuildOptions",
    "PLACEMENT_MARGIN",
    "ROOM_STEP_MIN",
    "ROOM_STEP_MAX",
    "SPAWN_INSET",
]
