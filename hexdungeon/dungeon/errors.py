class DungeonGenerationError(RuntimeError):
    """Generation could not produce any dungeon at all."""


class RoomPlacementError(DungeonGenerationError):
    """The first room does not fit inside the grid margins.

    Signals that the world was allocated smaller than ``estimate_world_size``
    suggests; nothing inside the builder can recover from it.
    """


__all__ = ["DungeonGenerationError", "RoomPlacementError"]
