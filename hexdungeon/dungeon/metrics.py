from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'placement_attempts': 0,
        'corridors_carved': 0,
        'corridors_failed': 0,
        'doors_created': 0,
        'tiles_floor': 0,
        'tiles_blocked': 0,
        'wall_segments': 0,
        'runtime_ms': 0,
        'phase_ms': {},
    }
