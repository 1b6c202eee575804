"""
project: Hex Dungeon
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Every response is built from a frozen ``DungeonResult``; results are cached
per (seed, levels, z) because generation is deterministic for a given seed
and the results are immutable, so cached entries are safe to share.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from hexdungeon.dungeon import BuildOptions, DungeonBuilder, RoomPlacementError, WorldSize, estimate_world_size
from hexdungeon.logging_utils import get_logger

bp_dungeon = Blueprint("dungeon", __name__)
log = get_logger("hexdungeon.api")

SEED_MAX = 2**63 - 1
# World used by the single-room endpoint; the smallest grid the builder accepts.
DEFAULT_ROOM_WORLD = WorldSize(15, 15)

_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


class InvalidParameter(ValueError):
    pass


def coerce_seed(payload_seed):
    """Convert a provided seed (int or str) into a bounded non-negative int.

    Digit strings are parsed, other strings hash through SHA-256, and a
    missing or blank seed picks a random one.
    """
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    s = str(payload_seed).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _int_arg(name: str, default: int, lo: int = 0, hi: int = 99) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidParameter(f"{name} must be an integer") from None
    if not lo <= value <= hi:
        raise InvalidParameter(f"{name} must be between {lo} and {hi}")
    return value


def _level_args():
    return (
        _int_arg("player_level", 1, 1),
        _int_arg("monster_level", 1, 1),
        _int_arg("difficulty_level", 1, 0, 20),
    )


def get_cached_dungeon(seed: int, player_level: int, monster_level: int, difficulty_level: int, z: int = 0):
    """Return (world, result) for the given parameters, generating on a cache miss."""
    estimate = estimate_world_size(player_level, monster_level, difficulty_level)
    world = WorldSize(estimate.w, estimate.h)
    options = BuildOptions(
        player_level=player_level, monster_level=monster_level, difficulty_level=difficulty_level, z=z
    )
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return world, DungeonBuilder.from_seed(world, seed).build_dungeon(options)
    key = (seed, player_level, monster_level, difficulty_level, z)
    with _dungeon_cache_lock:
        cached = _dungeon_cache.get(key)
    if cached is not None:
        return world, cached
    result = DungeonBuilder.from_seed(world, seed).build_dungeon(options)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = result
        if len(_dungeon_cache) > current_app.config.get("DUNGEON_CACHE_MAX", 8):
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return world, result


def clear_cache():
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


@bp_dungeon.errorhandler(InvalidParameter)
def _bad_request(e):
    log.warn(event="dungeon_api_bad_request", path=request.path, error=str(e))
    return jsonify({"error": str(e)}), 400


@bp_dungeon.errorhandler(RoomPlacementError)
def _placement_failed(e):
    log.error(event="dungeon_api_generation_failed", path=request.path, error=str(e))
    return jsonify({"error": str(e)}), 422


@bp_dungeon.route("/api/dungeon")
def dungeon():
    """
    Generate (or fetch from cache) a dungeon sized for the requested levels.
    Query: seed, player_level, monster_level, difficulty_level, z
    Response: { 'seed': int, 'world': {w,h}, 'dungeon': <DungeonResult.to_dict()> }
    """
    seed = coerce_seed(request.args.get("seed"))
    player_level, monster_level, difficulty_level = _level_args()
    z = _int_arg("z", 0, 0, 99)
    world, result = get_cached_dungeon(seed, player_level, monster_level, difficulty_level, z)
    return jsonify({"seed": seed, "world": world.to_dict(), "dungeon": result.to_dict()})


@bp_dungeon.route("/api/dungeon/default")
def dungeon_default():
    """Single room with one bottom door on a 15x15 grid."""
    z = _int_arg("z", 0, 0, 99)
    result = DungeonBuilder.from_seed(DEFAULT_ROOM_WORLD, 0).build_default(z=z)
    return jsonify({"world": DEFAULT_ROOM_WORLD.to_dict(), "dungeon": result.to_dict()})


@bp_dungeon.route("/api/dungeon/size")
def dungeon_size():
    player_level, monster_level, difficulty_level = _level_args()
    estimate = estimate_world_size(player_level, monster_level, difficulty_level)
    return jsonify({"room_count": estimate.room_count, "w": estimate.w, "h": estimate.h})
