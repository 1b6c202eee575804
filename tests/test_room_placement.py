import pytest

from dungeon_test_utils import STRUCTURE_SEEDS, SeqRandom, build_for_levels, interior_keys, perimeter_keys
from hexdungeon.dungeon import BuildOptions, DungeonBuilder, RoomPlacementError, TileKey, WorldSize
from hexdungeon.dungeon.rooms import RoomDraft, rand_int, rects_overlap, room_centered_at, stamp_room


def test_rand_int_bounds_inclusive():
    assert rand_int(lambda: 0.0, 7, 11) == 7
    assert rand_int(lambda: 0.9999, 7, 11) == 11
    assert rand_int(lambda: 0.5, 0, 5) == 3


def test_rects_overlap_with_padding():
    a = RoomDraft(0, 6, 0, 4)
    b = RoomDraft(9, 15, 0, 4)
    assert not rects_overlap(a, b, 0)
    assert not rects_overlap(a, b, 2)
    # gap of two columns (7, 8) is not enough for pad=3
    assert rects_overlap(a, b, 3)
    assert rects_overlap(a, RoomDraft(6, 12, 4, 8), 0)


def test_room_centered_at_respects_margin():
    world = WorldSize(15, 15)
    room = room_centered_at(world, 7, 7, 9, 7)
    assert (room.left, room.right, room.top, room.bottom) == (3, 11, 4, 10)
    assert room_centered_at(world, 7, 7, 15, 7) is None
    assert room_centered_at(world, 3, 7, 7, 5) is None


def test_stamp_room_encloses_interior():
    world = WorldSize(15, 15)
    room = RoomDraft(3, 9, 2, 6)
    floor, blocked = set(), set()
    stamp_room(room, world, 2, floor, blocked)
    assert floor == interior_keys(room, 2)
    assert blocked == perimeter_keys(room, 2)
    assert len(floor) == 5 * 3
    assert not floor & blocked


def test_first_room_centred_on_grid():
    world = WorldSize(31, 25)
    # all draws at 0.0 -> minimum room size
    result = DungeonBuilder(world, SeqRandom([0.0])).build_dungeon(room_count=1)
    r0 = result.rooms[0]
    assert r0.center == (15, 12)
    assert (r0.width, r0.height) == (7, 5)


def test_first_room_failure_is_fatal():
    world = WorldSize(15, 15)
    builder = DungeonBuilder.from_seed(world, 3)
    with pytest.raises(RoomPlacementError):
        builder.build_dungeon(room_min_w=15, room_max_w=15)


def test_later_room_failure_keeps_partial_result():
    world = WorldSize(15, 15)
    result = DungeonBuilder.from_seed(world, 11).build_dungeon(room_count=2)
    assert len(result.rooms) == 1
    assert result.meta["room_count_target"] == 2
    metrics = result.meta["metrics"]
    assert metrics["rooms_placed"] == 1
    assert metrics["placement_attempts"] == 1 + BuildOptions().max_room_attempts
    assert result.doors == {}


def test_attempt_budget_is_configurable():
    world = WorldSize(15, 15)
    result = DungeonBuilder.from_seed(world, 11).build_dungeon(room_count=3, max_room_attempts=5)
    assert len(result.rooms) == 1
    assert result.meta["metrics"]["placement_attempts"] == 6


@pytest.mark.structure
@pytest.mark.parametrize("seed", STRUCTURE_SEEDS)
def test_rooms_never_overlap_with_padding(seed):
    world, result = build_for_levels(seed, 4, 1, 2)
    drafts = [r.to_draft() for r in result.rooms]
    for i in range(len(drafts)):
        for j in range(i + 1, len(drafts)):
            assert not rects_overlap(drafts[i], drafts[j], 2), (seed, i, j)


@pytest.mark.structure
@pytest.mark.parametrize("seed", STRUCTURE_SEEDS)
def test_rooms_stay_inside_margin(seed):
    world, result = build_for_levels(seed, 3, 2, 1)
    for r in result.rooms:
        assert r.left >= 2 and r.top >= 2
        assert r.right <= world.w - 3 and r.bottom <= world.h - 3
        assert 7 <= r.width <= 11 and 5 <= r.height <= 9


@pytest.mark.structure
@pytest.mark.parametrize("seed", STRUCTURE_SEEDS)
def test_room_interiors_are_floor(seed):
    _, result = build_for_levels(seed)
    for r in result.rooms:
        assert interior_keys(r) <= result.floor


def test_build_options_reject_bad_values():
    with pytest.raises(ValueError):
        BuildOptions(room_min_w=12, room_max_w=11)
    with pytest.raises(ValueError):
        BuildOptions(room_min_w=4)
    with pytest.raises(ValueError):
        BuildOptions(room_min_h=2)
    with pytest.raises(ValueError):
        BuildOptions(max_room_attempts=0)
    with pytest.raises(ValueError):
        BuildOptions(room_count=0)
    with pytest.raises(TypeError):
        BuildOptions().with_overrides(rooms=3)


def test_spawn_inside_first_room():
    world, result = build_for_levels(5)
    r0 = result.rooms[0]
    assert result.spawn == TileKey(r0.left + 2, r0.top + 2, 0)
    assert result.spawn in result.floor
