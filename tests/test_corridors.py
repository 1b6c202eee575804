import pytest

from dungeon_test_utils import STRUCTURE_SEEDS, build_for_levels
from hexdungeon.dungeon import TileKey, WorldSize, neighbor_odd_r
from hexdungeon.dungeon.doors import DoorLedger
from hexdungeon.dungeon.rooms import RoomDraft, stamp_room
from hexdungeon.dungeon.tunnels import bfs_path, carve_tile, connect_rooms, pick_perimeter_door_toward, step_out


@pytest.mark.parametrize(
    "col,row,direction,expected",
    [
        (4, 4, "E", (5, 4)),
        (4, 4, "W", (3, 4)),
        (4, 4, "NE", (4, 3)),
        (4, 4, "NW", (3, 3)),
        (4, 4, "SE", (4, 5)),
        (4, 4, "SW", (3, 5)),
        (4, 5, "NE", (5, 4)),
        (4, 5, "NW", (4, 4)),
        (4, 5, "SE", (5, 6)),
        (4, 5, "SW", (4, 6)),
        (4, 5, "UP", (4, 5)),
    ],
)
def test_odd_r_neighbours(col, row, direction, expected):
    assert neighbor_odd_r(col, row, direction) == expected


def test_pick_perimeter_door_faces_target():
    room = RoomDraft(10, 16, 10, 14)
    assert pick_perimeter_door_toward(room, 30, 12) == (16, 12)
    assert pick_perimeter_door_toward(room, 0, 12) == (10, 12)
    assert pick_perimeter_door_toward(room, 13, 0) == (13, 10)
    # corners are never chosen
    assert pick_perimeter_door_toward(room, 0, 30) == (11, 14)
    assert pick_perimeter_door_toward(room, 40, 11) == (16, 11)


def test_step_out_moves_away_from_room():
    room = RoomDraft(10, 16, 10, 14)
    assert step_out(room, (16, 12)) == (17, 12)
    assert step_out(room, (10, 12)) == (9, 12)
    assert step_out(room, (13, 10)) == (13, 9)
    assert step_out(room, (13, 14)) == (13, 15)


def test_bfs_same_tile_is_empty_path():
    world = WorldSize(15, 15)
    assert bfs_path(world, (3, 3), (3, 3)) == []


def test_bfs_expands_in_direction_order():
    world = WorldSize(15, 15)
    # (4,5) is discovered before (3,5), so it becomes the parent of (4,6)
    assert bfs_path(world, (4, 4), (4, 6), level=1) == [TileKey(4, 5, 1), TileKey(4, 6, 1)]
    assert bfs_path(world, (4, 4), (8, 4)) == [TileKey(c, 4, 0) for c in range(5, 9)]


def test_bfs_ignores_walls_but_not_bounds():
    world = WorldSize(15, 15)
    assert bfs_path(world, (0, 0), (-1, 0)) is None
    assert bfs_path(world, (0, 0), (14, 14))[-1] == TileKey(14, 14, 0)


def test_carve_tile_idempotent():
    floor, blocked = set(), {TileKey(1, 1, 0)}
    carve_tile(TileKey(1, 1, 0), floor, blocked)
    carve_tile(TileKey(1, 1, 0), floor, blocked)
    assert floor == {TileKey(1, 1, 0)}
    assert blocked == set()


def test_connect_two_rooms_registers_closed_doors():
    world = WorldSize(40, 20)
    rooms = [RoomDraft(3, 9, 5, 11), RoomDraft(25, 31, 6, 12)]
    floor, blocked = set(), set()
    for r in rooms:
        stamp_room(r, world, 0, floor, blocked)
    doors = DoorLedger(blocked)
    counts = connect_rooms(world, rooms, 0, floor, blocked, doors)
    assert counts == {"corridors_carved": 1, "corridors_failed": 0, "doors_created": 2}
    a_door, b_door = rooms[0].door_keys[0], rooms[1].door_keys[0]
    assert a_door == TileKey(9, 9, 0)
    assert b_door == TileKey(25, 8, 0)
    for d in (a_door, b_door):
        assert not doors.is_open(d)
        assert d in blocked
        assert d not in floor
    # footholds outside each door are carved
    assert TileKey(10, 9, 0) in floor
    assert TileKey(24, 8, 0) in floor
    assert TileKey(10, 9, 0) not in blocked
    assert TileKey(24, 8, 0) not in blocked
    assert (floor & blocked) <= set(doors)


def test_shared_door_tile_counted_once():
    world = WorldSize(40, 20)
    # both neighbours of the middle room lie to its east, so it reuses one right-wall door
    rooms = [RoomDraft(27, 33, 0, 4), RoomDraft(3, 9, 5, 11), RoomDraft(17, 23, 2, 6)]
    floor, blocked = set(), set()
    for r in rooms:
        stamp_room(r, world, 0, floor, blocked)
    doors = DoorLedger(blocked)
    counts = connect_rooms(world, rooms, 0, floor, blocked, doors)
    shared = TileKey(9, 6, 0)
    assert rooms[1].door_keys == [shared, shared]
    assert len(doors) == 3
    assert counts["doors_created"] == len(doors)
    assert counts["corridors_carved"] == 2
    assert shared in blocked and not doors.is_open(shared)


def test_connect_single_room_is_noop():
    world = WorldSize(15, 15)
    rooms = [RoomDraft(3, 11, 4, 10)]
    floor, blocked = set(), set()
    doors = DoorLedger(blocked)
    counts = connect_rooms(world, rooms, 0, floor, blocked, doors)
    assert counts["doors_created"] == 0
    assert len(doors) == 0


@pytest.mark.structure
@pytest.mark.parametrize("seed", STRUCTURE_SEEDS)
def test_each_consecutive_pair_gets_doors(seed):
    _, result = build_for_levels(seed, 3, 1, 1)
    # facing tiles can coincide, so distinct doors may be fewer than two per pair
    assert len(result.doors) <= 2 * (len(result.rooms) - 1)
    assert result.meta["metrics"]["doors_created"] == len(result.doors)
    if len(result.rooms) > 1:
        assert all(room.door_keys for room in result.rooms)
    assert result.meta["metrics"]["corridors_failed"] == 0
    assert result.meta["metrics"]["corridors_carved"] == len(result.rooms) - 1
