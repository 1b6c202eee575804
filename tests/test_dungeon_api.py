from hexdungeon.dungeon import DungeonBuilder, RoomPlacementError, TileKey
from hexdungeon.routes import dungeon_api
from hexdungeon.routes.dungeon_api import coerce_seed


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"


def test_dungeon_endpoint_shape(client):
    r = client.get("/api/dungeon?seed=42&player_level=1&monster_level=1&difficulty_level=0")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 42
    assert data["world"] == {"w": 54, "h": 48}
    dungeon = data["dungeon"]
    for k in ("meta", "rooms", "spawn", "floor", "blocked", "doors", "walls"):
        assert k in dungeon
    assert dungeon["meta"]["room_count_target"] == 5
    assert 1 <= len(dungeon["rooms"]) <= 5
    for key, door in dungeon["doors"].items():
        assert door["open"] is False
        assert key in dungeon["blocked"]


def test_dungeon_endpoint_deterministic_for_string_seed(client):
    a = client.get("/api/dungeon?seed=alpha").get_json()
    b = client.get("/api/dungeon?seed=alpha").get_json()
    assert isinstance(a["seed"], int)
    assert a["seed"] == b["seed"]
    assert a["dungeon"]["rooms"] == b["dungeon"]["rooms"]


def test_dungeon_endpoint_uses_cache(client):
    client.get("/api/dungeon?seed=5")
    assert (5, 1, 1, 1, 0) in dungeon_api._dungeon_cache


def test_cache_disabled(test_app):
    test_app.config["DUNGEON_DISABLE_CACHE"] = True
    c = test_app.test_client()
    r = c.get("/api/dungeon?seed=6")
    assert r.status_code == 200
    assert dungeon_api._dungeon_cache == {}


def test_bad_parameters_return_400(client):
    for qs in ("player_level=abc", "player_level=0", "difficulty_level=21", "z=-1"):
        r = client.get(f"/api/dungeon?{qs}")
        assert r.status_code == 400, qs
        assert "error" in r.get_json()


def test_placement_failure_returns_422(client, monkeypatch):
    def boom(self, options=None, **overrides):
        raise RoomPlacementError("grid too small")

    monkeypatch.setattr(DungeonBuilder, "build_dungeon", boom)
    r = client.get("/api/dungeon?seed=1")
    assert r.status_code == 422
    assert r.get_json()["error"] == "grid too small"


def test_default_room_endpoint(client):
    r = client.get("/api/dungeon/default")
    assert r.status_code == 200
    data = r.get_json()
    assert data["world"] == {"w": 15, "h": 15}
    dungeon = data["dungeon"]
    assert len(dungeon["rooms"]) == 1
    assert len(dungeon["floor"]) == 35
    assert list(dungeon["doors"]) == ["7,10,0"]
    assert dungeon["meta"]["door"] == {"col": 7, "row": 10, "z": 0}


def test_size_endpoint(client):
    r = client.get("/api/dungeon/size?player_level=5&monster_level=1&difficulty_level=1")
    assert r.status_code == 200
    data = r.get_json()
    assert data["room_count"] == 10
    # ceil(sqrt(10))=4 cells of 14x12 plus margins
    assert data == {"room_count": 10, "w": 68, "h": 60}


def test_coerce_seed_variants():
    assert coerce_seed(12345) == 12345
    assert coerce_seed("12345") == 12345
    assert coerce_seed("alpha") == coerce_seed("alpha")
    assert coerce_seed("alpha") != coerce_seed("beta")
    assert 1 <= coerce_seed(None) <= 1_000_000
    assert 1 <= coerce_seed("   ") <= 1_000_000


def test_tile_key_string_round_trip():
    k = TileKey(12, 3, 1)
    assert str(k) == "12,3,1"
    assert TileKey.parse("12,3,1") == k
