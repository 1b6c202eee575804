import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from hexdungeon import create_app  # noqa: E402
from hexdungeon.routes.dungeon_api import clear_cache  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True})
    clear_cache()
    yield app
    clear_cache()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_generator_logs(monkeypatch):
    # Keep pytest output readable; individual tests raise the level when asserting on logs.
    monkeypatch.setenv("HEXDUNGEON_LOG_LEVEL", "error")
    monkeypatch.delenv("DUNGEON_ENABLE_GENERATION_METRICS", raising=False)


def pytest_configure(config):
    config.addinivalue_line("markers", "structure: structural invariants checked across several seeds")
