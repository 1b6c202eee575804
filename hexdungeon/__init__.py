"""
project: Hex Dungeon
module: __init__.py
License: MIT

Flask application factory.

The generator (``hexdungeon.dungeon``) is usable without an app; this module
exposes it over a small JSON API. Configuration is sourced from
environment variables (optionally via a local ``.env``) with development
defaults, then overridden by the mapping passed to ``create_app``.
"""

from __future__ import annotations

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so SECRET_KEY and the DUNGEON_* flags can be supplied
# without exporting shell variables during development.
load_dotenv()

__version__ = "0.1.0"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(config: dict | None = None) -> Flask:
    """Build a Flask app with the dungeon blueprint registered."""
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        # Dungeon generation feature flags / cache sizing
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
        DUNGEON_DISABLE_CACHE=_env_flag("DUNGEON_DISABLE_CACHE", "0"),
        DUNGEON_CACHE_MAX=int(os.getenv("DUNGEON_CACHE_MAX", "8")),
    )
    if config:
        app.config.update(config)

    from hexdungeon.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok", "version": __version__})

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
