"""
project: Hex Dungeon
module: server.py
License: MIT

Development server bootstrap for the dungeon API.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask

from hexdungeon import create_app

# Map the structured logger's threshold names onto stdlib levels.
_STDLIB_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def start_server(host="0.0.0.0", port=5000, debug: bool = False, app: Flask | None = None):  # pragma: no cover (runtime only)
    app = app or create_app()
    configure_logging(app)
    app.run(host=host, port=port, debug=debug)


def configure_logging(app: Flask) -> str:
    """Route stdlib logging (Flask, werkzeug, request errors) to the console and
    to ``<instance>/hexdungeon.log``, rotated at ~1 MB with three backups.

    Level follows HEXDUNGEON_LOG_LEVEL so both loggers agree. Returns the log path.
    """
    os.makedirs(app.instance_path, exist_ok=True)
    path = os.path.join(app.instance_path, "hexdungeon.log")
    level = _STDLIB_LEVELS.get(os.getenv("HEXDUNGEON_LOG_LEVEL", "info").lower(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handlers = [
        RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3),
        logging.StreamHandler(),
    ]
    root = logging.getLogger()
    root.setLevel(level)
    # Reconfiguring replaces handlers rather than stacking duplicates
    for existing in list(root.handlers):
        root.removeHandler(existing)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return path
