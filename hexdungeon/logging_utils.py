"""Structured print-based logging for the generator and API.

Each record is one line: ``level=info ts=... event=... key=value ...`` or,
with HEXDUNGEON_LOG_JSON=1, a compact JSON object. No handler setup is
needed, so generation can run from scripts and tests with readable output.

    from hexdungeon.logging_utils import get_logger
    log = get_logger("hexdungeon.rooms")
    log.info(event="room_placement_exhausted", room=4, placed=3)

    seeded = log.bind(seed=42)          # context repeated on every record
    seeded.debug(event="corridor_unreachable", start=(3, 4))

Threshold: HEXDUNGEON_LOG_LEVEL (debug|info|warn|error, default info).
``level`` and ``ts`` are reserved; ``None`` values are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("HEXDUNGEON_LOG_LEVEL", "info").lower(), LEVELS["info"])


def json_mode() -> bool:
    return os.getenv("HEXDUNGEON_LOG_JSON", "0").lower() in _TRUTHY


def _kv_value(v) -> str:
    if isinstance(v, bool):
        return "1" if v else "0"
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, tuple):
        # tile keys and coordinates: "3,4,0"
        return ",".join(str(p) for p in v)
    return str(v).replace(" ", "_")


def _format(level: str, fields: dict) -> str:
    kept = {k: v for k, v in fields.items() if v is not None}
    stamp = int(time.time())
    if json_mode():
        return json.dumps({**kept, "level": level, "ts": stamp}, separators=(",", ":"), default=str)
    head = f"level={level} ts={stamp}"
    return " ".join([head] + [f"{k}={_kv_value(v)}" for k, v in kept.items()])


class _Logger:
    __slots__ = ("name", "context")

    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **context) -> "_Logger":
        return _Logger(self.name, {**self.context, **context})

    def _emit(self, lvl: str, fields: dict):
        if LEVELS[lvl] < current_level():
            return
        record = {**self.context, **fields}
        record.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, record), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_loggers: dict = {}


def get_logger(name: str) -> _Logger:
    logger = _loggers.get(name)
    if logger is None:
        logger = _loggers[name] = _Logger(name)
    return logger


log = get_logger("hexdungeon")
