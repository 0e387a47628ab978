"""Environment-driven configuration for the Scotland Yard engine.

Every knob is read once at import time from ``SCOTLANDYARD_*`` environment
variables. Boolean flags accept ``1``, ``true``, ``yes`` or ``on``
(case-insensitive).

Example:
    export SCOTLANDYARD_DEBUG_ENGINE=1
    export SCOTLANDYARD_USE_MOVE_CACHE=false
"""

from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: str = "0") -> bool:
    """Return True when the environment variable ``name`` is truthy."""
    return os.environ.get(name, default).strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


# Verbose per-move tracing from the engine (written at DEBUG level).
DEBUG_ENGINE = env_flag("SCOTLANDYARD_DEBUG_ENGINE")

# Memoise legal-move sets per game state. Only move generation is cached,
# never evaluation results.
USE_MOVE_CACHE = env_flag("SCOTLANDYARD_USE_MOVE_CACHE", "true")
MOVE_CACHE_SIZE = env_int("SCOTLANDYARD_MOVE_CACHE_SIZE", 1000)

LOG_LEVEL = os.environ.get("SCOTLANDYARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("SCOTLANDYARD_LOG_FORMAT", "default").lower()

# Record prometheus counters for applied moves and finished games.
METRICS_ENABLED = env_flag("SCOTLANDYARD_METRICS_ENABLED", "true")
