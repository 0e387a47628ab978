"""Prometheus metrics for the Scotland Yard engine.

This module centralises the counters the turn processor and game engine
update, so individual call sites do not manage their own metric instances.
Recording is a no-op when ``SCOTLANDYARD_METRICS_ENABLED`` is off.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter

from . import config


MOVES_APPLIED: Final[Counter] = Counter(
    "scotlandyard_moves_applied_total",
    "Total moves applied by the engine, labeled by move kind and role.",
    labelnames=("kind", "role"),
)

MOVES_REJECTED: Final[Counter] = Counter(
    "scotlandyard_moves_rejected_total",
    "Total moves rejected before application, labeled by reason.",
    labelnames=("reason",),
)

ROUNDS_STARTED: Final[Counter] = Counter(
    "scotlandyard_rounds_started_total",
    "Total rounds started (one per Mr X ticket spent).",
)

GAMES_COMPLETED: Final[Counter] = Counter(
    "scotlandyard_games_completed_total",
    "Total finished games, labeled by winning side and reason.",
    labelnames=("winner", "reason"),
)


def record_move(kind: str, role: str) -> None:
    if config.METRICS_ENABLED:
        MOVES_APPLIED.labels(kind=kind, role=role).inc()


def record_rejected_move(reason: str) -> None:
    if config.METRICS_ENABLED:
        MOVES_REJECTED.labels(reason=reason).inc()


def record_round_started() -> None:
    if config.METRICS_ENABLED:
        ROUNDS_STARTED.inc()


def record_game_completed(winner: str, reason: str) -> None:
    if config.METRICS_ENABLED:
        GAMES_COMPLETED.labels(winner=winner, reason=reason).inc()
