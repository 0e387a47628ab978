"""Spectator callbacks and their registry.

Spectators are passive: they are told about state changes in the order the
turn processor produces them and never influence the game. Per applied move
the order is ``on_move_made`` / ``on_round_started`` notifications followed by
exactly one of ``on_rotation_complete`` or ``on_game_over``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AbstractSet, Iterator

from .errors import SpectatorError
from .models import Colour, Move

if TYPE_CHECKING:
    from .game_engine import ScotlandYardGame

logger = logging.getLogger(__name__)


class Spectator:
    """Base spectator; override the callbacks you care about."""

    def on_move_made(self, view: "ScotlandYardGame", move: Move) -> None:
        pass

    def on_round_started(self, view: "ScotlandYardGame", round_number: int) -> None:
        pass

    def on_rotation_complete(self, view: "ScotlandYardGame") -> None:
        pass

    def on_game_over(
        self, view: "ScotlandYardGame", winning_players: AbstractSet[Colour]
    ) -> None:
        pass


class SpectatorRegistry:
    """Ordered collection of registered spectators."""

    def __init__(self) -> None:
        self._spectators: list[Spectator] = []

    def register(self, spectator: Spectator) -> None:
        if spectator is None:
            raise SpectatorError("Cannot register a None spectator")
        if spectator in self._spectators:
            raise SpectatorError("Cannot register a spectator more than once")
        self._spectators.append(spectator)
        logger.debug("Registered spectator %r", spectator)

    def unregister(self, spectator: Spectator) -> None:
        if spectator is None:
            raise SpectatorError("Cannot unregister a None spectator")
        if spectator not in self._spectators:
            raise SpectatorError("Cannot unregister a spectator that was never registered")
        self._spectators.remove(spectator)
        logger.debug("Unregistered spectator %r", spectator)

    def snapshot(self) -> tuple[Spectator, ...]:
        return tuple(self._spectators)

    def __iter__(self) -> Iterator[Spectator]:
        # Iterate over a copy so a callback may unregister itself.
        return iter(tuple(self._spectators))

    def __len__(self) -> int:
        return len(self._spectators)

    def notify_move_made(self, view: "ScotlandYardGame", move: Move) -> None:
        for spectator in self:
            spectator.on_move_made(view, move)

    def notify_round_started(self, view: "ScotlandYardGame", round_number: int) -> None:
        for spectator in self:
            spectator.on_round_started(view, round_number)

    def notify_rotation_complete(self, view: "ScotlandYardGame") -> None:
        for spectator in self:
            spectator.on_rotation_complete(view)

    def notify_game_over(
        self, view: "ScotlandYardGame", winning_players: AbstractSet[Colour]
    ) -> None:
        for spectator in self:
            spectator.on_game_over(view, winning_players)
