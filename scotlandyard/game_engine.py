"""Core game engine for the Scotland Yard rule engine.

:class:`ScotlandYardGame` owns one :class:`GameState`, the player actors and
the spectator registry. It is also the read-only *view* handed to players and
spectators: every query reports Mr X at his last-known location, never his
true one.

A host drives the game like this::

    game = ScotlandYardGame(rounds, graph, mr_x, blue, red)
    game.register_spectator(printer)
    while not game.is_game_over():
        game.start_rotate()

``start_rotate`` asks Mr X for a move; each accepted move then requests the
next detective's move synchronously until the rotation returns to Mr X or
the game ends.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Sequence, Tuple

from . import metrics
from .errors import InvalidStateError
from .game_state import GameState, PlayerState, create_game_state
from .graph import TransportGraph
from .models import Colour, Move, PlayerConfiguration, Ticket
from .move_generator import get_valid_moves
from .spectators import Spectator, SpectatorRegistry
from .turn_processor import apply_move
from .win_evaluator import GameOutcome, evaluate

logger = logging.getLogger(__name__)

__all__ = ["ScotlandYardGame"]


class ScotlandYardGame:
    """One in-memory game of Scotland Yard.

    Players whose configuration carries no actor are driven by the host,
    which submits their moves through :meth:`accept` itself; the engine only
    requests moves from players that have an actor.
    """

    def __init__(
        self,
        rounds: Sequence[bool],
        graph: TransportGraph,
        mr_x: PlayerConfiguration,
        first_detective: PlayerConfiguration,
        *rest_of_the_detectives: PlayerConfiguration,
    ):
        self._state = create_game_state(
            rounds, graph, mr_x, first_detective, *rest_of_the_detectives
        )
        self._spectators = SpectatorRegistry()

    @classmethod
    def from_state(cls, state: GameState) -> "ScotlandYardGame":
        """Wrap an existing state, e.g. a position built for analysis."""
        game = cls.__new__(cls)
        game._state = state
        game._spectators = SpectatorRegistry()
        return game

    @property
    def state(self) -> GameState:
        """The underlying state, including Mr X's true location."""
        return self._state

    # ------------------------------------------------------------------
    # Spectators
    # ------------------------------------------------------------------

    def register_spectator(self, spectator: Spectator) -> None:
        self._spectators.register(spectator)

    def unregister_spectator(self, spectator: Spectator) -> None:
        self._spectators.unregister(spectator)

    def get_spectators(self) -> Tuple[Spectator, ...]:
        return self._spectators.snapshot()

    # ------------------------------------------------------------------
    # Turn handling
    # ------------------------------------------------------------------

    def start_rotate(self) -> None:
        """Ask the current player (normally Mr X) for a move and apply it.

        Raises:
            InvalidStateError: if the game is already over, or the current
                player has no actor to ask.
        """
        if self.is_game_over():
            raise InvalidStateError("Cannot rotate when the game is over")
        player = self._state.current_player
        if player.player is None:
            raise InvalidStateError(
                "Current player has no actor to ask for a move",
                context={"colour": player.colour.value},
            )
        self._request_move(player)

    def accept(self, move: Move) -> None:
        """Apply ``move`` for the current player, then continue the rotation.

        Raises:
            InvalidMoveError: ``move`` is None.
            InvalidStateError: the game is already over.
            RulesViolationError: ``move`` is not a legal move right now.
        """
        apply_move(self._state, move, self._spectators, self)

        outcome = evaluate(self._state)
        if outcome.is_over:
            self._finish(outcome)
            return

        following = self._state.current_player
        if following.is_detective:
            if following.player is not None:
                self._request_move(following)
        else:
            self._spectators.notify_rotation_complete(self)

    def _request_move(self, player: PlayerState) -> None:
        moves = get_valid_moves(self._state, player.colour)
        move = player.player.choose_move(self, player.location, moves)
        self.accept(move)

    def _finish(self, outcome: GameOutcome) -> None:
        side = "detectives" if outcome.detectives_won else "mr_x"
        logger.info(
            "Game over after round %d: %s win (%s)",
            self._state.current_round,
            side,
            outcome.reason.value,
        )
        metrics.record_game_completed(side, outcome.reason.value)
        self._spectators.notify_game_over(self, outcome.winners)

    # ------------------------------------------------------------------
    # Queries (the observable view)
    # ------------------------------------------------------------------

    def get_players(self) -> List[Colour]:
        return self._state.colours()

    def get_current_player(self) -> Colour:
        return self._state.current_player.colour

    def get_current_round(self) -> int:
        return self._state.current_round

    def get_rounds(self) -> Tuple[bool, ...]:
        return tuple(self._state.rounds)

    def get_graph(self) -> TransportGraph:
        return self._state.graph

    def get_player_location(self, colour: Colour) -> Optional[int]:
        """Public location of ``colour``; ``None`` if not in this game.

        Mr X is reported at his last-known location, which is ``0`` until
        the first reveal round.
        """
        player = self._state.player(colour)
        if player is None:
            return None
        if player.is_mr_x:
            return self._state.mr_x_last_known
        return player.location

    def get_player_tickets(self, colour: Colour, ticket: Ticket) -> Optional[int]:
        player = self._state.player(colour)
        if player is None:
            return None
        return player.tickets.get(ticket, 0)

    def get_valid_moves(self, colour: Colour) -> FrozenSet[Move]:
        return get_valid_moves(self._state, colour)

    def is_game_over(self) -> bool:
        return evaluate(self._state).is_over

    def get_winning_players(self) -> FrozenSet[Colour]:
        return evaluate(self._state).winners
