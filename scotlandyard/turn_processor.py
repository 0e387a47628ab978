"""Move application and Mr X's hidden-location bookkeeping.

``apply_move`` validates a submitted move against the current legal-move set,
advances the turn pointer, applies the move's effects and notifies spectators
of what the public is allowed to see. All validation happens before the first
mutation; once a move is accepted its application cannot fail.

Reporting rules for Mr X:

- On a reveal round his true destination becomes the last-known location
  and is reported; otherwise the (possibly stale) last-known location is
  reported in its place. The ticket is always reported truthfully, so a
  SECRET ticket hides the transport even on a reveal round.
- A double move is reported up front with both legs already masked, using
  the last-known location as it stood before either leg was applied.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from . import config, metrics
from .errors import InvalidMoveError, InvalidStateError, RulesViolationError
from .game_state import GameState, PlayerState
from .models import DoubleMove, Move, PassMove, Ticket, TicketMove
from .move_generator import get_valid_moves
from .spectators import SpectatorRegistry
from .win_evaluator import evaluate

if TYPE_CHECKING:
    from .game_engine import ScotlandYardGame

logger = logging.getLogger(__name__)

__all__ = ["apply_move", "reported_double_move", "validate_move"]


def validate_move(state: GameState, move: Move) -> None:
    """Raise unless ``move`` is legal for the player whose turn it is."""
    if move is None:
        metrics.record_rejected_move("none")
        raise InvalidMoveError("Move cannot be None")
    if not isinstance(move, (PassMove, TicketMove, DoubleMove)):
        metrics.record_rejected_move("malformed")
        raise InvalidMoveError(
            "Not a move", context={"type": type(move).__name__}
        )
    if evaluate(state).is_over:
        metrics.record_rejected_move("game_over")
        raise InvalidStateError(
            "Cannot accept a move when the game is over",
            context={"move": str(move)},
        )

    colour = state.current_player.colour
    if move not in get_valid_moves(state, colour):
        metrics.record_rejected_move("illegal")
        logger.warning("Rejected move %s for %s", move, colour.name)
        raise RulesViolationError(
            "The move is not in the valid move set",
            colour=colour.value,
            context={"move": str(move)},
        )


def reported_double_move(state: GameState, move: DoubleMove) -> DoubleMove:
    """Public version of ``move``, computed before either leg is applied."""
    first_reveal = state.rounds[state.current_round]
    second_reveal = state.rounds[state.current_round + 1]
    last_known = state.mr_x_last_known

    first_destination = move.first_move.destination if first_reveal else last_known
    if second_reveal:
        second_destination = move.second_move.destination
    elif first_reveal:
        second_destination = move.first_move.destination
    else:
        second_destination = last_known

    return DoubleMove.of(
        move.colour,
        move.first_move.ticket,
        first_destination,
        move.second_move.ticket,
        second_destination,
    )


def _apply_ticket(
    state: GameState,
    move: TicketMove,
    spectators: SpectatorRegistry,
    view: "ScotlandYardGame",
) -> TicketMove:
    player = state.player(move.colour)
    player.location = move.destination
    player.remove_ticket(move.ticket)

    if player.is_detective:
        # Tickets recycle from detectives to Mr X.
        state.mr_x.add_ticket(move.ticket)
        metrics.record_move("ticket", "detective")
        spectators.notify_move_made(view, move)
        return move

    reveal = state.rounds[state.current_round]
    if reveal:
        state.mr_x_last_known = move.destination
    reported = TicketMove(
        colour=move.colour, ticket=move.ticket, destination=state.mr_x_last_known
    )
    state.current_round += 1

    metrics.record_move("ticket", "mr_x")
    metrics.record_round_started()
    if config.DEBUG_ENGINE:
        logger.debug(
            "Mr X spent %s on round %d (reveal=%s), reported at %d",
            move.ticket.name,
            state.current_round,
            reveal,
            reported.destination,
        )
    spectators.notify_round_started(view, state.current_round)
    spectators.notify_move_made(view, reported)
    return reported


def _apply_double(
    state: GameState,
    player: PlayerState,
    move: DoubleMove,
    spectators: SpectatorRegistry,
    view: "ScotlandYardGame",
) -> DoubleMove:
    reported = reported_double_move(state, move)
    player.remove_ticket(Ticket.DOUBLE)
    metrics.record_move("double", "mr_x")
    spectators.notify_move_made(view, reported)
    _apply_ticket(state, move.first_move, spectators, view)
    _apply_ticket(state, move.second_move, spectators, view)
    return reported


def apply_move(
    state: GameState,
    move: Move,
    spectators: SpectatorRegistry,
    view: "ScotlandYardGame",
) -> Move:
    """Validate and apply ``move`` for the current player.

    The turn pointer advances before any effect is applied, so spectators
    notified during application already see the next player as current.

    Returns:
        The move as reported to spectators (masked for Mr X).

    Raises:
        InvalidMoveError: ``move`` is None or not a move.
        InvalidStateError: the game is already over; state is untouched.
        RulesViolationError: ``move`` is not legal; state is untouched.
    """
    validate_move(state, move)

    player = state.current_player
    state.advance_player()
    if config.DEBUG_ENGINE:
        logger.debug("Applying %s", move)

    match move:
        case PassMove():
            metrics.record_move("pass", "detective")
            spectators.notify_move_made(view, move)
            return move
        case TicketMove():
            return _apply_ticket(state, move, spectators, view)
        case DoubleMove():
            return _apply_double(state, player, move, spectators, view)
