"""Legal-move generation for the Scotland Yard engine.

Pure functions of a :class:`GameState`; nothing here mutates state. The win
evaluator relies on these exact sets to decide whether a player is stuck, so
"stuck" and "no legal moves" can never drift apart.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Set

from . import config
from .game_state import GameState, PlayerState
from .models import Colour, DoubleMove, Move, PassMove, Ticket, TicketMove

logger = logging.getLogger(__name__)

__all__ = ["get_valid_moves", "ticket_moves", "clear_move_cache"]


def ticket_moves(state: GameState, player: PlayerState, location: int) -> Set[TicketMove]:
    """Single-step moves for ``player`` as if standing on ``location``.

    A destination occupied by any detective is never offered, to either
    side. Each affordable edge yields a move with its own ticket, plus a
    SECRET move to the same destination when the player holds one.
    """
    occupied = state.detective_locations()
    moves: Set[TicketMove] = set()
    for edge in state.graph.edges_from(location):
        if edge.destination in occupied:
            continue
        ticket = Ticket.from_transport(edge.transport)
        if player.has_tickets(ticket):
            moves.add(
                TicketMove(colour=player.colour, ticket=ticket, destination=edge.destination)
            )
        if player.has_tickets(Ticket.SECRET):
            moves.add(
                TicketMove(
                    colour=player.colour,
                    ticket=Ticket.SECRET,
                    destination=edge.destination,
                )
            )
    return moves


def _double_moves(state: GameState, player: PlayerState, singles: Set[TicketMove]) -> Set[DoubleMove]:
    doubles: Set[DoubleMove] = set()
    for first in singles:
        for second in ticket_moves(state, player, first.destination):
            same_ticket = first.ticket == second.ticket
            if same_ticket and not player.has_tickets(first.ticket, 2):
                continue
            doubles.add(DoubleMove(colour=player.colour, first_move=first, second_move=second))
    return doubles


def _generate(state: GameState, player: PlayerState) -> FrozenSet[Move]:
    singles = ticket_moves(state, player, player.location)
    moves: Set[Move] = set(singles)

    # A double needs a round left for its second leg.
    if player.has_tickets(Ticket.DOUBLE) and state.rounds_remaining_after_current() > 0:
        moves.update(_double_moves(state, player, singles))

    if player.is_detective and not moves:
        moves.add(PassMove(colour=player.colour))

    return frozenset(moves)


def get_valid_moves(state: GameState, colour: Colour) -> FrozenSet[Move]:
    """Return every legal move for ``colour`` in ``state``.

    Detectives with nothing to do get ``{PassMove}``; Mr X with nothing to
    do gets an empty set. Unknown colours also get an empty set.
    """
    player = state.player(colour)
    if player is None:
        return frozenset()

    if not config.USE_MOVE_CACHE:
        return _generate(state, player)

    cache = state._move_cache
    key = (state.fingerprint(), colour)
    cached = cache.get(key)
    if cached is not None:
        cache.move_to_end(key)
        return cached

    moves = _generate(state, player)
    while len(cache) >= config.MOVE_CACHE_SIZE > 0:
        cache.popitem(last=False)
    if config.MOVE_CACHE_SIZE > 0:
        cache[key] = moves
    if config.DEBUG_ENGINE:
        logger.debug("Generated %d moves for %s", len(moves), colour.name)
    return moves


def clear_move_cache(state: GameState) -> None:
    state._move_cache.clear()
