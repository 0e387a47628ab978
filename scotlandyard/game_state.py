"""Mutable game state owned by a single Scotland Yard game.

``GameState`` is the one explicit value the move generator, win evaluator and
turn processor operate on. It is built once by :func:`create_game_state`,
which enforces every construction invariant, and is afterwards mutated only
by :mod:`scotlandyard.turn_processor`.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, PrivateAttr

from .errors import ConfigurationError, InvalidStateError
from .graph import TransportGraph
from .models import (
    HIDDEN_LOCATION,
    NOT_STARTED,
    Colour,
    PlayerConfiguration,
    Ticket,
)

logger = logging.getLogger(__name__)

__all__ = ["GameState", "PlayerState", "create_game_state"]


class PlayerState(BaseModel):
    """Per-player state: colour, true location and ticket inventory."""
    colour: Colour
    location: int
    tickets: Dict[Ticket, int]
    player: Optional[Any] = None

    class Config:
        arbitrary_types_allowed = True

    @property
    def is_mr_x(self) -> bool:
        return self.colour.is_mr_x

    @property
    def is_detective(self) -> bool:
        return self.colour.is_detective

    def has_tickets(self, ticket: Ticket, quantity: int = 1) -> bool:
        return self.tickets.get(ticket, 0) >= quantity

    def add_ticket(self, ticket: Ticket) -> None:
        self.tickets[ticket] = self.tickets.get(ticket, 0) + 1

    def remove_ticket(self, ticket: Ticket) -> None:
        self.tickets[ticket] = self.tickets.get(ticket, 0) - 1


class GameState(BaseModel):
    """Complete state of one game.

    ``players`` holds Mr X first, then detectives in registration order.
    ``current_round`` counts Mr X's spent tickets and never exceeds
    ``len(rounds)``. ``mr_x_last_known`` is ``HIDDEN_LOCATION`` until the
    first reveal round.
    """
    rounds: List[bool]
    graph: TransportGraph
    players: List[PlayerState]
    current_round: int = NOT_STARTED
    current_player_index: int = 0
    mr_x_last_known: int = HIDDEN_LOCATION

    # Legal-move memo keyed by fingerprint(); see move_generator.
    _move_cache: OrderedDict = PrivateAttr(default_factory=OrderedDict)

    class Config:
        arbitrary_types_allowed = True

    @property
    def mr_x(self) -> PlayerState:
        for player in self.players:
            if player.is_mr_x:
                return player
        raise InvalidStateError("Mr X does not exist")

    @property
    def detectives(self) -> List[PlayerState]:
        return [p for p in self.players if p.is_detective]

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    def player(self, colour: Colour) -> Optional[PlayerState]:
        for player in self.players:
            if player.colour == colour:
                return player
        return None

    def colours(self) -> List[Colour]:
        return [p.colour for p in self.players]

    def detective_locations(self) -> set[int]:
        return {p.location for p in self.players if p.is_detective}

    def advance_player(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.players)

    def rounds_remaining_after_current(self) -> int:
        return len(self.rounds) - 1 - self.current_round

    def fingerprint(self) -> tuple:
        """Everything legal-move generation reads, as a hashable key."""
        return (
            self.current_round,
            tuple(
                (p.colour, p.location, tuple(sorted(p.tickets.items())))
                for p in self.players
            ),
        )


def _validate_configurations(configurations: Sequence[PlayerConfiguration]) -> None:
    locations: set[int] = set()
    for configuration in configurations:
        if configuration.location in locations:
            raise ConfigurationError(
                "Two players cannot start at the same location",
                context={"location": configuration.location},
            )
        locations.add(configuration.location)

    colours: set[Colour] = set()
    for configuration in configurations:
        if configuration.colour in colours:
            raise ConfigurationError(
                "Two players cannot have the same colour",
                context={"colour": configuration.colour.value},
            )
        colours.add(configuration.colour)

    for configuration in configurations:
        missing = [t.value for t in Ticket if t not in configuration.tickets]
        if missing:
            raise ConfigurationError(
                "A player is missing a ticket type",
                context={"colour": configuration.colour.value, "missing": missing},
            )
        negative = [t.value for t, n in configuration.tickets.items() if n < 0]
        if negative:
            raise ConfigurationError(
                "Ticket counts cannot be negative",
                context={"colour": configuration.colour.value, "tickets": negative},
            )

    for configuration in configurations:
        if configuration.colour.is_detective and (
            configuration.tickets[Ticket.SECRET] != 0
            or configuration.tickets[Ticket.DOUBLE] != 0
        ):
            raise ConfigurationError(
                "A detective cannot hold SECRET or DOUBLE tickets",
                context={"colour": configuration.colour.value},
            )


def create_game_state(
    rounds: Sequence[bool],
    graph: TransportGraph,
    mr_x: PlayerConfiguration,
    first_detective: PlayerConfiguration,
    *rest_of_the_detectives: PlayerConfiguration,
) -> GameState:
    """Validate the configuration and build the initial :class:`GameState`.

    Raises:
        ConfigurationError: for any broken construction invariant; no state
            is created in that case.
    """
    if rounds is None:
        raise ConfigurationError("The list of rounds cannot be None")
    if graph is None:
        raise ConfigurationError("The game graph cannot be None")
    if mr_x is None or first_detective is None:
        raise ConfigurationError("Player configurations cannot be None")
    if any(c is None for c in rest_of_the_detectives):
        raise ConfigurationError("Player configurations cannot be None")

    if len(rounds) == 0:
        raise ConfigurationError("The list of rounds cannot be empty")
    if graph.is_empty():
        raise ConfigurationError("The game graph cannot be empty")
    if mr_x.colour is not Colour.BLACK:
        raise ConfigurationError(
            "Mr X's colour must be BLACK",
            context={"colour": mr_x.colour.value},
        )

    configurations = [mr_x, first_detective, *rest_of_the_detectives]
    _validate_configurations(configurations)

    players = [
        PlayerState(
            colour=c.colour,
            location=c.location,
            tickets=dict(c.tickets),
            player=c.player,
        )
        for c in configurations
    ]
    state = GameState(rounds=[bool(r) for r in rounds], graph=graph, players=players)
    logger.debug(
        "Created game: %d rounds, %d players, graph %r",
        len(state.rounds),
        len(players),
        graph,
    )
    return state
