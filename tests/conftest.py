"""
Shared pytest fixtures for Scotland Yard engine tests.

Game fixtures are function-scoped to keep tests isolated. The default board
is small enough to reason about by hand:

    1 -taxi- 2 -taxi- 4 -underground- 5 -taxi- 6 -bus- 7 -ferry- 8
    1 -bus-- 3 -taxi- 4
"""

from pathlib import Path
import sys
from typing import Callable, Dict, List, Optional

import pytest

# Ensure the project root is on sys.path so `import scotlandyard` works when
# running pytest without installing the package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scotlandyard.game_engine import ScotlandYardGame
from scotlandyard.graph import TransportGraph
from scotlandyard.models import Colour, Move, PlayerConfiguration, Ticket
from scotlandyard.players import Player
from scotlandyard.spectators import Spectator


BOARD_EDGES = [
    (1, 2, "taxi"),
    (1, 3, "bus"),
    (2, 4, "taxi"),
    (3, 4, "taxi"),
    (4, 5, "underground"),
    (5, 6, "taxi"),
    (6, 7, "bus"),
    (7, 8, "ferry"),
]


# =============================================================================
# TEST DOUBLES
# =============================================================================


class ScriptedPlayer(Player):
    """Player that returns pre-scripted moves and records what it was offered."""

    def __init__(self, moves: Optional[List[Move]] = None):
        self.script: List[Move] = list(moves or [])
        self.offered: List[frozenset] = []
        self.locations: List[int] = []

    def choose_move(self, view, location, moves):
        self.offered.append(frozenset(moves))
        self.locations.append(location)
        if not self.script:
            raise AssertionError("ScriptedPlayer ran out of moves")
        return self.script.pop(0)


class RecordingSpectator(Spectator):
    """Spectator that logs every callback as a tuple, in order."""

    def __init__(self):
        self.events: List[tuple] = []

    def on_move_made(self, view, move):
        self.events.append(("move", move, view.get_current_player()))

    def on_round_started(self, view, round_number):
        self.events.append(("round", round_number, view.get_current_round()))

    def on_rotation_complete(self, view):
        self.events.append(("rotation",))

    def on_game_over(self, view, winning_players):
        self.events.append(("game_over", frozenset(winning_players)))

    def kinds(self) -> List[str]:
        return [event[0] for event in self.events]

    def moves(self) -> List[Move]:
        return [event[1] for event in self.events if event[0] == "move"]


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def _tickets(
    taxi: int = 0,
    bus: int = 0,
    underground: int = 0,
    double: int = 0,
    secret: int = 0,
) -> Dict[Ticket, int]:
    return {
        Ticket.TAXI: taxi,
        Ticket.BUS: bus,
        Ticket.UNDERGROUND: underground,
        Ticket.DOUBLE: double,
        Ticket.SECRET: secret,
    }


@pytest.fixture
def tickets() -> Callable[..., Dict[Ticket, int]]:
    """Factory for full ticket inventories (every kind present)."""
    return _tickets


@pytest.fixture
def graph() -> TransportGraph:
    return TransportGraph.from_edges(BOARD_EDGES)


@pytest.fixture
def mr_x_config() -> Callable[..., PlayerConfiguration]:
    def _create(location: int = 1, player: Optional[Player] = None, **counts) -> PlayerConfiguration:
        return PlayerConfiguration(
            colour=Colour.BLACK,
            location=location,
            tickets=_tickets(**counts),
            player=player,
        )

    return _create


@pytest.fixture
def detective_config() -> Callable[..., PlayerConfiguration]:
    def _create(
        colour: Colour = Colour.BLUE,
        location: int = 6,
        player: Optional[Player] = None,
        **counts,
    ) -> PlayerConfiguration:
        return PlayerConfiguration(
            colour=colour,
            location=location,
            tickets=_tickets(**counts),
            player=player,
        )

    return _create


@pytest.fixture
def game_factory(graph, mr_x_config, detective_config) -> Callable[..., ScotlandYardGame]:
    """Factory for games on the default board.

    By default Mr X starts on 1 with one taxi ticket and BLUE waits on 6
    with plenty of taxi and bus tickets.
    """

    def _create(
        rounds=(False, True, False),
        mr_x: Optional[PlayerConfiguration] = None,
        detectives: Optional[List[PlayerConfiguration]] = None,
        board: Optional[TransportGraph] = None,
    ) -> ScotlandYardGame:
        mr_x = mr_x or mr_x_config(location=1, taxi=1)
        detectives = detectives or [
            detective_config(Colour.BLUE, 6, taxi=10, bus=10)
        ]
        return ScotlandYardGame(list(rounds), board or graph, mr_x, *detectives)

    return _create


@pytest.fixture
def recorder() -> RecordingSpectator:
    return RecordingSpectator()


@pytest.fixture
def scripted() -> Callable[..., ScriptedPlayer]:
    return ScriptedPlayer
