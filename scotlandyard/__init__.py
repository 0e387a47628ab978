"""Scotland Yard rule engine.

In-memory rules for one game of Scotland Yard: legal-move generation,
move application with Mr X's hidden-location reporting, and win detection.
"""

from .errors import (
    ConfigurationError,
    InvalidMoveError,
    InvalidStateError,
    RulesViolationError,
    ScotlandYardError,
    SpectatorError,
)
from .game_engine import ScotlandYardGame
from .game_state import GameState, PlayerState, create_game_state
from .graph import Edge, TransportGraph
from .models import (
    HIDDEN_LOCATION,
    NOT_STARTED,
    Colour,
    DoubleMove,
    Move,
    PassMove,
    PlayerConfiguration,
    Ticket,
    TicketMove,
    Transport,
)
from .move_generator import get_valid_moves, ticket_moves
from .players import Player
from .spectators import Spectator
from .win_evaluator import get_winning_players, is_game_over

__version__ = "1.0.0"

__all__ = [
    "Colour",
    "ConfigurationError",
    "DoubleMove",
    "Edge",
    "GameState",
    "HIDDEN_LOCATION",
    "InvalidMoveError",
    "InvalidStateError",
    "Move",
    "NOT_STARTED",
    "PassMove",
    "Player",
    "PlayerConfiguration",
    "PlayerState",
    "RulesViolationError",
    "ScotlandYardError",
    "ScotlandYardGame",
    "Spectator",
    "SpectatorError",
    "Ticket",
    "TicketMove",
    "Transport",
    "TransportGraph",
    "create_game_state",
    "get_valid_moves",
    "get_winning_players",
    "is_game_over",
    "ticket_moves",
]
