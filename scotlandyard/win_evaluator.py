"""Terminal-state detection for the Scotland Yard engine.

``evaluate`` is the single place the end-of-game rules live;
``is_game_over`` and ``get_winning_players`` are both views over its result
so they cannot disagree about whether the game has ended.

Detectives win when one of them stands on Mr X's true location, or when it
is Mr X's turn and he has no legal move. Mr X wins when every detective is
reduced to passing, or when the round limit is reached as he is due to move.
Conditions are checked in that order: capture, stuck detectives, round
limit, stuck Mr X.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from .game_state import GameState
from .models import Colour, PassMove
from .move_generator import get_valid_moves

__all__ = [
    "GameOutcome",
    "WinReason",
    "evaluate",
    "get_winning_players",
    "is_game_over",
]


class WinReason(str, Enum):
    MR_X_CAUGHT = "mr_x_caught"
    DETECTIVES_STUCK = "detectives_stuck"
    ROUND_LIMIT = "round_limit"
    MR_X_STUCK = "mr_x_stuck"


@dataclass(frozen=True)
class GameOutcome:
    is_over: bool
    winners: FrozenSet[Colour] = field(default_factory=frozenset)
    reason: Optional[WinReason] = None

    @property
    def detectives_won(self) -> bool:
        return self.reason in (WinReason.MR_X_CAUGHT, WinReason.MR_X_STUCK)


_ONGOING = GameOutcome(is_over=False)


def _detectives_stuck(state: GameState) -> bool:
    for detective in state.detectives:
        moves = get_valid_moves(state, detective.colour)
        if moves != {PassMove(colour=detective.colour)}:
            return False
    return True


def evaluate(state: GameState) -> GameOutcome:
    """Decide whether ``state`` is terminal and who won.

    Raises:
        InvalidStateError: if Mr X is missing from the player list, which
            construction makes impossible.
    """
    mr_x = state.mr_x
    detectives = frozenset(p.colour for p in state.detectives)
    mr_x_to_move = state.current_player.is_mr_x

    if any(p.location == mr_x.location for p in state.detectives):
        return GameOutcome(True, detectives, WinReason.MR_X_CAUGHT)

    if _detectives_stuck(state):
        return GameOutcome(True, frozenset({mr_x.colour}), WinReason.DETECTIVES_STUCK)

    if mr_x_to_move and state.current_round >= len(state.rounds):
        return GameOutcome(True, frozenset({mr_x.colour}), WinReason.ROUND_LIMIT)

    if mr_x_to_move and not get_valid_moves(state, mr_x.colour):
        return GameOutcome(True, detectives, WinReason.MR_X_STUCK)

    return _ONGOING


def is_game_over(state: GameState) -> bool:
    return evaluate(state).is_over


def get_winning_players(state: GameState) -> FrozenSet[Colour]:
    """Winning colours, or an empty set while the game is still running."""
    return evaluate(state).winners
