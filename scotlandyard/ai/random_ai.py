"""Random AI implementation for Scotland Yard.

This agent selects uniformly random legal moves using the per-instance RNG on
the :class:`BaseAI`. It is primarily intended for testing, self-play soaks
and baselines rather than competitive play.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet

from ..models import Move
from .base import BaseAI

if TYPE_CHECKING:
    from ..game_engine import ScotlandYardGame


class RandomAI(BaseAI):
    """AI that selects random valid moves."""

    def select_move(
        self,
        view: "ScotlandYardGame",
        location: int,
        moves: AbstractSet[Move],
    ) -> Move:
        """Select a random move from ``moves``.

        Moves arrive as a set, so they are put in a canonical order first;
        otherwise a fixed seed would not give a reproducible game.
        """
        ordered = sorted(moves, key=str)
        return self.get_random_element(ordered)
