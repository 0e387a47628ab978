"""Player actor interface.

A player is the external decision maker for one colour. The engine hands it
the observable view, the player's own location and the legal-move set, and
expects exactly one member of that set back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, AbstractSet

from .models import Move

if TYPE_CHECKING:
    from .game_engine import ScotlandYardGame


class Player(ABC):
    """Abstract base class for anything that chooses moves."""

    @abstractmethod
    def choose_move(
        self,
        view: "ScotlandYardGame",
        location: int,
        moves: AbstractSet[Move],
    ) -> Move:
        """
        Pick one move from ``moves``

        Args:
            view: Read-only view of the game. Mr X's location reported by
                the view is his last-known location, not his true one.
            location: The acting player's true location
            moves: Legal moves for the acting player; never empty when
                the engine asks

        Returns:
            A member of ``moves``
        """
        pass
