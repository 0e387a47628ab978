"""
Base AI Player class for Scotland Yard
Abstract base class that all AI implementations inherit from
"""

import time
import random
from abc import abstractmethod
from typing import TYPE_CHECKING, AbstractSet, Any, List, Optional

from ..models import AIConfig, Colour, Move
from ..players import Player

if TYPE_CHECKING:
    from ..game_engine import ScotlandYardGame


def derive_seed(colour: Colour) -> int:
    """
    Derive a deterministic RNG seed when no explicit ``rng_seed`` is set.

    Mixes the colour's position in the enum into a 32-bit value so every
    player in a game gets a different but reproducible stream.
    """
    index = list(Colour).index(colour)
    base = (index + 1) * 1_000_003 ^ 97_911
    return int(base & 0xFFFFFFFF)


class BaseAI(Player):
    """Abstract base class for all AI implementations"""

    def __init__(self, colour: Colour, config: Optional[AIConfig] = None):
        """
        Initialize AI player

        Args:
            colour: The colour this AI controls
            config: AI configuration settings
        """
        self.colour = colour
        self.config = config or AIConfig()
        self.move_count = 0

        # Per-instance RNG used for all stochastic behaviour. Prefer an
        # explicit rng_seed from AIConfig when provided.
        if self.config.rng_seed is not None:
            self.rng_seed: int = int(self.config.rng_seed)
        else:
            self.rng_seed = derive_seed(colour)
        self.rng: random.Random = random.Random(self.rng_seed)

    def choose_move(
        self,
        view: "ScotlandYardGame",
        location: int,
        moves: AbstractSet[Move],
    ) -> Move:
        self.simulate_thinking()
        move = self.select_move(view, location, moves)
        self.move_count += 1
        return move

    @abstractmethod
    def select_move(
        self,
        view: "ScotlandYardGame",
        location: int,
        moves: AbstractSet[Move],
    ) -> Move:
        """
        Select a move from ``moves``

        Args:
            view: Observable game view
            location: This player's true location
            moves: Legal moves, never empty

        Returns:
            Selected move
        """
        pass

    def simulate_thinking(self) -> None:
        """Sleep for the configured think time, if any."""
        if self.config.think_time:
            time.sleep(self.config.think_time / 1000.0)

    def get_random_element(self, items: List[Any]) -> Optional[Any]:
        """
        Get random element from list using the per-instance RNG.

        Args:
            items: List of items

        Returns:
            Random element or None if list is empty
        """
        if not items:
            return None
        return self.rng.choice(items)
