"""AI players for Scotland Yard."""

from .base import BaseAI
from .random_ai import RandomAI

__all__ = ["BaseAI", "RandomAI"]
