"""
Scotland Yard Error Hierarchy

Unified exception hierarchy for consistent error handling across the engine.
All custom exceptions inherit from ScotlandYardError for easy catching and
filtering.

Usage:
    from scotlandyard.errors import RulesViolationError

    try:
        game.accept(move)
    except RulesViolationError as e:
        logger.warning(f"Invalid move: {e.message}, colour: {e.context}")
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    "InvalidMoveError",
    "InvalidStateError",
    "RulesViolationError",
    # Base error
    "ScotlandYardError",
    "SpectatorError",
    "ValidationError",
]


class ScotlandYardError(Exception):
    """Base exception for all Scotland Yard errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "SCOTLANDYARD_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Game Rules Errors
# =============================================================================


class RulesViolationError(ScotlandYardError):
    """Move not present in the current legal-move set.

    Raised by ``accept`` before any state is touched, so the game is left
    exactly as it was.

    Attributes:
        colour: Colour of the player whose turn it is
    """
    code: str = "RULES_VIOLATION"

    def __init__(
        self,
        message: str,
        colour: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.colour = colour
        if colour:
            self.context["colour"] = colour


class InvalidMoveError(ScotlandYardError):
    """Absent or malformed move submitted to the engine."""
    code: str = "INVALID_MOVE"


class InvalidStateError(ScotlandYardError):
    """Corrupted or unexpected game state.

    Raised when the game state is in a configuration that should not be
    reachable through construction and normal play (e.g. Mr X missing from
    the player list), or when the host drives a finished game.
    """
    code: str = "INVALID_STATE"


class SpectatorError(ScotlandYardError):
    """Spectator registration protocol violation.

    Raised for ``None`` spectators, double registration, or unregistering
    a spectator that was never registered.
    """
    code: str = "SPECTATOR_ERROR"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(ScotlandYardError):
    """Base class for validation errors."""
    code: str = "VALIDATION_ERROR"


class ConfigurationError(ValidationError):
    """Invalid game configuration.

    Raised at construction time; the game instance is never created.
    """
    code: str = "CONFIGURATION_ERROR"
