"""Mühle error hierarchy.

Rule violations are recoverable: every public MuhleGame operation catches
MuhleRuleError and reports it as a Rejected event instead of raising.
InvalidPositionError is a programmer error and is allowed to propagate.

Usage:
    from game.errors import MuhleRuleError

    try:
        game._require_empty(pos)
    except MuhleRuleError as e:
        logger.warning(f"Rejected: {e.message} ({e.code})")
"""

from typing import Any

__all__ = [
    "EmptyHistoryError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidPositionError",
    "MuhleRuleError",
    "NoSelectionError",
    "OccupiedError",
    "WrongPhaseError",
]


class MuhleRuleError(Exception):
    """Base exception for recoverable rule violations.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        position: Board position the violation refers to (if any)
    """

    code: str = "RULE_VIOLATION"

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is not None:
            return f"[{self.code}] {self.message} (position={self.position})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "position": self.position,
        }


class OccupiedError(MuhleRuleError):
    """Target position is not empty."""

    code: str = "OCCUPIED"


class IllegalMoveError(MuhleRuleError):
    """Destination is not reachable from the selected piece.

    Also raised when the source position does not hold a piece of the
    player to move.
    """

    code: str = "ILLEGAL_MOVE"


class NoSelectionError(MuhleRuleError):
    """No action applies to the clicked position.

    Absorbed by select_or_move as a no-op; never reported to callers.
    """

    code: str = "NO_SELECTION"


class EmptyHistoryError(MuhleRuleError):
    """Undo requested with no snapshots on the history stack."""

    code: str = "EMPTY_HISTORY"


class GameOverError(MuhleRuleError):
    """Mutating action attempted after the game has ended."""

    code: str = "GAME_OVER"


class WrongPhaseError(MuhleRuleError):
    """Action does not belong to the current phase (e.g. moving while placing)."""

    code: str = "WRONG_PHASE"


class InvalidPositionError(ValueError):
    """Position index outside [0, 23]. Contract violation, not a rule violation."""
