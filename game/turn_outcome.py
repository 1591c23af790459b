"""Turn outcome value object for game actions.

This class encapsulates the complete result of one controller operation:
a read-only copy of the resulting state plus the events the operation
produced. It eliminates the need for the view layer to access game
internals or diff states to find out what happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Type, TypeVar

from .constants import Occupant, Phase, WinReason
from .errors import MuhleRuleError

if TYPE_CHECKING:  # pragma: no cover
    from .muhle_state import GameState


@dataclass(frozen=True)
class PiecePlaced:
    pos: int
    color: Occupant


@dataclass(frozen=True)
class PieceMoved:
    src: int
    dst: int
    color: Occupant


@dataclass(frozen=True)
class SelectionChanged:
    """Selected piece changed; ``pos`` is None when deselected."""

    pos: Optional[int]


@dataclass(frozen=True)
class MillFormed:
    pos: int


@dataclass(frozen=True)
class PieceCaptured:
    pos: int
    color: Occupant


@dataclass(frozen=True)
class PhaseChanged:
    phase: Phase


@dataclass(frozen=True)
class GameEnded:
    winner: Occupant
    reason: WinReason


@dataclass(frozen=True)
class Undone:
    pass


@dataclass(frozen=True)
class Rejected:
    error: MuhleRuleError

    @property
    def reason(self) -> str:
        return self.error.code


E = TypeVar("E")


class TurnOutcome:
    """Encapsulates the result of a controller operation.

    Attributes:
        state: Read-only copy of the game state after the operation
        events: Events in the order they happened. Empty for absorbed
            no-ops (e.g. clicking an opponent's piece while moving).
    """

    def __init__(self, state: "GameState", events=()):
        self.state = state
        self.events = tuple(events)

    def __repr__(self):
        return f"TurnOutcome(events={list(self.events)})"

    @property
    def rejected(self) -> bool:
        return any(isinstance(e, Rejected) for e in self.events)

    @property
    def accepted(self) -> bool:
        """True if the operation changed the position (placement, move or undo)."""
        return any(isinstance(e, (PiecePlaced, PieceMoved, Undone)) for e in self.events)

    @property
    def error(self) -> Optional[MuhleRuleError]:
        for event in self.events:
            if isinstance(event, Rejected):
                return event.error
        return None

    def events_of(self, event_type: Type[E]) -> Tuple[E, ...]:
        return tuple(e for e in self.events if isinstance(e, event_type))

    def has_captures(self) -> bool:
        return bool(self.events_of(PieceCaptured))

    def to_action_dict(self) -> Optional[dict]:
        """Describe the accepted action for writers.

        Returns:
            dict such as {'action': 'PUT', 'dst': 4, 'capture': 17} or
            {'action': 'MOVE', 'src': 3, 'dst': 4, 'capture': None};
            None when the outcome did not place or move a piece
        """
        captured = self.events_of(PieceCaptured)
        capture = captured[0].pos if captured else None

        for event in self.events:
            if isinstance(event, PiecePlaced):
                return {"action": "PUT", "dst": event.pos, "capture": capture}
            if isinstance(event, PieceMoved):
                return {
                    "action": "MOVE",
                    "src": event.src,
                    "dst": event.dst,
                    "capture": capture,
                }
        return None
