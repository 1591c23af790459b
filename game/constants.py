"""Game constants shared across modules.

This module contains occupant, phase and outcome constants used by both the
stateful game (MuhleGame) and the stateless rules (muhle_logic).
"""

from enum import Enum, IntEnum


class Occupant(IntEnum):
    """Contents of a board position (stored as int8 in the board array)."""

    EMPTY = 0
    WHITE = 1
    BLACK = 2


class Phase(str, Enum):
    PLACING = "placing"
    MOVING = "moving"


class WinReason(str, Enum):
    TOO_FEW_PIECES = "too_few_pieces"
    BLOCKED = "blocked"


WHITE = Occupant.WHITE
BLACK = Occupant.BLACK
EMPTY = Occupant.EMPTY
COLORS = (WHITE, BLACK)

# Board and piece counts
NUM_POSITIONS = 24
PIECES_PER_PLAYER = 9
FLYING_PIECE_COUNT = 3  # A side with exactly this many pieces may fly
MIN_PIECES = 3  # Fewer than this (on board + in hand) loses

COLOR_NAMES = {WHITE: "White", BLACK: "Black"}
COLOR_SYMBOLS = {EMPTY: ".", WHITE: "W", BLACK: "B"}

WIN_REASON_TEXT = {
    WinReason.TOO_FEW_PIECES: "Opponent reduced to fewer than 3 pieces",
    WinReason.BLOCKED: "Opponent has no legal move",
}


def opponent_of(color: Occupant) -> Occupant:
    if color == WHITE:
        return BLACK
    if color == BLACK:
        return WHITE
    raise ValueError(f"Not a player color: {color!r}")
