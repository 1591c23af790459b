"""Mutable game state and history snapshots for Mühle."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import numpy as np

from .constants import BLACK, COLORS, WHITE, Occupant, Phase, WinReason
from .muhle_logic import count_pieces, new_board


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Value copy of the state taken before a mutating action.

    The board array is copied and marked read-only so nothing can
    corrupt history after the push.
    """

    board: np.ndarray
    pieces_placed: Mapping[Occupant, int]
    selected_piece: Optional[int]
    current_player: Occupant
    phase: Phase

    @classmethod
    def of(cls, state: "GameState") -> "Snapshot":
        board = np.copy(state.board)
        board.flags.writeable = False
        return cls(
            board=board,
            pieces_placed=MappingProxyType(dict(state.pieces_placed)),
            selected_piece=state.selected_piece,
            current_player=state.current_player,
            phase=state.phase,
        )


@dataclass(eq=False)
class GameState:
    """Complete state of one game.

    Attributes:
        board: (24,) int8 array of Occupant values
        current_player: Side to move (WHITE or BLACK)
        phase: PLACING until both sides placed all pieces, then MOVING
        pieces_placed: Pieces each side has placed so far (0..9)
        selected_piece: Own piece awaiting a destination (moving phase only)
        game_over: Terminal flag
        winner: Winning side once game_over is set
        win_reason: Why the game ended
        history: Snapshots, most recent last
    """

    board: np.ndarray = field(default_factory=new_board)
    current_player: Occupant = WHITE
    phase: Phase = Phase.PLACING
    pieces_placed: Dict[Occupant, int] = field(
        default_factory=lambda: {WHITE: 0, BLACK: 0}
    )
    selected_piece: Optional[int] = None
    game_over: bool = False
    winner: Optional[Occupant] = None
    win_reason: Optional[WinReason] = None
    history: List[Snapshot] = field(default_factory=list)

    @classmethod
    def initial(cls) -> "GameState":
        return cls()

    def copy(self) -> "GameState":
        """Deep, independent copy (snapshots are immutable and shared)."""
        return GameState(
            board=np.copy(self.board),
            current_player=self.current_player,
            phase=self.phase,
            pieces_placed=dict(self.pieces_placed),
            selected_piece=self.selected_piece,
            game_over=self.game_over,
            winner=self.winner,
            win_reason=self.win_reason,
            history=list(self.history),
        )

    def push_snapshot(self) -> Snapshot:
        snapshot = Snapshot.of(self)
        self.history.append(snapshot)
        return snapshot

    def restore(self, snapshot: Snapshot) -> None:
        """Restore position data from ``snapshot`` and clear the terminal flag."""
        self.board = np.array(snapshot.board, dtype=np.int8, copy=True)
        self.pieces_placed = dict(snapshot.pieces_placed)
        self.selected_piece = snapshot.selected_piece
        self.current_player = snapshot.current_player
        self.phase = snapshot.phase
        self.game_over = False
        self.winner = None
        self.win_reason = None

    def count(self, color: Occupant) -> int:
        return count_pieces(self.board, color)

    def pieces_on_board(self) -> Dict[Occupant, int]:
        return {color: self.count(color) for color in COLORS}

    def captured(self, color: Occupant) -> int:
        """Pieces of ``color`` removed from the board so far."""
        return self.pieces_placed[color] - self.count(color)

    def can_undo(self) -> bool:
        return len(self.history) > 0
