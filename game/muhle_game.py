"""Turn controller for Mühle (Nine Men's Morris).

MuhleGame owns exactly one GameState and runs every turn to completion:
apply the placement or move, resolve a mill capture through the injected
capture provider, switch the player, evaluate the win condition and keep
the undo history.

Rule violations never raise out of the public operations; they come back
as a TurnOutcome carrying a Rejected event. Only contract violations
(a position outside [0, 23]) raise InvalidPositionError.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from .constants import (
    COLOR_NAMES,
    EMPTY,
    PIECES_PER_PLAYER,
    WIN_REASON_TEXT,
    COLORS,
    Occupant,
    Phase,
    opponent_of,
)
from .errors import (
    EmptyHistoryError,
    GameOverError,
    IllegalMoveError,
    MuhleRuleError,
    NoSelectionError,
    OccupiedError,
    WrongPhaseError,
)
from .muhle_board import STANDARD_GRAPH, BoardGraph, validate_position
from .muhle_logic import (
    capturable_pieces,
    check_mill,
    get_valid_moves,
    get_winner,
    valid_destinations,
)
from .muhle_state import GameState
from .turn_outcome import (
    GameEnded,
    MillFormed,
    PhaseChanged,
    PieceCaptured,
    PieceMoved,
    PiecePlaced,
    Rejected,
    SelectionChanged,
    TurnOutcome,
    Undone,
)

logger = logging.getLogger(__name__)

# Given the capture candidates, return one of them or None to decline
CaptureProvider = Callable[[Tuple[int, ...]], Optional[int]]


def lowest_index_capture(candidates: Tuple[int, ...]) -> Optional[int]:
    """Deterministic capture policy: always take the lowest position."""
    return min(candidates) if candidates else None


def decline_capture(candidates: Tuple[int, ...]) -> Optional[int]:
    """Capture policy that never removes a piece."""
    return None


class MuhleGame:
    def __init__(
        self,
        capture_provider: CaptureProvider | None = None,
        graph: BoardGraph = STANDARD_GRAPH,
        state: GameState | None = None,
    ):
        self.graph = graph
        self.capture_provider: CaptureProvider = (
            capture_provider if capture_provider is not None else lowest_index_capture
        )
        self.state = state if state is not None else GameState.initial()

    def set_capture_provider(self, provider: CaptureProvider) -> None:
        self.capture_provider = provider

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """Independent copy of the current state for rendering."""
        return self.state.copy()

    def get_cur_player(self) -> Occupant:
        return self.state.current_player

    def get_phase(self) -> Phase:
        return self.state.phase

    def is_game_over(self) -> bool:
        return self.state.game_over

    def get_valid_destinations(self, pos: int) -> Tuple[int, ...]:
        """Legal destinations for the current player's piece at ``pos``.

        Empty when ``pos`` does not hold a piece of the player to move.
        """
        pos = validate_position(pos)
        if self.state.board[pos] != self.state.current_player:
            return ()
        return valid_destinations(
            self.state.board, pos, self.state.current_player, self.graph
        )

    def get_valid_moves(self) -> Dict[int, Tuple[int, ...]]:
        """All legal moves of the current player (moving phase)."""
        return get_valid_moves(self.state.board, self.state.current_player, self.graph)

    def get_capture_candidates(self) -> Tuple[int, ...]:
        """Pieces the current player could capture if a mill formed now."""
        return capturable_pieces(self.state.board, self.state.current_player, self.graph)

    def get_game_end_reason(self) -> Optional[str]:
        """Returns a human-readable reason for the game end, or None if ongoing."""
        if not self.state.game_over:
            return None
        winner = COLOR_NAMES[self.state.winner]
        return f"{winner} wins: {WIN_REASON_TEXT[self.state.win_reason]}"

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def apply_intent(self, pos: int) -> TurnOutcome:
        """Single entry point for the input adapter: place or select/move."""
        pos = validate_position(pos)
        if self.state.phase == Phase.PLACING:
            return self.place_piece(pos)
        return self.select_or_move(pos)

    def place_piece(self, pos: int) -> TurnOutcome:
        pos = validate_position(pos)
        state = self.state
        try:
            self._require_not_over()
            if state.phase != Phase.PLACING:
                raise WrongPhaseError("All pieces have been placed", pos)
            self._require_empty(pos)
        except MuhleRuleError as e:
            return self._reject(e)

        color = state.current_player
        state.push_snapshot()
        state.board[pos] = color
        state.pieces_placed[color] += 1
        events = [PiecePlaced(pos, color)]

        self._resolve_mill_or_rollback(pos, color, events)

        if all(state.pieces_placed[c] == PIECES_PER_PLAYER for c in COLORS):
            state.phase = Phase.MOVING
            events.append(PhaseChanged(Phase.MOVING))

        self._end_turn(events)
        return self._outcome(events)

    def select_or_move(self, pos: int) -> TurnOutcome:
        pos = validate_position(pos)
        try:
            self._require_not_over()
            if self.state.phase != Phase.MOVING:
                raise WrongPhaseError("Pieces are still being placed", pos)
        except MuhleRuleError as e:
            return self._reject(e)

        try:
            return self._select_or_move(pos)
        except NoSelectionError as e:
            logger.debug("Ignoring click: %s", e)
            return self._outcome([])

    def _select_or_move(self, pos: int) -> TurnOutcome:
        state = self.state
        occupant = state.board[pos]

        if occupant == state.current_player:
            state.selected_piece = None if state.selected_piece == pos else pos
            return self._outcome([SelectionChanged(state.selected_piece)])

        if occupant == EMPTY and state.selected_piece is not None:
            return self.move_piece(state.selected_piece, pos)

        raise NoSelectionError("No action applies to this position", pos)

    def move_piece(self, src: int, dst: int) -> TurnOutcome:
        src = validate_position(src)
        dst = validate_position(dst)
        state = self.state
        color = state.current_player
        events = []
        try:
            self._require_not_over()
            if state.phase != Phase.MOVING:
                raise WrongPhaseError("Pieces are still being placed", dst)
            if state.board[src] != color:
                raise IllegalMoveError(
                    f"No {COLOR_NAMES[color]} piece at position {src}", src
                )
            self._require_empty(dst)
            if dst not in valid_destinations(state.board, src, color, self.graph):
                if state.selected_piece is not None:
                    state.selected_piece = None
                    events.append(SelectionChanged(None))
                raise IllegalMoveError(f"Cannot move from {src} to {dst}", dst)
        except MuhleRuleError as e:
            return self._reject(e, events)

        state.push_snapshot()
        state.board[dst] = color
        state.board[src] = EMPTY
        state.selected_piece = None
        events.append(PieceMoved(src, dst, color))

        self._resolve_mill_or_rollback(dst, color, events)
        self._end_turn(events)
        return self._outcome(events)

    def undo(self) -> TurnOutcome:
        """Revert the most recent placement or move."""
        state = self.state
        if not state.history:
            return self._reject(EmptyHistoryError("Nothing to undo"))

        state.restore(state.history.pop())
        logger.debug(
            "Undo: %s to move, %d snapshot(s) left",
            COLOR_NAMES[state.current_player],
            len(state.history),
        )
        return self._outcome([Undone()])

    def reset(self) -> GameState:
        """Start a fresh game; history is discarded."""
        self.state = GameState.initial()
        return self.snapshot()

    # ------------------------------------------------------------------
    # Turn helpers
    # ------------------------------------------------------------------

    def _require_not_over(self) -> None:
        if self.state.game_over:
            raise GameOverError("The game is over")

    def _require_empty(self, pos: int) -> None:
        if self.state.board[pos] != EMPTY:
            raise OccupiedError(f"Position {pos} is already occupied", pos)

    def _resolve_mill_or_rollback(self, pos: int, color: Occupant, events: list) -> None:
        """Run the capture step; a failing provider undoes the whole turn."""
        state = self.state
        try:
            self._resolve_mill(pos, color, events)
        except Exception:
            state.restore(state.history.pop())
            raise

    def _resolve_mill(self, pos: int, color: Occupant, events: list) -> None:
        """Capture step after a piece lands on ``pos``.

        A declined or invalid choice removes nothing; the turn still ends.
        """
        board = self.state.board
        if not check_mill(board, pos, self.graph):
            return
        events.append(MillFormed(pos))

        candidates = capturable_pieces(board, color, self.graph)
        if not candidates:
            return

        choice = self.capture_provider(candidates)
        if choice is None:
            logger.info("%s declined to capture", COLOR_NAMES[color])
            return
        if choice not in candidates:
            logger.warning(
                "Ignoring capture choice %r (candidates: %s)", choice, candidates
            )
            return

        choice = int(choice)
        board[choice] = EMPTY
        events.append(PieceCaptured(choice, opponent_of(color)))

    def _end_turn(self, events: list) -> None:
        state = self.state
        state.current_player = opponent_of(state.current_player)

        winner, reason = get_winner(
            state.board, state.current_player, state.phase, state.pieces_placed, self.graph
        )
        if winner is not None:
            state.game_over = True
            state.winner = winner
            state.win_reason = reason
            events.append(GameEnded(winner, reason))
            logger.info("Game over: %s", self.get_game_end_reason())

    def _reject(self, error: MuhleRuleError, events=()) -> TurnOutcome:
        logger.debug("Rejected: %s", error)
        return self._outcome([*events, Rejected(error)])

    def _outcome(self, events) -> TurnOutcome:
        return TurnOutcome(self.snapshot(), events)
