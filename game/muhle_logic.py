"""Stateless game logic for Mühle.

All functions are pure: same inputs → same outputs.
No side effects, no mutations, no hidden state.

Architecture:
    BoardGraph: Immutable board graph (adjacency, mills), see muhle_board
    Board: 1D int8 ndarray of length 24 holding Occupant values
    Pure functions: Take (board, ..., graph) → return queries

Usage:
    board = new_board()
    board[[0, 8, 16]] = WHITE
    check_mill(board, 16)                   # True
    capturable_pieces(board, WHITE)         # () - Black has no pieces
    valid_destinations(board, 0, WHITE)     # every empty position: White flies with 3
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple

import numpy as np

from .constants import (
    EMPTY,
    FLYING_PIECE_COUNT,
    MIN_PIECES,
    NUM_POSITIONS,
    PIECES_PER_PLAYER,
    Occupant,
    Phase,
    WinReason,
    opponent_of,
)
from .muhle_board import STANDARD_GRAPH, BoardGraph, validate_position


# ============================================================================
# PURE HELPER FUNCTIONS
# ============================================================================

def new_board() -> np.ndarray:
    """Return an empty board (all positions EMPTY)."""
    return np.full(NUM_POSITIONS, EMPTY, dtype=np.int8)


def count_pieces(board: np.ndarray, color: Occupant) -> int:
    """Number of positions held by ``color``."""
    return int(np.count_nonzero(board == color))


def pieces_of(board: np.ndarray, color: Occupant) -> Tuple[int, ...]:
    """Positions held by ``color`` in ascending order."""
    return tuple(int(p) for p in np.flatnonzero(board == color))


def empty_positions(board: np.ndarray) -> Tuple[int, ...]:
    """Empty positions in ascending order."""
    return pieces_of(board, EMPTY)


def pieces_in_hand(pieces_placed: Mapping[Occupant, int], color: Occupant) -> int:
    """Pieces ``color`` still has to place during the placing phase."""
    return PIECES_PER_PLAYER - pieces_placed[color]


# ============================================================================
# MILLS
# ============================================================================

def check_mill(
    board: np.ndarray, p: int, graph: BoardGraph = STANDARD_GRAPH
) -> bool:
    """Return True if the piece at ``p`` is part of a formed mill.

    Call right after a placement or move lands on ``p``, with the
    post-move board.
    """
    p = validate_position(p)
    occupant = board[p]
    if occupant == EMPTY:
        return False
    lines = np.array(graph.mills_containing(p))
    return bool(np.any(np.all(board[lines] == occupant, axis=1)))


def in_mill_mask(
    board: np.ndarray, color: Occupant, graph: BoardGraph = STANDARD_GRAPH
) -> np.ndarray:
    """Boolean mask (24,) of positions of ``color`` inside a formed mill."""
    formed = np.all(board[graph.mill_table] == color, axis=1)
    mask = np.zeros(graph.num_positions, dtype=bool)
    mask[graph.mill_table[formed].ravel()] = True
    return mask


def protected_pieces(
    board: np.ndarray, color: Occupant, graph: BoardGraph = STANDARD_GRAPH
) -> Tuple[int, ...]:
    """Pieces of ``color`` that currently sit in a mill."""
    return tuple(int(p) for p in np.flatnonzero(in_mill_mask(board, color, graph)))


def capturable_pieces(
    board: np.ndarray,
    capturing_color: Occupant,
    graph: BoardGraph = STANDARD_GRAPH,
) -> Tuple[int, ...]:
    """Opponent pieces that ``capturing_color`` may remove after a mill.

    Pieces outside a mill are preferred; mill-protected pieces become
    eligible only when every opponent piece is protected. Empty only when
    the opponent has no pieces at all.
    """
    opponent = opponent_of(capturing_color)
    opponent_mask = board == opponent
    protected = in_mill_mask(board, opponent, graph)

    unprotected = np.flatnonzero(opponent_mask & ~protected)
    if unprotected.size > 0:
        return tuple(int(p) for p in unprotected)
    return tuple(int(p) for p in np.flatnonzero(opponent_mask & protected))


# ============================================================================
# MOVEMENT
# ============================================================================

def can_fly(board: np.ndarray, color: Occupant) -> bool:
    """True iff ``color`` has exactly three pieces on the board.

    Flying is a capability, not a phase: it is re-evaluated on every
    validity check.
    """
    return count_pieces(board, color) == FLYING_PIECE_COUNT


def valid_destinations(
    board: np.ndarray,
    src: int,
    color: Occupant,
    graph: BoardGraph = STANDARD_GRAPH,
) -> Tuple[int, ...]:
    """Positions the piece at ``src`` may move to, in ascending order."""
    src = validate_position(src)
    if can_fly(board, color):
        return empty_positions(board)
    return tuple(sorted(q for q in graph.adjacent(src) if board[q] == EMPTY))


def get_valid_moves(
    board: np.ndarray, color: Occupant, graph: BoardGraph = STANDARD_GRAPH
) -> Dict[int, Tuple[int, ...]]:
    """Map each movable piece of ``color`` to its destinations."""
    moves = {}
    for src in pieces_of(board, color):
        destinations = valid_destinations(board, src, color, graph)
        if destinations:
            moves[src] = destinations
    return moves


def has_any_legal_move(
    board: np.ndarray, color: Occupant, graph: BoardGraph = STANDARD_GRAPH
) -> bool:
    """True if ``color`` can make at least one move (moving phase rules)."""
    empties = board == EMPTY
    if not np.any(empties):
        return False
    if can_fly(board, color):
        return True
    own = board == color
    return bool(np.any(graph.adjacency_matrix[own][:, empties]))


# ============================================================================
# GAME END
# ============================================================================

def get_winner(
    board: np.ndarray,
    player_to_move: Occupant,
    phase: Phase,
    pieces_placed: Mapping[Occupant, int],
    graph: BoardGraph = STANDARD_GRAPH,
) -> Tuple[Optional[Occupant], Optional[WinReason]]:
    """Evaluate the win condition after the player switch.

    ``player_to_move`` is the side about to move; if it has lost, the other
    side (the one that just moved) wins.

    Returns:
        (winner, reason), or (None, None) while the game continues
    """
    mover = opponent_of(player_to_move)

    available = count_pieces(board, player_to_move) + pieces_in_hand(
        pieces_placed, player_to_move
    )
    if available < MIN_PIECES:
        return mover, WinReason.TOO_FEW_PIECES

    if phase == Phase.MOVING and not has_any_legal_move(board, player_to_move, graph):
        return mover, WinReason.BLOCKED

    return None, None
