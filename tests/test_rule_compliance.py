"""
Rule compliance tests for the stateless Mühle rules.

Covers mill detection, capture eligibility, flying and move generation.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from game.constants import BLACK, EMPTY, WHITE
from game.muhle_logic import (
    can_fly,
    capturable_pieces,
    check_mill,
    count_pieces,
    empty_positions,
    get_valid_moves,
    has_any_legal_move,
    in_mill_mask,
    new_board,
    pieces_in_hand,
    pieces_of,
    protected_pieces,
    valid_destinations,
)


def make_board(white=(), black=()):
    board = new_board()
    board[list(white)] = WHITE
    board[list(black)] = BLACK
    return board


class TestBoardHelpers:
    def test_new_board_is_empty(self):
        board = new_board()
        assert board.shape == (24,)
        assert board.dtype == np.int8
        assert np.all(board == EMPTY)

    def test_counts_and_listings(self):
        board = make_board(white=(5, 0), black=(7,))
        assert count_pieces(board, WHITE) == 2
        assert pieces_of(board, WHITE) == (0, 5)
        assert len(empty_positions(board)) == 21
        assert 7 not in empty_positions(board)

    def test_pieces_in_hand(self):
        assert pieces_in_hand({WHITE: 4, BLACK: 3}, WHITE) == 5
        assert pieces_in_hand({WHITE: 9, BLACK: 9}, BLACK) == 0


class TestCheckMill:
    def test_side_mill(self):
        board = make_board(white=(7, 0, 1))
        assert check_mill(board, 0)
        assert check_mill(board, 7)

    def test_connector_mill(self):
        board = make_board(white=(0, 8, 16))
        assert check_mill(board, 16)

    def test_mixed_line_is_not_a_mill(self):
        board = make_board(white=(0, 8), black=(16,))
        assert not check_mill(board, 8)
        assert not check_mill(board, 16)

    def test_empty_position_is_never_in_a_mill(self):
        assert not check_mill(new_board(), 3)

    def test_only_lines_through_the_position_count(self):
        board = make_board(white=(7, 0, 1, 3))
        assert not check_mill(board, 3)


class TestCapture:
    def test_unprotected_pieces_preferred(self):
        board = make_board(white=(0, 8, 16), black=(3, 4, 5, 20))
        assert protected_pieces(board, BLACK) == (3, 4, 5)
        assert capturable_pieces(board, WHITE) == (20,)

    def test_all_protected_become_capturable(self):
        board = make_board(white=(0, 8, 16), black=(3, 4, 5))
        assert capturable_pieces(board, WHITE) == (3, 4, 5)

    def test_no_opponent_pieces_gives_no_candidates(self):
        board = make_board(white=(0, 8, 16))
        assert capturable_pieces(board, WHITE) == ()

    def test_candidates_sorted_and_only_opponent(self):
        board = make_board(white=(0, 8, 16), black=(23, 2, 11))
        candidates = capturable_pieces(board, WHITE)
        assert candidates == (2, 11, 23)
        assert all(board[p] == BLACK for p in candidates)

    def test_in_mill_mask(self):
        board = make_board(white=(13, 14, 15, 2))
        mask = in_mill_mask(board, WHITE)
        assert mask.dtype == bool
        assert set(np.flatnonzero(mask)) == {13, 14, 15}


class TestFlying:
    @pytest.mark.parametrize("count,expected", [(2, False), (3, True), (4, False)])
    def test_can_fly_only_with_exactly_three(self, count, expected):
        board = make_board(white=(0, 2, 4, 6)[:count])
        assert can_fly(board, WHITE) is expected

    def test_flying_reaches_every_empty_position(self):
        board = make_board(white=(0, 2, 4), black=(9, 10, 11, 12))
        assert valid_destinations(board, 0, WHITE) == empty_positions(board)

    def test_without_flying_only_adjacent_empties(self):
        board = make_board(white=(0, 2, 4, 6), black=(7,))
        assert valid_destinations(board, 0, WHITE) == (1, 8)


class TestMoveGeneration:
    def test_get_valid_moves_skips_stuck_pieces(self):
        board = make_board(white=(1, 20, 21, 22), black=(0, 2))
        moves = get_valid_moves(board, WHITE)
        assert 1 not in moves
        assert moves[20] == (12, 19)

    def test_has_any_legal_move_false_on_full_board(self):
        board = make_board(white=range(0, 24, 2), black=range(1, 24, 2))
        assert not has_any_legal_move(board, WHITE)

    def test_has_any_legal_move_true_with_an_open_neighbour(self):
        board = make_board(white=(1, 3, 9, 11), black=(0, 4, 8, 10, 12))
        assert has_any_legal_move(board, WHITE)

    def test_blocked_four_pieces(self):
        board = make_board(white=(1, 3, 9, 11), black=(0, 2, 4, 8, 10, 12))
        assert get_valid_moves(board, WHITE) == {}
        assert not has_any_legal_move(board, WHITE)

    def test_three_pieces_never_blocked_while_a_cell_is_empty(self):
        board = make_board(white=(1, 3, 9), black=(0, 2, 4, 8, 10))
        assert has_any_legal_move(board, WHITE)
