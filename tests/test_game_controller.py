"""
Unit tests for MuhleGameController and its collaborators.

Tests that the game controller correctly handles:
- Scripted games in headless mode
- Game ending, winner reporting and the max_games limit
- Undo and quit intents
- Transcript / notation logging of a whole game
"""

import os
import sys
from io import StringIO
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller.action_processor import ActionProcessor
from controller.game_loop import GameLoop
from controller.game_session import GameSession
from controller.muhle_game_controller import MuhleGameController
from factory import MuhleFactory
from game.constants import BLACK, EMPTY, WHITE, Phase
from game.muhle_game import MuhleGame
from game.muhle_logic import new_board
from game.muhle_state import GameState
from game.player_config import UNDO, PlayerConfig
from game.players import HumanMuhlePlayer, ScriptedMuhlePlayer
from game.turn_outcome import Rejected


def scripted(*moves, captures=None, name=None):
    return PlayerConfig.scripted(list(moves), captures, name=name)


def reports_of(renderer):
    return [c.args[0] for c in renderer.report_status.call_args_list]


def attrition_state():
    """White to move 23->16 closing 0-8-16; Black then has two pieces."""
    board = new_board()
    board[[0, 8, 23, 3]] = WHITE
    board[[5, 7, 12]] = BLACK
    return GameState(
        board=board,
        phase=Phase.MOVING,
        pieces_placed={WHITE: 9, BLACK: 9},
    )


# ============================================================================
# GameSession
# ============================================================================


class TestGameSession:
    def test_players_created_from_configs(self):
        session = GameSession(
            player1_config=scripted(0, name="Bot"),
            player2_config=PlayerConfig.human(),
            status_reporter=lambda message: None,
            input_stream=StringIO(""),
            output_stream=StringIO(),
        )
        assert isinstance(session.player1, ScriptedMuhlePlayer)
        assert isinstance(session.player2, HumanMuhlePlayer)
        assert session.player1.name == "Bot"
        assert session.player2.name == "Player 2"
        assert session.get_current_player() is session.player1

    def test_capture_choice_comes_from_the_mover(self):
        session = GameSession(
            player1_config=scripted(captures=[5]),
            player2_config=scripted(),
            status_reporter=lambda message: None,
        )
        for pos in (0, 4, 8, 5):
            session.game.apply_intent(pos)

        outcome = session.game.apply_intent(16)

        assert outcome.has_captures()
        assert session.game.state.board[5] == EMPTY
        assert session.game.state.board[4] == BLACK

    def test_reset_game_reports_and_counts(self):
        messages = []
        session = GameSession(status_reporter=messages.append)
        first_game = session.game
        session.increment_games_played()
        session.reset_game()

        assert session.game is not first_game
        assert session.player1.game is session.game
        assert session.get_games_played() == 1
        assert messages == ["** New game **", "** New game **"]

    def test_default_reporter_prints(self, capsys):
        GameSession()
        assert "** New game **" in capsys.readouterr().out


# ============================================================================
# ActionProcessor
# ============================================================================


class TestActionProcessor:
    def test_capture_tallies_follow_the_state(self):
        game = MuhleGame()
        white, black = Mock(color=WHITE, captured=0), Mock(color=BLACK, captured=0)
        processor = ActionProcessor()

        for pos in (0, 4, 8, 5):
            processor.process((white, black), game.apply_intent(pos))
        outcome = game.apply_intent(16)
        processor.process((white, black), outcome)

        assert white.captured == 1
        assert black.captured == 0
        assert processor.captured_positions(outcome) == [4]

        processor.process((white, black), game.undo())
        assert white.captured == 0

    def test_ignores_missing_outcome(self):
        player = Mock(color=WHITE, captured=3)
        ActionProcessor().process((player,), None)
        assert player.captured == 3


# ============================================================================
# GameLoop
# ============================================================================


class TestGameLoop:
    def test_runs_until_done(self):
        controller = Mock()
        calls = []

        def update_game(task):
            calls.append(task)
            return task.done if len(calls) == 3 else task.again

        controller.update_game.side_effect = update_game
        GameLoop(controller).run()
        assert len(calls) == 3


# ============================================================================
# Controller
# ============================================================================


class TestGameControllerHeadless:
    def test_game_ends_and_stops_after_max_games(self):
        renderer = Mock()
        controller = MuhleGameController(
            player1_config=scripted(23, 16),
            player2_config=scripted(),
            max_games=1,
            renderer_or_factory=renderer,
        )
        controller.session.game.state = attrition_state()

        controller.run()

        reports = reports_of(renderer)
        assert (
            "Winner: Player 1 (White), White wins: Opponent reduced to fewer than 3 pieces"
            in reports
        )
        assert "Completed 1 game(s)" in reports
        assert controller.session.get_games_played() == 1
        assert controller.session.player1.captured == 7
        renderer.reset_board.assert_called_once_with()

    def test_game_ending_is_idempotent(self):
        controller = MuhleGameController(
            player1_config=scripted(23, 16),
            player2_config=scripted(),
            max_games=1,
        )
        controller.session.game.state = attrition_state()
        controller.run()

        task = Mock()
        assert controller._handle_game_ending(task) == task.done
        assert controller.session.get_games_played() == 1

    def test_exhausted_script_stops_the_loop(self):
        renderer = Mock()
        controller = MuhleGameController(
            player1_config=scripted(0, 8, 16),
            player2_config=scripted(4, 5),
            renderer_or_factory=renderer,
        )
        controller.run()

        board = controller.session.game.state.board
        assert board[16] == WHITE
        assert board[4] == EMPTY
        assert "Error getting action: No more actions for player 2" in reports_of(renderer)
        assert controller.session.get_games_played() == 0

    def test_undo_intent(self):
        controller = MuhleGameController(
            player1_config=scripted(0, 1),
            player2_config=scripted(UNDO),
        )
        controller.run()

        board = controller.session.game.state.board
        assert board[0] == EMPTY
        assert board[1] == WHITE
        assert controller.session.game.get_cur_player() == BLACK

    def test_rejected_intent_is_rendered(self):
        renderer = Mock()
        controller = MuhleGameController(
            player1_config=scripted(0),
            player2_config=scripted(0),
            renderer_or_factory=renderer,
        )
        controller.run()

        last_data = renderer.execute_action.call_args_list[-1].args[1]
        assert any(isinstance(e, Rejected) for e in last_data.events)
        assert controller.session.game.get_cur_player() == BLACK

    def test_human_quit(self):
        renderer = Mock()
        controller = MuhleGameController(
            player1_config=PlayerConfig.human(),
            player2_config=scripted(),
            renderer_or_factory=renderer,
            input_stream=StringIO("q\n"),
            output_stream=StringIO(),
        )
        controller.run()
        assert "Player 1 quit" in reports_of(renderer)

    def test_hints_passed_to_renderer(self):
        renderer = Mock()
        controller = MuhleGameController(
            player1_config=scripted(0),
            player2_config=scripted(),
            show_hints=True,
            renderer_or_factory=renderer,
        )
        controller.run()

        data = renderer.execute_action.call_args_list[0].args[1]
        assert 0 not in data.placement_positions
        assert len(data.placement_positions) == 23

    def test_rejects_unknown_renderer(self):
        with pytest.raises(TypeError):
            MuhleGameController(renderer_or_factory=42)

    def test_logs_whole_game(self, tmp_path):
        controller = MuhleGameController(
            player1_config=scripted(0, 8, 16),
            player2_config=scripted(4, 5),
            log_to_file=str(tmp_path),
            log_notation_to_file=str(tmp_path),
        )
        controller.run()

        transcript, notation = controller.logger.get_log_filenames()
        with open(notation) as f:
            assert f.read() == "# Game 1\n0\n4\n8\n5\n16x4\n"
        with open(transcript) as f:
            text = f.read()
        assert "Player 1: {'action': 'PUT', 'dst': 16, 'capture': 4}" in text
        assert "# Error getting action: No more actions for player 2" in text
        assert "# Final game state:" in text

    def test_logs_undo(self, tmp_path):
        controller = MuhleGameController(
            player1_config=scripted(0, 1),
            player2_config=scripted(UNDO),
            log_notation_to_file=str(tmp_path),
        )
        controller.run()

        (notation,) = controller.logger.get_log_filenames()
        with open(notation) as f:
            assert f.read() == "# Game 1\n0\n*\n1\n"


class TestMuhleFactory:
    def test_text_and_image_renderers(self, tmp_path):
        stream = StringIO()
        controller = MuhleFactory(text_stream=stream).create_controller(
            player1_config=scripted(23, 16),
            player2_config=scripted(),
            diagram_dir=str(tmp_path),
        )
        controller.session.game.state = attrition_state()
        controller.run()

        text = stream.getvalue()
        assert "Board reset." in text
        assert "White moves 23 -> 16" in text
        assert "Winner: Player 1 (White)" in text
        assert os.path.exists(tmp_path / "muhle_game1.png")
        assert "Saved diagram:" in text

    def test_quiet_without_diagrams_is_headless(self):
        controller = MuhleFactory().create_controller(
            player1_config=scripted(), player2_config=scripted(), quiet=True
        )
        assert controller.renderer is None
