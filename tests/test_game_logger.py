"""
Unit tests for GameLogger and the game writers.

Tests the pluggable writer system for logging game actions in different formats.
"""

import os
import sys
import tempfile
from io import StringIO
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from controller.game_logger import GameLogger
from game.muhle_game import MuhleGame
from game.player_config import PlayerConfig
from game.writers import NotationWriter, TranscriptWriter


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def mock_session():
    """Create a mock session for testing."""
    session = Mock()
    session.player1_config = PlayerConfig.human(name="Alice")
    session.player2_config = PlayerConfig.human()
    return session


@pytest.fixture
def finished_game():
    game = MuhleGame()
    for pos in (0, 4, 8, 5, 16):
        game.apply_intent(pos)
    return game


PUT = {"action": "PUT", "dst": 16, "capture": 4}
MOVE = {"action": "MOVE", "src": 3, "dst": 2, "capture": None}


# ============================================================================
# Writers
# ============================================================================


class TestNotationWriter:
    def test_header_actions_and_undo(self):
        output = StringIO()
        writer = NotationWriter(output)

        writer.write_header(1, "Alice", None)
        writer.write_action(1, PUT)
        writer.write_action(2, MOVE)
        writer.write_undo(2)
        writer.write_comment("ignored")

        assert output.getvalue() == "# Game 1\n# White: Alice\n16x4\n3-2\n*\n"

    def test_close_keeps_stdout_open(self):
        writer = NotationWriter(sys.stdout)
        writer.close()
        assert not sys.stdout.closed


class TestTranscriptWriter:
    def test_actions_and_comments(self):
        output = StringIO()
        writer = TranscriptWriter(output)

        writer.write_header(2, None, "Bob")
        writer.write_action(1, PUT)
        writer.write_undo(1)
        writer.write_comment("White wins")

        lines = output.getvalue().splitlines()
        assert lines[0] == "# Game: 2"
        assert lines[1] == "# Player 2 (Black): Bob"
        assert "Player 1: {'action': 'PUT', 'dst': 16, 'capture': 4}" in lines
        assert "Player 1: UNDO" in lines
        assert lines[-1] == "# White wins"

    def test_footer_lists_board_and_counts(self, finished_game):
        output = StringIO()
        TranscriptWriter(output).write_footer(finished_game.state)

        text = output.getvalue()
        assert "# Final game state:" in text
        assert "# White: 3 on board, 0 captured" in text
        assert "# Black: 1 on board, 1 captured" in text
        assert "Winner" not in text
        assert all(line.startswith("#") for line in text.splitlines())

    def test_footer_without_state_writes_nothing(self):
        output = StringIO()
        TranscriptWriter(output).write_footer(None)
        assert output.getvalue() == ""


# ============================================================================
# GameLogger
# ============================================================================


class TestGameLogger:
    def test_no_writers_by_default(self, mock_session):
        logger = GameLogger(mock_session)
        assert not logger.is_active()
        logger.start_log(1)
        assert logger.is_active()
        logger.log_action(1, PUT)
        logger.end_log()
        assert not logger.is_active()
        assert logger.writers == []
        assert logger.get_log_filenames() == []

    def test_file_writers_per_game(self, mock_session, temp_dir, finished_game):
        reports = []
        logger = GameLogger(
            mock_session,
            transcript_dir=temp_dir,
            notation_dir=temp_dir,
            status_reporter=reports.append,
        )

        logger.start_log(1)
        logger.log_action(1, PUT)
        logger.log_undo(1)
        logger.end_log(finished_game.state)

        logger.start_log(2)
        logger.log_action(1, {"action": "PUT", "dst": 0, "capture": None})
        logger.end_log()

        filenames = logger.get_log_filenames()
        assert len(filenames) == 4
        assert all(os.path.exists(f) for f in filenames)
        assert filenames[0].endswith("_game1.txt")
        assert filenames[1].endswith("_game1_notation.txt")
        assert filenames[2].endswith("_game2.txt")
        assert len(reports) == 4

        with open(filenames[0]) as f:
            transcript = f.read()
        assert "# Player 1 (White): Alice" in transcript
        assert "Player 1: UNDO" in transcript
        assert "# Final game state:" in transcript

        with open(filenames[1]) as f:
            assert f.read() == "# Game 1\n# White: Alice\n16x4\n*\n"

        with open(filenames[3]) as f:
            assert f.read() == "# Game 2\n# White: Alice\n0\n"

    def test_screen_writers_persist(self, mock_session, capsys):
        logger = GameLogger(mock_session, log_notation_to_screen=True)

        logger.start_log(1)
        logger.log_action(1, MOVE)
        logger.end_log()
        logger.start_log(2)

        assert len(logger.writers) == 1
        out = capsys.readouterr().out
        assert "# Game 1" in out
        assert "3-2" in out
        assert "# Game 2" in out

    def test_comments_reach_transcript_writers(self, mock_session):
        output = StringIO()
        logger = GameLogger(mock_session)
        logger.add_writer(TranscriptWriter(output))

        logger.log_comment("hello")
        assert output.getvalue() == "# hello\n"

        logger.remove_writer(logger.writers[0])
        logger.log_comment("dropped")
        assert "dropped" not in output.getvalue()

    def test_unwritable_directory_disables_file_logging(self, mock_session, temp_dir, capsys):
        blocker = os.path.join(temp_dir, "not_a_dir")
        with open(blocker, "w") as f:
            f.write("x")

        logger = GameLogger(mock_session, transcript_dir=blocker)
        logger.start_log(1)

        assert logger.get_log_filenames() == []
        assert "Failed to create transcript log file" in capsys.readouterr().err

    def test_file_announcements_follow_headers(self, mock_session, temp_dir):
        logger = GameLogger(
            mock_session,
            transcript_dir=temp_dir,
            notation_dir=temp_dir,
            status_reporter=lambda message: logger.log_comment(message),
        )
        logger.start_log(1)
        logger.end_log()

        with open(logger.get_log_filenames()[0]) as f:
            lines = f.read().splitlines()
        assert lines[0] == "# Game: 1"
        assert any(line.startswith("# Writing notation to ") for line in lines[1:])

    def test_existing_log_is_not_overwritten(self, mock_session, temp_dir, capsys):
        first = GameLogger(mock_session, transcript_dir=temp_dir, status_reporter=lambda m: None)
        first.start_log(1)
        first.log_action(1, PUT)
        first.end_log()
        (transcript,) = first.get_log_filenames()
        assert f"_{os.getpid()}_game1.txt" in transcript

        second = GameLogger(mock_session, transcript_dir=temp_dir, status_reporter=lambda m: None)
        second._session_stamp = first._session_stamp
        second.start_log(1)

        assert second.get_log_filenames() == []
        assert "Failed to create transcript log file" in capsys.readouterr().err
        with open(transcript) as f:
            assert "'dst': 16" in f.read()
