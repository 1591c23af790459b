"""Game action writers for Mühle.

Provides pluggable writer classes that combine formatters with output streams
to log game actions in various formats (notation, transcript).
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.constants import COLOR_NAMES, COLORS
from game.formatters import NotationFormatter, TranscriptFormatter
from game.utils.diagram import board_to_text


class GameWriter(ABC):
    """Abstract base class for game action writers.

    A GameWriter combines a formatter with an output stream to write
    game actions in a specific format. Subclasses implement format-specific
    headers and action formatting.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to (file, stdout, etc.)
        """
        self.output = output
        self._game_started = False

    @abstractmethod
    def write_header(self, game_number: int, player1_name: str | None = None, player2_name: str | None = None) -> None:
        """Write header with game metadata.

        Args:
            game_number: 1-based number of the game in this session
            player1_name: Optional name for player 1 (White)
            player2_name: Optional name for player 2 (Black)
        """
        pass

    @abstractmethod
    def write_action(self, player_num: int, action_dict: dict) -> None:
        """Write a game action.

        Args:
            player_num: Player number (1 or 2)
            action_dict: Action dictionary from TurnOutcome.to_action_dict()
        """
        pass

    def write_undo(self, player_num: int) -> None:
        """Record that the last action was taken back (default: nothing)."""
        pass

    def write_comment(self, message: str) -> None:
        """Write a status/comment message.

        Default implementation does nothing. Subclasses can override to write comments.
        """
        pass

    def write_footer(self, state=None) -> None:
        """Write footer with final game state (optional).

        Args:
            state: Optional GameState for final position
        """
        pass

    def flush(self) -> None:
        """Flush the output stream."""
        self.output.flush()

    def close(self) -> None:
        """Close the output stream (but never close stdout/stderr)."""
        if self.output in (sys.stdout, sys.stderr):
            return
        if hasattr(self.output, "close"):
            self.output.close()


class NotationWriter(GameWriter):
    """Writes game actions in compact notation, one per line.

    File format:
        # Game 1         # Header
        0                # White places on 0
        4                # Black places on 4
        16x4             # Placement closing a mill, captures 4
        3-2              # Move
        *                # Undo of the previous line
    """

    def __init__(self, output: TextIO):
        super().__init__(output)
        self.formatter = NotationFormatter()

    def write_header(self, game_number: int, player1_name: str | None = None, player2_name: str | None = None) -> None:
        self.output.write(f"# Game {game_number}\n")
        if player1_name:
            self.output.write(f"# White: {player1_name}\n")
        if player2_name:
            self.output.write(f"# Black: {player2_name}\n")
        self._game_started = True
        self.flush()

    def write_action(self, player_num: int, action_dict: dict) -> None:
        notation = self.formatter.action_to_notation(action_dict)
        self.output.write(f"{notation}\n")
        self.flush()

    def write_undo(self, player_num: int) -> None:
        self.output.write("*\n")
        self.flush()


class TranscriptWriter(GameWriter):
    """Writes game actions in transcript file format.

    File format:
        # Game: 1                                # Header comments
        # Player 1 (White): Alice
        #
        Player 1: {'action': 'PUT', 'dst': 0, 'capture': None}
        Player 2: {'action': 'PUT', 'dst': 4, 'capture': None}
        Player 2: UNDO
        #
        # Final game state:                      # Footer comments
        # ...
    """

    def __init__(self, output: TextIO):
        super().__init__(output)
        self.formatter = TranscriptFormatter()

    def write_header(self, game_number: int, player1_name: str | None = None, player2_name: str | None = None) -> None:
        self.output.write(f"# Game: {game_number}\n")
        if player1_name:
            self.output.write(f"# Player 1 (White): {player1_name}\n")
        if player2_name:
            self.output.write(f"# Player 2 (Black): {player2_name}\n")
        self.output.write("#\n")
        self._game_started = True
        self.flush()

    def write_action(self, player_num: int, action_dict: dict) -> None:
        """Write action as "Player {player_num}: {action_dict}"."""
        transcript_str = self.formatter.action_to_transcript(action_dict)
        self.output.write(f"Player {player_num}: {transcript_str}\n")
        self.flush()

    def write_undo(self, player_num: int) -> None:
        self.output.write(f"Player {player_num}: UNDO\n")
        self.flush()

    def write_comment(self, message: str) -> None:
        self.output.write(f"# {message}\n")
        self.flush()

    def write_footer(self, state=None) -> None:
        """Write final board, piece counts and result as comments."""
        if state is None:
            return

        self.output.write("#\n")
        self.output.write("# Final game state:\n")
        self.output.write("# ---------------\n")
        for row in board_to_text(state.board).splitlines():
            self.output.write(f"# {row}\n")
        self.output.write("# ---------------\n")
        for color in COLORS:
            self.output.write(
                f"# {COLOR_NAMES[color]}: {state.count(color)} on board, "
                f"{state.captured(color)} captured\n"
            )
        if state.game_over:
            self.output.write(
                f"# Winner: {COLOR_NAMES[state.winner]} ({state.win_reason.value})\n"
            )
        self.output.write("# ---------------\n")
        self.flush()
