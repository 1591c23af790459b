"""Game logging for Mühle.

Handles logging game actions and notation using pluggable writers.
"""

import os
import sys
import time
from typing import Callable

from game.writers import GameWriter, NotationWriter, TranscriptWriter


class GameLogger:
    """Manages multiple game action writers for flexible logging.

    Supports several output formats and destinations at once (e.g. a
    transcript to file while notation goes to the screen). Screen writers
    persist across games; file writers are created per game.
    """

    def __init__(
        self,
        session,
        transcript_dir: str | None = None,
        notation_dir: str | None = None,
        log_to_screen: bool = False,
        log_notation_to_screen: bool = False,
        status_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize the game logger.

        Args:
            session: GameSession instance (for player names)
            transcript_dir: Directory path for transcript log files (None to disable)
            notation_dir: Directory path for notation log files (None to disable)
            log_to_screen: Whether to log transcript to stdout
            log_notation_to_screen: Whether to log notation to stdout
            status_reporter: Optional callback for status messages
        """
        self.session = session
        self._transcript_dir = transcript_dir
        self._notation_dir = notation_dir
        self._log_to_screen = log_to_screen
        self._log_notation_to_screen = log_notation_to_screen
        self._status_reporter = status_reporter
        self._game_active = False
        self._session_stamp = f"{time.strftime('%Y%m%d-%H%M%S')}_{os.getpid()}"

        self._log_filenames = []
        self._opened_files = []

        self.writers: list[GameWriter] = []
        self._screen_writers: list[GameWriter] = []
        self._create_screen_writers()

    def _create_file_writer(self, directory, filename, writer_class, log_type):
        """Create a file writer, reporting failures to stderr.

        Args:
            directory: Directory path to create file in
            filename: Name of file to create
            writer_class: Writer class to instantiate (TranscriptWriter or NotationWriter)
            log_type: Human-readable description for error messages

        Returns:
            Writer instance on success, None on failure
        """
        try:
            os.makedirs(directory, exist_ok=True)
            filepath = os.path.join(directory, filename)
            writer = writer_class(open(filepath, "x", encoding="utf-8"))
        except OSError as e:
            print(f"Error: Failed to create {log_type} log file: {e}", file=sys.stderr)
            print(f"Attempted path: {directory}", file=sys.stderr)
            return None
        self._log_filenames.append(filepath)
        self._opened_files.append((log_type, filepath))
        return writer

    def _create_screen_writers(self):
        if self._log_to_screen:
            writer = TranscriptWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        if self._log_notation_to_screen:
            writer = NotationWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

    def _create_game_file_writers(self, game_number: int):
        """Create file writers for one game."""
        stem = f"muhlelog_{self._session_stamp}_game{game_number}"

        if self._transcript_dir:
            writer = self._create_file_writer(
                self._transcript_dir, f"{stem}.txt", TranscriptWriter, "transcript"
            )
            if writer:
                self.writers.append(writer)

        if self._notation_dir:
            writer = self._create_file_writer(
                self._notation_dir, f"{stem}_notation.txt", NotationWriter, "notation"
            )
            if writer:
                self.writers.append(writer)

    def get_log_filenames(self):
        """Get list of log filenames created.

        Returns:
            List of paths to created log files
        """
        return self._log_filenames.copy()

    def add_writer(self, writer: GameWriter) -> None:
        self.writers.append(writer)

    def remove_writer(self, writer: GameWriter) -> None:
        if writer in self.writers:
            self.writers.remove(writer)

    def _drop_file_writers(self) -> None:
        new_writers = []
        for writer in self.writers:
            if writer in self._screen_writers:
                new_writers.append(writer)
            else:
                writer.close()
        self.writers = new_writers

    def start_log(self, game_number: int) -> None:
        """Start logging for a new game and write headers to all writers.

        Any file writers left over from a previous game are closed first.

        Args:
            game_number: 1-based number of the game in this session
        """
        if self._game_active:
            self._drop_file_writers()
        self._create_game_file_writers(game_number)

        player1_name = self.session.player1_config.name
        player2_name = self.session.player2_config.name
        for writer in self.writers:
            writer.write_header(game_number, player1_name, player2_name)

        # Announced after the headers so the messages land inside the logs
        for log_type, filepath in self._opened_files:
            self._report(f"Writing {log_type} to {filepath}")
        self._opened_files = []
        self._game_active = True

    def end_log(self, state=None) -> None:
        """End logging for the current game, write footers and close file writers.

        Screen writers are not closed (they persist across games).

        Args:
            state: Optional GameState for the final position
        """
        if not self._game_active:
            return

        for writer in self.writers:
            writer.write_footer(state)
        self._drop_file_writers()
        self._game_active = False

    def log_action(self, player_num: int, action_dict: dict) -> None:
        """Log an action to all writers.

        Args:
            player_num: Player number (1 or 2)
            action_dict: Dictionary from TurnOutcome.to_action_dict()
        """
        for writer in self.writers:
            writer.write_action(player_num, action_dict)

    def log_undo(self, player_num: int) -> None:
        """Log that ``player_num``'s last action was taken back."""
        for writer in self.writers:
            writer.write_undo(player_num)

    def log_comment(self, message: str) -> None:
        """Log a status/comment message to all writers."""
        for writer in self.writers:
            writer.write_comment(message)

    def is_active(self) -> bool:
        return self._game_active

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
