from __future__ import annotations

import sys
from typing import Optional, TextIO, Tuple

from game.constants import NUM_POSITIONS
from game.muhle_game import MuhleGame
from game.player_config import QUIT, UNDO
from game.players.muhle_player import MuhlePlayer


class HumanMuhlePlayer(MuhlePlayer):
    """Console player reading positions from a text stream.

    Input lines:
        0..23   place / select / move to that position
        u       undo the last action
        q       quit (also on end of input)
    """

    def __init__(
        self,
        game: MuhleGame,
        n,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ):
        super().__init__(game, n)
        self._input: TextIO = input_stream or sys.stdin
        self._output: TextIO = output_stream or sys.stdout

    def _prompt(self, message: str) -> Optional[str]:
        self._output.write(message)
        self._output.flush()
        line = self._input.readline()
        if not line:
            return None
        return line.strip().lower()

    def get_action(self):
        while True:
            line = self._prompt(f"{self.name} ({self.color_name}) > ")
            if line is None or line in ("q", QUIT):
                return QUIT
            if line in ("u", UNDO):
                return UNDO
            try:
                pos = int(line)
            except ValueError:
                self._output.write(f"Enter a position 0-{NUM_POSITIONS - 1}, 'u' or 'q'\n")
                continue
            if not 0 <= pos < NUM_POSITIONS:
                self._output.write(f"Position {pos} is not on the board\n")
                continue
            return pos

    def choose_capture(self, candidates: Tuple[int, ...]) -> Optional[int]:
        """Ask which piece to remove; blank or unparsable input declines."""
        listed = ", ".join(str(p) for p in candidates)
        line = self._prompt(f"Mill formed! Remove opponent's piece ({listed}): ")
        if not line or line == "-":
            return None
        try:
            return int(line)
        except ValueError:
            self._output.write(f"Not a position: {line!r}, no piece removed\n")
            return None
