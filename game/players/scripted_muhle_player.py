from __future__ import annotations

from typing import Optional, Tuple

from game.muhle_game import MuhleGame, lowest_index_capture
from game.players.muhle_player import MuhlePlayer


class ScriptedMuhlePlayer(MuhlePlayer):
    """Player that plays intents and capture choices from fixed lists."""

    def __init__(self, game: MuhleGame, n, moves, captures=None):
        super().__init__(game, n)
        self.moves = list(moves)
        self.captures = list(captures or [])
        self.action_index = 0
        self.capture_index = 0

    def get_action(self):
        """Return the next scripted intent."""
        if self.action_index >= len(self.moves):
            raise ValueError(f"No more actions for player {self.n}")
        action = self.moves[self.action_index]
        self.action_index += 1
        return action

    def choose_capture(self, candidates: Tuple[int, ...]) -> Optional[int]:
        """Return the next scripted choice; lowest candidate once the list runs out."""
        if self.capture_index >= len(self.captures):
            return lowest_index_capture(candidates)
        choice = self.captures[self.capture_index]
        self.capture_index += 1
        return choice

    def remaining_actions(self) -> int:
        return len(self.moves) - self.action_index
