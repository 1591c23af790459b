from __future__ import annotations

from typing import Optional, Tuple

from game.constants import BLACK, COLOR_NAMES, WHITE
from game.muhle_game import MuhleGame


class MuhlePlayer:
    """Base player with shared state and lifecycle hooks.

    A player supplies intents (a position, UNDO or QUIT) and answers
    capture prompts. Player 1 plays White and moves first.
    """

    def __init__(self, game: MuhleGame, n):
        self.game = game
        self.n = n
        self.color = WHITE if n == 1 else BLACK
        self.name = f"Player {n}"
        self.captured = 0

    def get_action(self):
        raise NotImplementedError

    def choose_capture(self, candidates: Tuple[int, ...]) -> Optional[int]:
        raise NotImplementedError

    @property
    def color_name(self) -> str:
        return COLOR_NAMES[self.color]
