"""Renderer that saves a diagram of each finished game."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from game.turn_outcome import GameEnded
from game.utils.diagram import DiagramRenderer
from shared.interfaces import IRenderer
from shared.render_data import RenderData


class ImageRenderer(IRenderer):
    """Writes ``muhle_game<N>.png`` to ``output_dir`` whenever a game ends."""

    def __init__(
        self,
        output_dir: str | Path,
        show_labels: bool = True,
        status_reporter: Callable[[str], None] | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.diagram = DiagramRenderer(show_labels=show_labels)
        self.game_number = 0
        self.saved_files: list[Path] = []
        self._status_reporter = status_reporter

    def reset_board(self) -> None:
        self.game_number += 1

    def execute_action(self, player: Any, render_data: RenderData) -> None:
        if not any(isinstance(e, GameEnded) for e in render_data.events):
            return
        game_number = max(self.game_number, 1)
        path = self.output_dir / f"muhle_game{game_number}.png"
        self.saved_files.append(self.diagram.save_board(render_data.state, path))
        if self._status_reporter is not None:
            self._status_reporter(f"Saved diagram: {path}")

    def show_board(self, render_data: RenderData) -> None:
        pass

    def report_status(self, message: str) -> None:
        pass
