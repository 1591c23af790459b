"""Factory helpers for constructing Mühle game components."""

from __future__ import annotations

from typing import TextIO

from controller.muhle_game_controller import MuhleGameController
from game.player_config import PlayerConfig
from renderer.composite_renderer import CompositeRenderer
from renderer.image_renderer import ImageRenderer
from renderer.text_renderer import TextRenderer
from shared.interfaces import IRenderer


class MuhleFactory:
    """Centralised factory for assembling MuhleGameController instances."""

    def __init__(self, text_stream: TextIO | None = None, input_stream: TextIO | None = None):
        self._text_stream = text_stream
        self._input_stream = input_stream

    def create_controller(
        self,
        *,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
        max_games: int | None = 1,
        show_hints: bool = False,
        quiet: bool = False,
        diagram_dir: str | None = None,
        log_to_file: str | None = None,
        log_to_screen: bool = False,
        log_notation_to_file: str | None = None,
        log_notation_to_screen: bool = False,
    ) -> MuhleGameController:
        """Create a fully-wired MuhleGameController with appropriate renderers.

        The board is drawn as text unless ``quiet``; a PNG of each finished
        game is written to ``diagram_dir`` when given.
        """

        def renderer_factory(controller: MuhleGameController) -> IRenderer | None:
            renderers: list[IRenderer] = []

            text_renderer = None
            if not quiet:
                text_renderer = TextRenderer(stream=self._text_stream)
                renderers.append(text_renderer)

            if diagram_dir is not None:
                reporter = text_renderer.report_status if text_renderer else None
                renderers.append(ImageRenderer(diagram_dir, status_reporter=reporter))

            if len(renderers) == 0:
                return None
            if len(renderers) == 1:
                return renderers[0]
            return CompositeRenderer(renderers)

        return MuhleGameController(
            player1_config=player1_config,
            player2_config=player2_config,
            max_games=max_games,
            show_hints=show_hints,
            log_to_file=log_to_file,
            log_to_screen=log_to_screen,
            log_notation_to_file=log_notation_to_file,
            log_notation_to_screen=log_notation_to_screen,
            renderer_or_factory=renderer_factory,
            input_stream=self._input_stream,
            output_stream=self._text_stream,
        )
