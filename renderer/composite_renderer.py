"""Composite renderer that forwards calls to multiple renderer implementations."""

from __future__ import annotations

from typing import Iterable, List, Any

from shared.interfaces import IRenderer
from shared.render_data import RenderData


class CompositeRenderer(IRenderer):
    """Composite pattern implementation for chaining renderers."""

    def __init__(self, renderers: Iterable[IRenderer]):
        self._renderers: List[IRenderer] = [
            renderer for renderer in renderers if renderer is not None
        ]
        if not self._renderers:
            raise ValueError(
                "CompositeRenderer requires at least one renderer instance."
            )

    def reset_board(self) -> None:
        for renderer in self._renderers:
            renderer.reset_board()

    def execute_action(self, player: Any, render_data: RenderData) -> None:
        for renderer in self._renderers:
            renderer.execute_action(player, render_data)

    def show_board(self, render_data: RenderData) -> None:
        for renderer in self._renderers:
            renderer.show_board(render_data)

    def report_status(self, message: str) -> None:
        for renderer in self._renderers:
            renderer.report_status(message)

    @property
    def renderers(self) -> List[IRenderer]:
        return list(self._renderers)
