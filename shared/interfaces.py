"""Shared protocol definitions."""

from __future__ import annotations

from typing import Protocol, Any, TYPE_CHECKING, runtime_checkable

from shared.render_data import RenderData

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from controller.muhle_game_controller import MuhleGameController


@runtime_checkable
class IRenderer(Protocol):
    """Protocol describing renderer capabilities required by the controller."""

    def reset_board(self) -> None: ...

    def execute_action(self, player: Any, render_data: RenderData) -> None: ...

    def show_board(self, render_data: RenderData) -> None: ...

    def report_status(self, message: str) -> None: ...


@runtime_checkable
class IRendererFactory(Protocol):
    """Protocol for factories that produce renderers for a controller."""

    def __call__(self, controller: MuhleGameController) -> IRenderer: ...
