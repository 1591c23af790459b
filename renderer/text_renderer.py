"""Text-based renderer implementation for console play."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from game.constants import COLOR_NAMES, PIECES_PER_PLAYER, WIN_REASON_TEXT, Phase
from game.turn_outcome import (
    GameEnded,
    MillFormed,
    PhaseChanged,
    PieceCaptured,
    PieceMoved,
    PiecePlaced,
    Rejected,
    SelectionChanged,
    Undone,
)
from game.utils.diagram import board_to_text
from shared.interfaces import IRenderer
from shared.render_data import RenderData


def describe_event(event) -> str:
    """One-line description of a turn event."""
    if isinstance(event, PiecePlaced):
        return f"{COLOR_NAMES[event.color]} places on {event.pos}"
    if isinstance(event, PieceMoved):
        return f"{COLOR_NAMES[event.color]} moves {event.src} -> {event.dst}"
    if isinstance(event, SelectionChanged):
        if event.pos is None:
            return "Selection cleared"
        return f"Selected {event.pos}"
    if isinstance(event, MillFormed):
        return f"Mill formed at {event.pos}!"
    if isinstance(event, PieceCaptured):
        return f"{COLOR_NAMES[event.color]} piece on {event.pos} captured"
    if isinstance(event, PhaseChanged):
        return f"All pieces placed, {event.phase.value} phase begins"
    if isinstance(event, GameEnded):
        return f"{COLOR_NAMES[event.winner]} wins ({WIN_REASON_TEXT[event.reason]})"
    if isinstance(event, Undone):
        return "Last action undone"
    if isinstance(event, Rejected):
        return f"Rejected: {event.error.message}"
    return repr(event)


class TextRenderer(IRenderer):
    """Renderer that draws the board and turn events to a stream."""

    def __init__(self, stream: TextIO | None = None, show_labels: bool = True):
        self._stream: TextIO = stream or sys.stdout
        self.show_labels = show_labels

    def reset_board(self) -> None:
        self.report_status("Board reset.")
        if self.show_labels:
            self.report_status(board_to_text(labels=True))

    def execute_action(self, player: Any, render_data: RenderData) -> None:
        """Describe each event, then redraw the board."""
        for event in render_data.events:
            self.report_status(describe_event(event))
        self.show_board(render_data)

    def show_board(self, render_data: RenderData) -> None:
        state = render_data.state
        self.report_status(board_to_text(state.board, selected=state.selected_piece))
        if state.game_over:
            return

        player = COLOR_NAMES[state.current_player]
        if state.phase == Phase.PLACING:
            placed = state.pieces_placed[state.current_player]
            self.report_status(
                f"{player} to place ({placed}/{PIECES_PER_PLAYER} pieces placed)"
            )
        else:
            self.report_status(f"{player} to move")

        if render_data.has_placement_highlights():
            positions = ", ".join(str(p) for p in render_data.placement_positions)
            self.report_status(f"  free: {positions}")
        for src, destinations in render_data.move_hints.items():
            listed = ", ".join(str(p) for p in destinations)
            self.report_status(f"  {src} -> {listed}")

    def report_status(self, message: str) -> None:
        if message is None:
            return
        print(message, file=self._stream)
