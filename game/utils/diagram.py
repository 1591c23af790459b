"""Utility for rendering Mühle board states as text or 2D images.

This module provides:
1. board_to_text(): ASCII diagram of a board (used by the text renderer and
   transcript footers)
2. DiagramRenderer: top-down matplotlib figure of a board, saved to PNG/SVG

Example usage:
    print(board_to_text(game.state.board, selected=game.state.selected_piece))
    print(board_to_text(labels=True))      # position numbers

    renderer = DiagramRenderer(show_labels=True)
    renderer.save_board(game.snapshot(), "final.png", title="Final Position")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.patches as patches  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from game.constants import BLACK, COLOR_NAMES, COLOR_SYMBOLS, EMPTY, WHITE, Occupant  # noqa: E402
from game.muhle_board import POINTS_PER_RING, STANDARD_GRAPH, BoardGraph  # noqa: E402

GRID_SIZE = 7  # Points lie on a 7x7 lattice
_CENTER = GRID_SIZE // 2


def grid_position(p: int) -> Tuple[int, int]:
    """Lattice coordinates (x, y) of position ``p``, origin top-left."""
    ring, k = divmod(p, POINTS_PER_RING)
    lo, hi = ring, GRID_SIZE - 1 - ring
    xs = (_CENTER, hi, hi, hi, _CENTER, lo, lo, lo)
    ys = (lo, lo, _CENTER, hi, hi, hi, _CENTER, lo)
    return xs[k], ys[k]


def board_to_text(
    board: Optional[np.ndarray] = None,
    selected: Optional[int] = None,
    labels: bool = False,
    graph: BoardGraph = STANDARD_GRAPH,
) -> str:
    """Render a board as an ASCII diagram.

    Args:
        board: (24,) occupancy array; None draws an empty board
        selected: Position drawn in lowercase (selected piece)
        labels: Draw zero-padded position numbers instead of pieces
        graph: Board graph (lines are drawn from its mills)

    Returns:
        Multi-line string
    """
    cell = 2 if labels else 1
    step = 4 + cell - 1
    width = (GRID_SIZE - 1) * step + cell
    height = (GRID_SIZE - 1) * 2 + 1
    rows = [[" "] * width for _ in range(height)]

    def to_char_xy(p: int) -> Tuple[int, int]:
        gx, gy = grid_position(p)
        return gx * step, gy * 2

    for a, _, c in graph.mills:
        (ax, ay), (cx, cy) = to_char_xy(a), to_char_xy(c)
        if ay == cy:
            for x in range(min(ax, cx) + cell, max(ax, cx)):
                rows[ay][x] = "-"
        else:
            for y in range(min(ay, cy) + 1, max(ay, cy)):
                rows[y][ax] = "|"

    for p in range(graph.num_positions):
        x, y = to_char_xy(p)
        if labels:
            text = f"{p:02d}"
        else:
            occupant = EMPTY if board is None else Occupant(int(board[p]))
            text = COLOR_SYMBOLS[occupant]
            if p == selected:
                text = text.lower()
        rows[y][x:x + cell] = list(text)

    return "\n".join("".join(row).rstrip() for row in rows)


class DiagramRenderer:
    """Renders Mühle board states as 2D diagram images."""

    LINE_COLOR = "#8B7355"
    POINT_COLOR = "#D4A574"
    PIECE_COLORS = {
        WHITE: "#F0F0F0",
        BLACK: "#333333",
    }
    PIECE_EDGE_COLOR = "#000000"
    SELECTED_COLOR = "#667EEA"
    BACKGROUND_COLOR = "#F5E6D3"

    POINT_RADIUS = 0.1
    PIECE_RADIUS = 0.3

    def __init__(self, show_labels: bool = False, bg_color: Optional[str] = None):
        """Initialize board renderer.

        Args:
            show_labels: If True, write position numbers next to each point
            bg_color: Background color in #RRGGBB format (default: #F5E6D3)
        """
        self.show_labels = show_labels
        self.bg_color = bg_color if bg_color is not None else self.BACKGROUND_COLOR

    def render_board(
        self,
        state,
        title: Optional[str] = None,
        size: int = 600,
        graph: BoardGraph = STANDARD_GRAPH,
    ) -> plt.Figure:
        """Render a game state as a matplotlib figure.

        Args:
            state: GameState (board and selected_piece are drawn)
            title: Optional title for the figure
            size: Figure width and height in pixels
            graph: Board graph

        Returns:
            matplotlib Figure object
        """
        dpi = 100
        fig, ax = plt.subplots(figsize=(size / dpi, size / dpi), dpi=dpi)
        ax.set_aspect("equal")
        ax.set_facecolor(self.bg_color)
        fig.patch.set_facecolor(self.bg_color)

        # Lattice y grows downward; flip so the top row is drawn on top
        def xy(p: int) -> Tuple[float, float]:
            gx, gy = grid_position(p)
            return float(gx), float(GRID_SIZE - 1 - gy)

        for a, _, c in graph.mills:
            (x1, y1), (x2, y2) = xy(a), xy(c)
            ax.plot([x1, x2], [y1, y2], color=self.LINE_COLOR, linewidth=2, zorder=1)

        for p in range(graph.num_positions):
            px, py = xy(p)
            ax.add_patch(
                patches.Circle(
                    (px, py),
                    radius=self.POINT_RADIUS,
                    facecolor=self.POINT_COLOR,
                    edgecolor=self.LINE_COLOR,
                    zorder=2,
                )
            )

            occupant = Occupant(int(state.board[p]))
            if occupant != EMPTY:
                ax.add_patch(
                    patches.Circle(
                        (px, py),
                        radius=self.PIECE_RADIUS,
                        facecolor=self.PIECE_COLORS[occupant],
                        edgecolor=self.PIECE_EDGE_COLOR,
                        linewidth=2,
                        zorder=3,
                    )
                )
                if p == state.selected_piece:
                    ax.add_patch(
                        patches.Circle(
                            (px, py),
                            radius=self.PIECE_RADIUS * 1.2,
                            fill=False,
                            edgecolor=self.SELECTED_COLOR,
                            linewidth=3,
                            zorder=4,
                        )
                    )

            if self.show_labels:
                ax.text(
                    px + 0.25,
                    py + 0.25,
                    str(p),
                    fontsize=9,
                    color=self.LINE_COLOR,
                    zorder=5,
                )

        if title is None and state.game_over:
            title = f"{COLOR_NAMES[state.winner]} wins"
        if title:
            ax.set_title(title)

        ax.set_xlim(-0.6, GRID_SIZE - 0.4)
        ax.set_ylim(-0.6, GRID_SIZE - 0.4)
        ax.axis("off")
        return fig

    def save_board(self, state, output_path, title: Optional[str] = None) -> Path:
        """Render ``state`` and write it to ``output_path`` (format from suffix)."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self.render_board(state, title=title)
        try:
            fig.savefig(output_path, facecolor=fig.get_facecolor())
        finally:
            plt.close(fig)
        return output_path
