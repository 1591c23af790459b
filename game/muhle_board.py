"""Static board graph for Nine Men's Morris.

The board is three concentric squares joined at their side midpoints:

     7--------------0--------------1
     |              |              |
     |   15---------8---------9    |
     |    |         |         |    |
     |    |   23----16---17   |    |
     |    |    |          |   |    |
     6---14---22         18---10---2
     |    |    |          |   |    |
     |    |   21----20---19   |    |
     |    |         |         |    |
     |   13---------12--------11   |
     |              |              |
     5--------------4--------------3

Positions are numbered ``8 * ring + k`` where ring 0 is the outer square,
ring 2 the inner one, and ``k`` walks each square clockwise from its
top-middle point. Even ``k`` are side midpoints, odd ``k`` are corners.

A mill is an ordered triple ``(a, b, c)`` whose middle point is ``b``; the
adjacency relation is derived from the mills (consecutive points of a line
are adjacent), so the two can never disagree.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np

from .constants import NUM_POSITIONS
from .errors import InvalidPositionError

Mill = Tuple[int, int, int]

POINTS_PER_RING = 8
NUM_RINGS = 3

RING_NAMES = ("outer", "middle", "inner")
POINT_NAMES = (
    "top",
    "top-right",
    "right",
    "bottom-right",
    "bottom",
    "bottom-left",
    "left",
    "top-left",
)


def _build_mills() -> tuple[Mill, ...]:
    mills: list[Mill] = []
    # Square sides: corner, midpoint, corner
    for ring in range(NUM_RINGS):
        base = ring * POINTS_PER_RING
        for k in range(0, POINTS_PER_RING, 2):
            mills.append(
                (
                    base + (k - 1) % POINTS_PER_RING,
                    base + k,
                    base + (k + 1) % POINTS_PER_RING,
                )
            )
    # Cross connectors through the side midpoints
    for k in range(0, POINTS_PER_RING, 2):
        mills.append((k, k + POINTS_PER_RING, k + 2 * POINTS_PER_RING))
    return tuple(mills)


class BoardGraph(NamedTuple):
    """Immutable board graph.

    Shared process-wide; only created once (see STANDARD_GRAPH).
    """

    num_positions: int
    mills: Tuple[Mill, ...]
    adjacency: Tuple[frozenset, ...]
    mills_by_position: Tuple[Tuple[Mill, ...], ...]

    # Array views of the same data (read-only)
    mill_table: np.ndarray  # (16, 3) int
    adjacency_matrix: np.ndarray  # (24, 24) bool

    @classmethod
    def standard(cls) -> "BoardGraph":
        """Create the standard 24-position, 16-mill board graph."""
        mills = _build_mills()

        neighbors: list[set[int]] = [set() for _ in range(NUM_POSITIONS)]
        for a, b, c in mills:
            neighbors[a].add(b)
            neighbors[b].add(a)
            neighbors[b].add(c)
            neighbors[c].add(b)

        by_position: list[list[Mill]] = [[] for _ in range(NUM_POSITIONS)]
        for mill in mills:
            for p in mill:
                by_position[p].append(mill)

        mill_table = np.array(mills, dtype=np.int64)
        mill_table.flags.writeable = False

        adjacency_matrix = np.zeros((NUM_POSITIONS, NUM_POSITIONS), dtype=bool)
        for p, adj in enumerate(neighbors):
            adjacency_matrix[p, sorted(adj)] = True
        adjacency_matrix.flags.writeable = False

        return cls(
            num_positions=NUM_POSITIONS,
            mills=mills,
            adjacency=tuple(frozenset(adj) for adj in neighbors),
            mills_by_position=tuple(tuple(m) for m in by_position),
            mill_table=mill_table,
            adjacency_matrix=adjacency_matrix,
        )

    def adjacent(self, p: int) -> frozenset:
        """Positions reachable from ``p`` by a non-flying move."""
        return self.adjacency[validate_position(p)]

    def mills_containing(self, p: int) -> Tuple[Mill, ...]:
        """All mill lines through ``p``."""
        return self.mills_by_position[validate_position(p)]


def validate_position(p) -> int:
    """Return ``p`` as a plain int, or raise InvalidPositionError.

    Accepts Python and numpy integers; rejects bools, floats and anything
    outside [0, 23].
    """
    if isinstance(p, (bool, np.bool_)) or not isinstance(p, (int, np.integer)):
        raise InvalidPositionError(f"Position must be an integer, got {p!r}")
    p = int(p)
    if not 0 <= p < NUM_POSITIONS:
        raise InvalidPositionError(
            f"Position {p} out of range [0, {NUM_POSITIONS - 1}]"
        )
    return p


def ring_of(p: int) -> int:
    return validate_position(p) // POINTS_PER_RING


def is_corner(p: int) -> bool:
    return validate_position(p) % 2 == 1


def describe_position(p: int) -> str:
    """Human-readable name, e.g. ``describe_position(9) == 'middle top-right'``."""
    p = validate_position(p)
    ring, k = divmod(p, POINTS_PER_RING)
    return f"{RING_NAMES[ring]} {POINT_NAMES[k]}"


STANDARD_GRAPH = BoardGraph.standard()


def adjacent(p: int, graph: BoardGraph = STANDARD_GRAPH) -> frozenset:
    """Module-level shortcut for ``graph.adjacent(p)``."""
    return graph.adjacent(p)


def mills_containing(p: int, graph: BoardGraph = STANDARD_GRAPH) -> Tuple[Mill, ...]:
    """Module-level shortcut for ``graph.mills_containing(p)``."""
    return graph.mills_containing(p)
