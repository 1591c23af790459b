"""Render data value object for turn visualization.

This class encapsulates all data needed by a renderer to show the result of
one turn: the resulting state, the events that produced it and optional
legal-move hints for the side to move. It eliminates the need for the
renderer to query the game directly.
"""


class RenderData:
    """Encapsulates all rendering data for a turn.

    Attributes:
        state: GameState copy after the turn (from TurnOutcome.state)

        events: Events from TurnOutcome.events, in order.

        placement_positions: Empty positions the side to move may place on.
            Empty list if hints not requested or not in the placing phase.

        move_hints: Mapping of piece position -> legal destinations for the
            side to move. Empty dict if hints not requested or not moving.
    """

    def __init__(self, state, events=(), placement_positions=None, move_hints=None):
        """Initialize render data.

        Args:
            state: Game state to render
            events: Turn events (default: none)
            placement_positions: List of placement positions (default: empty list)
            move_hints: Dict of piece -> destinations (default: empty dict)
        """
        self.state = state
        self.events = tuple(events)
        self.placement_positions = (
            placement_positions if placement_positions is not None else []
        )
        self.move_hints = move_hints if move_hints is not None else {}

    def __repr__(self):
        """String representation for debugging."""
        names = [type(e).__name__ for e in self.events]
        highlights = ""
        if self.has_highlights():
            highlights = (
                f", placements={len(self.placement_positions)}, "
                f"movable={len(self.move_hints)}"
            )
        return f"RenderData(events={names}{highlights})"

    def has_highlights(self):
        """Check if this render data includes hint information.

        Returns:
            bool: True if any hint data is present
        """
        return self.has_placement_highlights() or self.has_move_highlights()

    def has_placement_highlights(self):
        return len(self.placement_positions) > 0

    def has_move_highlights(self):
        return len(self.move_hints) > 0
