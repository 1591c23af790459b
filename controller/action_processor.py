"""Utilities for applying post-turn effects in the controller layer."""

from __future__ import annotations

from typing import Any, Iterable

from game.constants import opponent_of
from game.turn_outcome import PieceCaptured, TurnOutcome, Undone


class ActionProcessor:
    """Encapsulate controller-side post-turn handling.

    Keeps each player's capture tally in line with the game state. Tallies
    are recomputed from the state rather than incremented, so an undo that
    takes back a capture is reflected too.
    """

    def process(self, players: Iterable[Any], outcome: TurnOutcome | None) -> None:
        """Apply the effects of ``outcome`` to ``players``.

        Args:
            players: Players of the session (each has ``color`` and ``captured``)
            outcome: TurnOutcome returned by the game layer. May be ``None``.
        """
        if outcome is None:
            return
        if not (outcome.has_captures() or outcome.events_of(Undone)):
            return

        for player in players:
            player.captured = outcome.state.captured(opponent_of(player.color))

    @staticmethod
    def captured_positions(outcome: TurnOutcome) -> list[int]:
        return [e.pos for e in outcome.events_of(PieceCaptured)]
