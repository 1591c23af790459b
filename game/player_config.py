"""Player configuration system for Mühle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .constants import NUM_POSITIONS

PlayerType = Literal["human", "scripted"]

# Tokens a player may return instead of a position
UNDO = "undo"
QUIT = "quit"


@dataclass
class PlayerConfig:
    """Configuration for a single player.

    Attributes:
        player_type: Type of player ('human' or 'scripted')
        name: Display name (None = "Player N")
        moves: Scripted intents, each a position (int) or UNDO
        captures: Scripted capture choices, each a position or None to decline.
            When exhausted, the lowest candidate is taken.
    """

    player_type: PlayerType = "human"
    name: str | None = None
    moves: list = field(default_factory=list)
    captures: list = field(default_factory=list)

    @classmethod
    def human(cls, name: str | None = None) -> PlayerConfig:
        """Create a console player configuration."""
        return cls(player_type="human", name=name)

    @classmethod
    def scripted(
        cls,
        moves,
        captures=None,
        *,
        name: str | None = None,
    ) -> PlayerConfig:
        """Create a scripted player configuration.

        Args:
            moves: Sequence of positions (or UNDO) to play in order
            captures: Sequence of capture choices (position or None)
            name: Optional display name
        """
        return cls(
            player_type="scripted",
            name=name,
            moves=list(moves),
            captures=list(captures or []),
        )


def _parse_position(token: str) -> int:
    pos = int(token)
    if not 0 <= pos < NUM_POSITIONS:
        raise ValueError(f"Position {pos} is not on the board (0-{NUM_POSITIONS - 1})")
    return pos


def _parse_intent(token: str):
    token = token.strip().lower()
    if token in ("u", UNDO):
        return UNDO
    return _parse_position(token)


def _parse_capture(token: str):
    token = token.strip().lower()
    if token in ("-", "none"):
        return None
    return _parse_position(token)


def parse_player_spec(spec: str) -> PlayerConfig:
    """Parse a player specification string into a PlayerConfig.

    Format:
        TYPE[:PARAM=VALUE,PARAM=VALUE,...]

    Examples:
        "human" -> Console player
        "human:name=Alice" -> Console player called Alice
        "scripted:moves=0/8/16" -> Plays 0, then 8, then 16
        "scripted:moves=0/8/u/16,captures=3/-" -> Undo after 8; take 3, then decline

    Supported parameters:
        - name (str): Display name
        - moves (list): '/'-separated positions, 'u' for undo (scripted only)
        - captures (list): '/'-separated positions, '-' to decline (scripted only)
    """
    parts = spec.split(":", 1)
    player_type = parts[0].strip().lower()

    if player_type not in ["human", "scripted"]:
        raise ValueError(f"Invalid player type: {player_type}. Must be 'human' or 'scripted'")

    params = {}
    if len(parts) == 2:
        for param_pair in parts[1].split(","):
            param_pair = param_pair.strip()
            if not param_pair:
                continue
            if "=" not in param_pair:
                raise ValueError(f"Invalid parameter format: {param_pair}. Expected PARAM=VALUE")
            key, value = param_pair.split("=", 1)
            key = key.strip()
            value = value.strip()

            if key == "name":
                params[key] = value
            elif key == "moves":
                params[key] = [_parse_intent(t) for t in value.split("/") if t.strip()]
            elif key == "captures":
                params[key] = [_parse_capture(t) for t in value.split("/") if t.strip()]
            else:
                raise ValueError(f"Unknown parameter: {key}")

    if player_type == "human":
        if "moves" in params or "captures" in params:
            raise ValueError("moves/captures are only valid for scripted players")
        return PlayerConfig.human(name=params.get("name"))
    return PlayerConfig.scripted(
        params.get("moves", []),
        params.get("captures", []),
        name=params.get("name"),
    )
