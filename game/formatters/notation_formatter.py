"""Compact Mühle move notation formatter.

Converts between action dictionaries and a short text notation:

    12          placement on position 12
    3-4         move from 3 to 4
    16x5        placement on 16 forming a mill, capturing the piece on 5
    9-17x2      move forming a mill, capturing the piece on 2
"""

import re


class NotationFormatter:
    """Converts actions to/from compact notation."""

    _NOTATION_RE = re.compile(r"^(?:(\d{1,2})-)?(\d{1,2})(?:x(\d{1,2}))?$")

    @staticmethod
    def action_to_notation(action_dict: dict) -> str:
        """Convert action_dict to notation.

        Args:
            action_dict: Dictionary from TurnOutcome.to_action_dict()

        Returns:
            str: Notation string (e.g., "12", "3-4", "16x5")
        """
        action = action_dict["action"]
        if action == "PUT":
            notation = f"{action_dict['dst']}"
        elif action == "MOVE":
            notation = f"{action_dict['src']}-{action_dict['dst']}"
        else:
            raise ValueError(f"Unknown action type: {action}")

        capture = action_dict.get("capture")
        if capture is not None:
            notation += f"x{capture}"
        return notation

    @classmethod
    def notation_to_action_dict(cls, notation: str) -> dict:
        """Parse notation to an action dictionary.

        Raises:
            ValueError: If the notation is malformed
        """
        match = cls._NOTATION_RE.match(notation.strip())
        if match is None:
            raise ValueError(f"Invalid notation: {notation!r}")

        src, dst, capture = match.groups()
        capture = int(capture) if capture is not None else None
        if src is None:
            return {"action": "PUT", "dst": int(dst), "capture": capture}
        return {"action": "MOVE", "src": int(src), "dst": int(dst), "capture": capture}
