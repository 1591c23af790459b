"""Transcript action formatter for Mühle.

Converts between action dictionaries and transcript file string format.
Transcript format: "{'action': 'MOVE', 'src': 3, 'dst': 4, 'capture': None}"
"""

import ast


class TranscriptFormatter:
    """Converts actions to/from transcript file string format."""

    @staticmethod
    def action_to_transcript(action_dict: dict) -> str:
        """Convert action_dict to transcript string format."""
        return str(action_dict)

    @staticmethod
    def transcript_to_action_dict(transcript_str: str) -> dict:
        """Parse transcript string to action dictionary.

        Raises:
            ValueError: If the string cannot be safely parsed
            SyntaxError: If the string is not valid Python
        """
        return ast.literal_eval(transcript_str)
