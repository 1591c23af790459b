"""Game format converters for Mühle."""

from .notation_formatter import NotationFormatter
from .transcript_formatter import TranscriptFormatter

__all__ = ["NotationFormatter", "TranscriptFormatter"]