"""Players."""

from .human_muhle_player import HumanMuhlePlayer
from .muhle_player import MuhlePlayer
from .scripted_muhle_player import ScriptedMuhlePlayer

__all__ = ["MuhlePlayer", "HumanMuhlePlayer", "ScriptedMuhlePlayer"]
