"""Controller module for Mühle.

Contains the game controller, session and logging.
"""

from controller.muhle_game_controller import MuhleGameController

__all__ = ["MuhleGameController"]
