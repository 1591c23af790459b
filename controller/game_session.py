"""Game session management for Mühle.

Manages a single game's lifecycle including the rules engine, the players
and the games-played counter.
"""

from typing import Callable, Optional, TextIO, Tuple

from game.constants import WHITE
from game.muhle_game import MuhleGame
from game.player_config import PlayerConfig
from game.players import HumanMuhlePlayer, ScriptedMuhlePlayer


class GameSession:
    """Manages a single game's lifecycle (game state, players, current game)."""

    def __init__(
        self,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
        status_reporter: Callable[[str], None] | None = None,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ):
        """Initialize a game session.

        Args:
            player1_config: Configuration for player 1, White (default: human)
            player2_config: Configuration for player 2, Black (default: human)
            status_reporter: Callback for status messages (default: print)
            input_stream: Stream human players read from (default: stdin)
            output_stream: Stream human players prompt on (default: stdout)
        """
        self._status_reporter: Callable[[str], None] | None = status_reporter
        self._input_stream = input_stream
        self._output_stream = output_stream

        self.player1_config = player1_config if player1_config is not None else PlayerConfig.human()
        self.player2_config = player2_config if player2_config is not None else PlayerConfig.human()

        # Game state
        self.game = None
        self.player1 = None
        self.player2 = None
        self.games_played = 0

        # Initialize first game
        self.reset_game()

    def _create_player_from_config(self, player_num: int, config: PlayerConfig):
        """Create a player from a PlayerConfig.

        Args:
            player_num: Player number (1 or 2)
            config: PlayerConfig describing player type and parameters

        Returns:
            MuhlePlayer: Configured player instance with name set from config
        """
        if config.player_type == "human":
            player = HumanMuhlePlayer(
                self.game,
                player_num,
                input_stream=self._input_stream,
                output_stream=self._output_stream,
            )
        elif config.player_type == "scripted":
            player = ScriptedMuhlePlayer(
                self.game, player_num, config.moves, config.captures
            )
        else:
            raise ValueError(f"Unknown player type: {config.player_type}")

        if config.name is not None:
            player.name = config.name

        return player

    def _choose_capture(self, candidates: Tuple[int, ...]) -> Optional[int]:
        # The mover is still current while its mill is resolved
        return self.get_current_player().choose_capture(candidates)

    def reset_game(self):
        """Reset the game state for a new game.

        This creates a new game instance and players. Scripted players
        start over from the beginning of their scripts.
        """
        self._report("** New game **")

        self.game = MuhleGame(capture_provider=self._choose_capture)
        self.player1 = self._create_player_from_config(1, self.player1_config)
        self.player2 = self._create_player_from_config(2, self.player2_config)

    @property
    def players(self):
        return (self.player1, self.player2)

    def get_current_player(self):
        """Get the player whose turn it is.

        Returns:
            MuhlePlayer: Current player (player1 or player2)
        """
        return self.player1 if self.game.get_cur_player() == WHITE else self.player2

    def get_player(self, color):
        return self.player1 if color == WHITE else self.player2

    def increment_games_played(self):
        """Increment the games played counter."""
        self.games_played += 1

    def get_games_played(self):
        """Get the number of games played.

        Returns:
            int: Number of games played
        """
        return self.games_played

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
