"""Game controller for Mühle.

Manages game loop, player actions, renderer updates, and game state.
"""

from __future__ import annotations

import logging

from game.constants import COLOR_NAMES, Phase
from game.muhle_logic import empty_positions
from game.player_config import QUIT, UNDO, PlayerConfig
from game.turn_outcome import TurnOutcome
from controller.action_processor import ActionProcessor
from controller.game_logger import GameLogger
from controller.game_loop import GameLoop
from controller.game_session import GameSession
from shared.interfaces import IRenderer, IRendererFactory
from shared.render_data import RenderData

logger = logging.getLogger(__name__)


class MuhleGameController:
    def __init__(
        self,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
        max_games: int | None = 1,
        show_hints: bool = False,
        log_to_file: str | None = None,
        log_to_screen: bool = False,
        log_notation_to_file: str | None = None,
        log_notation_to_screen: bool = False,
        renderer_or_factory: IRenderer | IRendererFactory | None = None,
        input_stream=None,
        output_stream=None,
    ):
        """Wire up session, logger, renderer and loop.

        Args:
            player1_config: White's configuration (default: human)
            player2_config: Black's configuration (default: human)
            max_games: Stop after this many finished games (None = play on)
            show_hints: Pass legal placements/moves to the renderer each turn
            log_to_file: Directory for transcript files (None to disable)
            log_to_screen: Write the transcript to stdout
            log_notation_to_file: Directory for notation files (None to disable)
            log_notation_to_screen: Write notation to stdout
            renderer_or_factory: Renderer, or a factory called with this controller
            input_stream: Stream human players read from (default: stdin)
            output_stream: Stream human players prompt on (default: stdout)
        """
        self.max_games = max_games
        self.show_hints = show_hints
        self.renderer = None
        self._game_ending_processed = False
        self._stopped = False

        self.session = GameSession(
            player1_config=player1_config,
            player2_config=player2_config,
            status_reporter=self._report,
            input_stream=input_stream,
            output_stream=output_stream,
        )

        self.logger = GameLogger(
            session=self.session,
            transcript_dir=log_to_file,
            notation_dir=log_notation_to_file,
            log_to_screen=log_to_screen,
            log_notation_to_screen=log_notation_to_screen,
            status_reporter=self._report,
        )

        if isinstance(renderer_or_factory, IRenderer):
            self.renderer = renderer_or_factory
        elif isinstance(renderer_or_factory, IRendererFactory):
            self.renderer = renderer_or_factory(self)
        elif renderer_or_factory is None:
            pass
        else:
            raise TypeError(
                "renderer_or_factory must be an IRenderer, IRendererFactory, or None"
            )

        self.action_processor = ActionProcessor()
        self._game_loop = GameLoop(self)

        self.logger.start_log(self._game_number())

    def _game_number(self) -> int:
        return self.session.get_games_played() + 1

    def run(self):
        if self.renderer is not None:
            self.renderer.reset_board()
            self.renderer.show_board(self._build_render_data())
        self._game_loop.run()

    def _close_log_file(self):
        """Close the current log files, appending the final game state."""
        self.logger.end_log(self.session.game.state)

    def _reset_board(self):
        """Start the next game."""
        self._close_log_file()
        self._game_ending_processed = False
        self.session.reset_game()
        self.logger.start_log(self._game_number())
        if self.renderer is not None:
            self.renderer.reset_board()
            self.renderer.show_board(self._build_render_data())

    def _build_render_data(self, outcome: TurnOutcome | None = None) -> RenderData:
        game = self.session.game
        state = outcome.state if outcome is not None else game.snapshot()
        events = outcome.events if outcome is not None else ()

        placements = None
        move_hints = None
        if self.show_hints and not state.game_over:
            if state.phase == Phase.PLACING:
                placements = list(empty_positions(state.board))
            else:
                move_hints = game.get_valid_moves()
        return RenderData(state, events, placements, move_hints)

    def update_game(self, task):
        status = self._check_game_status(task)
        if status == task.done:
            return task.done

        game = self.session.game
        player = self.session.get_current_player()

        try:
            intent = player.get_action()
        except ValueError as e:
            self._report(f"Error getting action: {e}")
            self._stop()
            return task.done

        if intent == QUIT:
            self._report(f"{player.name} quit")
            self._stop()
            return task.done

        if intent == UNDO:
            outcome = game.undo()
            if outcome.accepted:
                # The player who made the undone action is to move again
                self.logger.log_undo(self.session.get_current_player().n)
        else:
            outcome = game.apply_intent(intent)
            action_dict = outcome.to_action_dict()
            if action_dict is not None:
                self.logger.log_action(player.n, action_dict)

        if outcome.rejected:
            logger.debug("%s: %s", player.name, outcome.error)

        self.action_processor.process(self.session.players, outcome)

        if self.renderer:
            self.renderer.execute_action(player, self._build_render_data(outcome))
        elif outcome.rejected:
            self._report(f"Rejected: {outcome.error.message}")

        return self._check_game_status(task)

    def _stop(self):
        self._stopped = True
        self._close_log_file()

    def _check_game_status(self, task):
        """Check if the game is over and handle the ending if needed.

        Returns:
            task.done if the loop should stop, task.again otherwise
        """
        if self._stopped:
            return task.done
        if not self.session.game.is_game_over():
            return task.again

        return self._handle_game_ending(task)

    def _handle_game_ending(self, task):
        """Report the result, count the game and either stop or start the next one.

        Idempotent for the same game.
        """
        if self._game_ending_processed:
            return task.done
        self._game_ending_processed = True

        game = self.session.game
        winner = self.session.get_player(game.state.winner)

        self._report("")
        self._report(
            f"Winner: Player {winner.n} ({COLOR_NAMES[winner.color]}), "
            f"{game.get_game_end_reason()}"
        )
        self._report(f"Player 1 captures: {self.session.player1.captured}")
        self._report(f"Player 2 captures: {self.session.player2.captured}")

        self.session.increment_games_played()

        if (
            self.max_games is not None
            and self.session.get_games_played() >= self.max_games
        ):
            self._report(f"Completed {self.session.get_games_played()} game(s)")
            self._stop()
            return task.done

        self._reset_board()
        return task.again

    def _report(self, message: str | None) -> None:
        """Forward status messages to the transcript comments and the renderer."""
        if message is None:
            return
        text = str(message)

        # The session reports before the logger exists
        if getattr(self, "logger", None) is not None:
            self.logger.log_comment(text)
        if self.renderer is not None:
            self.renderer.report_status(text)
