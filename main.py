"""Main entry point for Mühle (Nine Men's Morris)."""

import argparse
import logging

from factory import MuhleFactory
from game.player_config import parse_player_spec


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Mühle (Nine Men's Morris)",
        epilog="""
Player Configuration:
  Use --player1 (White) and --player2 (Black) to configure each player:
    TYPE[:PARAM=VALUE,PARAM=VALUE,...]

  Types:
    human           - Enter positions 0-23 on the console ('u' undo, 'q' quit)
    scripted        - Play a fixed list of intents

  Parameters:
    name=NAME       - Display name
    moves=A/B/...   - Scripted intents, 'u' for undo (scripted only)
    captures=A/-/.. - Scripted capture choices, '-' to decline (scripted only)

  Examples:
    --player1 human:name=Alice
    --player2 scripted:moves=8/9/10,captures=0
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--player1",
        type=str,
        default="human",
        metavar="SPEC",
        help="Player 1 (White) configuration (default: human). See --help for format.",
    )
    parser.add_argument(
        "--player2",
        type=str,
        default="human",
        metavar="SPEC",
        help="Player 2 (Black) configuration (default: human). See --help for format.",
    )
    parser.add_argument(
        "--games", type=int, default=1, help="Number of games to play (default: 1)"
    )
    parser.add_argument(
        "--transcript-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log game actions to muhlelog_<time>_game<N>.txt in DIR (default: current directory)",
    )
    parser.add_argument(
        "--notation-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log game moves in compact notation to a file in DIR (default: current directory)",
    )
    parser.add_argument(
        "--transcript-screen",
        action="store_true",
        help="Output transcript format game actions to screen",
    )
    parser.add_argument(
        "--notation-screen",
        action="store_true",
        help="Output compact notation to screen",
    )
    parser.add_argument(
        "--diagram-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Save a PNG diagram of each finished game to DIR",
    )
    parser.add_argument(
        "--show-hints",
        action="store_true",
        help="List legal placements or moves before each turn",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not draw the board after each turn",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Diagnostic logging level (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        player1_config = parse_player_spec(args.player1)
        player2_config = parse_player_spec(args.player2)
    except ValueError as e:
        parser.error(f"Invalid player configuration: {e}")
        return

    if args.games is not None and args.games < 1:
        parser.error("--games must be at least 1")

    factory = MuhleFactory()
    controller = factory.create_controller(
        player1_config=player1_config,
        player2_config=player2_config,
        max_games=args.games,
        show_hints=args.show_hints,
        quiet=args.quiet,
        diagram_dir=args.diagram_dir,
        log_to_file=args.transcript_file,
        log_to_screen=args.transcript_screen,
        log_notation_to_file=args.notation_file,
        log_notation_to_screen=args.notation_screen,
    )
    controller.run()


if __name__ == "__main__":
    main()
