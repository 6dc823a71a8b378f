"""Main entry point for the three-level duel."""

import argparse

from factory.match_factory import MatchFactory
from game.player_config import parse_player_spec


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Two-player level duel: key maze, portal puzzle, dig board",
        epilog="""
Player Configuration:
  Use --player1 and --player2 to configure each player with the format:
    TYPE[:PARAM=VALUE,PARAM=VALUE,...]

  Types:
    random          - Random moves (and random digs on the dig board)
    scripted        - Replays a fixed list of actions, then idles
    human           - Events submitted by a front end (idles when headless)

  Parameters:
    name=TEXT       - Display name
    seed=N          - Random seed for this player (random)
    dig=X           - Dig probability on the dig board, 0-1 (random, default: 0.35)
    moves=A-B-...   - Actions up/down/left/right/dig joined by '-' (scripted)

  Examples:
    --player1 random:seed=3
    --player2 scripted:moves=right-right-down-dig,name=Alex
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--player1",
        type=str,
        default="random",
        metavar="SPEC",
        help="Player 1 configuration (default: random). See --help for format."
    )
    parser.add_argument(
        "--player2",
        type=str,
        default="random",
        metavar="SPEC",
        help="Player 2 configuration (default: random). See --help for format."
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible matches",
    )
    parser.add_argument(
        "--matches", type=int, default=1, help="Number of matches to play (default: 1)"
    )
    parser.add_argument(
        "--step-ms",
        type=int,
        default=100,
        help="Simulated milliseconds per update (default: 100)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=20000,
        help="Abort a match after this many updates (default: 20000)",
    )
    parser.add_argument(
        "--transcript-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log match events to matchlog_<seed>.txt in DIR (default: current directory)",
    )
    parser.add_argument(
        "--results-file",
        nargs="?",
        const=".",
        default=None,
        metavar="DIR",
        help="Log level winners to matchlog_<seed>_results.txt in DIR (default: current directory)",
    )
    parser.add_argument(
        "--transcript-screen",
        action="store_true",
        help="Output match events to screen",
    )
    parser.add_argument(
        "--results-screen",
        action="store_true",
        help="Output level winners to screen",
    )
    parser.add_argument(
        "--headless", action="store_true", help="Run without the text board renderer"
    )
    parser.add_argument(
        "--every-step",
        action="store_true",
        help="Print the boards after every update instead of only on level changes",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Track and report statistics for each match",
    )
    args = parser.parse_args()

    try:
        player1_config = parse_player_spec(args.player1)
        player2_config = parse_player_spec(args.player2)
    except ValueError as e:
        parser.error(f"Invalid player configuration: {e}")
        return

    if args.step_ms <= 0:
        parser.error("--step-ms must be positive")
    if args.matches <= 0:
        parser.error("--matches must be positive")

    factory = MatchFactory()
    controller = factory.create_controller(
        seed=args.seed,
        log_to_file=args.transcript_file,
        log_to_screen=args.transcript_screen,
        log_results_to_file=args.results_file,
        log_results_to_screen=args.results_screen,
        headless=args.headless,
        render_every_step=args.every_step,
        max_matches=args.matches,
        max_steps=args.max_steps,
        step_ms=args.step_ms,
        track_statistics=args.stats,
        player1_config=player1_config,
        player2_config=player2_config,
    )
    controller.run()

    if args.stats:
        controller.print_statistics()


if __name__ == "__main__":
    main()
