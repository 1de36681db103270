#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--preset NAME | --width W --height H --mines N] [--seed S]
    python main.py evaluate [--agent {random,logic}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging

from minefield import (
    BoardConfig,
    GameSession,
    IntentDispatcher,
    MinefieldError,
    PRESETS,
    parse_command,
    render_ansi,
)
from sweepers import Evaluator, LogicAgent, RandomAgent

HELP_TEXT = """Commands:
  r ROW COL   reveal a cell        f ROW COL   toggle a flag
  w/a/s/d     move the cursor      x / m       reveal / flag at cursor
  q           quit"""


def board_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from command-line options."""
    base = PRESETS[args.preset]

    def pick(value, default):
        return default if value is None else value

    return BoardConfig(
        width=pick(args.width, base.width),
        height=pick(args.height, base.height),
        num_mines=pick(args.mines, base.num_mines),
    )


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    session = GameSession.from_config(board_config(args), seed=args.seed)
    dispatcher = IntentDispatcher(session)

    print(HELP_TEXT)
    while True:
        print()
        print(render_ansi(session, cursor=dispatcher.cursor.position))
        if session.is_over:
            break

        try:
            text = input("> ")
        except EOFError:
            break
        if text.strip().lower() in ("q", "quit"):
            break

        try:
            dispatcher.dispatch(parse_command(text))
        except (MinefieldError, ValueError) as exc:
            print(f"! {exc}")


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    if args.agent == "random":
        agent, name = RandomAgent(seed=args.seed), "Random"
    else:
        agent, name = LogicAgent(seed=args.seed), "Logic"

    evaluator = Evaluator(board_config(args), num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating {name} over {args.games} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg moves: {results['avg_moves']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")
    print(f"  Avg flags: {results['avg_flags']:.1f}")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    agents = {
        "Random": RandomAgent(seed=args.seed),
        "Logic": LogicAgent(seed=args.seed),
    }

    evaluator = Evaluator(board_config(args), num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(agents)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Moves':<12} {'Revealed':<10}")
    print("-" * 50)

    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_moves']:>10.1f} "
            f"{metrics['avg_revealed']:>10.1f}"
        )


def add_board_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="beginner",
        help="Board size and mine count preset",
    )
    parser.add_argument("--width", type=int, help="Override board width")
    parser.add_argument("--height", type=int, help="Override board height")
    parser.add_argument("--mines", type=int, help="Override mine count")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - play or evaluate automated players"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_options(play_parser)

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    add_board_options(eval_parser)
    eval_parser.add_argument(
        "--agent", choices=["random", "logic"], default="logic",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    add_board_options(compare_parser)
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "evaluate":
            evaluate(args)
        elif args.command == "compare":
            compare(args)
        else:
            parser.print_help()
    except MinefieldError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
