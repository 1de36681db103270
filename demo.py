#!/usr/bin/env python3
"""Watch the Logic agent play."""
import time
import os

from minefield import BoardConfig, GamePhase, GameSession, IntentDispatcher, render_ansi
from sweepers import LogicAgent


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, size: int = 9, mines: int = 10):
    """Run demo games with visualization."""
    config = BoardConfig(height=size, width=size, num_mines=mines)
    agent = LogicAgent()

    print(f"Board: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        session = GameSession.from_config(config)
        dispatcher = IntentDispatcher(session)
        agent.reset()

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(render_ansi(session))
        time.sleep(delay)

        step = 0

        while not session.is_over:
            intent = agent.select_intent(session)
            dispatcher.dispatch(intent)
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: {intent}\n")
            print(render_ansi(session))

            if session.phase == GamePhase.WON:
                wins += 1

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~15%% of cells)")
    args = parser.parse_args()

    mines = args.mines if args.mines else max(1, int(args.size * args.size * 0.15))

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines)
