#!/usr/bin/env python3
"""
Cooperative two-board minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--questions FILE]
    python main.py demo [--games N] [--delay SECONDS] [--seed N]
"""
import argparse
import logging
import os
import random
import time

from twinsweeper.host import ConsoleGame, CoopMinesweeperEnv, GameController
from twinsweeper.session import QuestionBank


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def play(args: argparse.Namespace) -> None:
    """Play a game on the terminal."""
    bank = QuestionBank.from_json(args.questions) if args.questions else None
    controller = GameController(question_bank=bank)
    console = ConsoleGame(controller)
    controller.start_new_game(args.difficulty)
    console.run()
    print("Thanks for playing!")


def demo(args: argparse.Namespace) -> None:
    """Watch random legal moves play out on both boards."""
    chooser = random.Random(args.seed)
    env = CoopMinesweeperEnv(
        difficulty=args.difficulty,
        question_presenter=lambda question: chooser.random() < 0.5,
        render_mode="ansi",
    )

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        obs, info = env.reset(seed=seed)
        done = False
        step = 0

        while not done:
            mask = env.get_action_mask()
            action = chooser.choice(mask.nonzero()[0].tolist())
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Wins so far: {wins}\n")
            print(env.render())
            if info["message"]:
                print(f"\n>> {info['message']}")

            if done and info["game_state"] == "WON":
                wins += 1
            time.sleep(args.delay)

        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Cooperative two-board minesweeper"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play on the terminal")
    play_parser.add_argument(
        "--difficulty", default="easy", help="easy, medium or hard"
    )
    play_parser.add_argument(
        "--questions", default=None, help="JSON file with question deck"
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    demo_parser.add_argument(
        "--difficulty", default="easy", help="easy, medium or hard"
    )
    demo_parser.add_argument(
        "--games", type=int, default=1, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.2, help="Delay between moves"
    )
    demo_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
