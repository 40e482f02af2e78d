"""
Autoplay a Ludo game from the command line.

Dice come from a seeded RNG and every choice is a uniformly random legal
move; events are printed through the logger as the game unfolds.
"""

import argparse
import random
import sys
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from .config import GameConfig
from .events import GameEvent
from .game import TurnController


def parse_args(defaults: GameConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Autoplay a game of Ludo")
    parser.add_argument(
        "--players",
        type=int,
        default=defaults.player_count,
        choices=(2, 3, 4),
        help="Number of players in the game",
    )
    parser.add_argument(
        "--seed", type=int, default=defaults.seed, help="Seed for dice and choices"
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=defaults.max_turns,
        help="Stop after this many rolls if nobody has won",
    )
    parser.add_argument("--log-level", type=str, default=defaults.log_level)
    return parser.parse_args()


def play(controller: TurnController, rng: random.Random, max_turns: int) -> Optional[str]:
    """
    Run the controller until a player wins or ``max_turns`` rolls were made.

    Returns:
        Optional[str]: Winning color, or ``None`` if the cap was reached
    """
    for _ in range(max_turns):
        if controller.is_over:
            break
        moves = controller.roll(rng.randint(1, 6))
        if moves:
            controller.choose(rng.choice(moves).piece_id)
    winner = controller.state.winner
    return winner.value if winner else None


def main() -> None:
    load_dotenv()
    config = GameConfig.from_env()
    args = parse_args(config)
    config = GameConfig(
        player_count=args.players,
        seed=args.seed,
        max_turns=args.max_turns,
        log_level=args.log_level,
    )

    logger.remove()
    logger.add(sys.stderr, level=config.log_level)

    controller = TurnController(config.player_count)

    def print_event(event: GameEvent) -> None:
        logger.info(f"• {event.describe()}")

    controller.subscribe(print_event)
    # the opening event was recorded before anyone subscribed
    for event in controller.state.events:
        print_event(event)

    winner = play(controller, random.Random(config.seed), config.max_turns)
    if winner is None:
        logger.warning(f"No winner after {config.max_turns} rolls")
    else:
        logger.success(f"Winner: {winner}")


if __name__ == "__main__":
    main()
