"""
Play a game of 7 Wonders.

Usage:
    python -m wonders_sim                      # watch bots play
    python -m wonders_sim --human              # play as player 1
    python -m wonders_sim --players 5 --seed 7
"""
import argparse
import logging
import random

from .algorithms import Human, MonteCarlo, Random
from .constants import MAX_PLAYERS, MIN_PLAYERS
from .environment import Game

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="7 Wonders simulator")
    parser.add_argument("--players", type=int, default=3,
                        help=f"Number of players ({MIN_PLAYERS}-{MAX_PLAYERS})")
    parser.add_argument("--human", action="store_true", help="Play as player 1")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--playouts", type=int, default=10,
                        help="Playouts per candidate action for the Monte Carlo player")
    parser.add_argument("--verbose", action="store_true", help="Log every action")
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    rng = random.Random(args.seed)
    # Player 1 is the human (or a Monte Carlo bot), player 2 the Monte Carlo
    # bot, everyone else plays randomly.
    algorithms = [Human() if args.human else MonteCarlo(args.playouts, rng),
                  MonteCarlo(args.playouts, rng)]
    algorithms += [Random(rng) for _ in range(args.players - 2)]

    game = Game(algorithms, rng=rng)
    scores = game.play()

    ranking = sorted(enumerate(scores), key=lambda x: x[1], reverse=True)
    logger.info(f"Player {ranking[0][0] + 1} wins!")
    for index, score in ranking:
        logger.info(f"Player {index + 1} ({game.players[index].wonder.name}): "
                    f"{score} point{'' if score == 1 else 's'}")
    return scores

if __name__ == "__main__":
    main()
