# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Evaluation framework for the heuristic opponent.

Plays seeded automated games with the heuristic on the COMPUTER side
against a chosen opponent on the PLAYER side and reports performance.
"""

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from battleship.config import load_config
from battleship.engine import Controller, GameSession, GameStatus
from battleship.events import Side
from battleship.rules import GameVariant

from ai.opponent import HeuristicOpponent, RandomOpponent


logger = logging.getLogger(__name__)

OPPONENT_FACTORIES: Dict[str, Callable[[int], Controller]] = {
    "heuristic": lambda seed: HeuristicOpponent(name="Heuristic (player side)"),
    "random": lambda seed: RandomOpponent(seed=seed),
}


class Evaluator:
    """Evaluator for heuristic opponent performance analysis."""

    def __init__(
        self,
        variant: GameVariant = GameVariant.CLASSIC,
        opponent: str = "random",
        num_games: int = 100,
        seeds: Optional[List[int]] = None,
        max_rounds: int = 300,
    ):
        """
        Initialize evaluator.

        Args:
            variant: Rule variant to play
            opponent: Controller on the PLAYER side ('random' or 'heuristic')
            num_games: Number of games to evaluate
            seeds: Random seeds for reproducibility
            max_rounds: Maximum rounds per game
        """
        if opponent not in OPPONENT_FACTORIES:
            raise ValueError(f"Unknown opponent '{opponent}'")
        self.variant = variant
        self.opponent = opponent
        self.num_games = num_games
        self.seeds = seeds if seeds else list(range(42, 42 + num_games))
        self.max_rounds = max_rounds

    def play_game(self, seed: int) -> Dict:
        """Play one seeded game and return its statistics."""
        session = GameSession(variant=self.variant, seed=seed)
        session.place_fleet_randomly(Side.PLAYER)
        session.place_fleet_randomly(Side.COMPUTER)

        controllers = {
            Side.PLAYER: OPPONENT_FACTORIES[self.opponent](seed),
            Side.COMPUTER: HeuristicOpponent(),
        }
        status = session.play(controllers, max_rounds=self.max_rounds)

        stats = session.get_game_status()
        computer = stats["sides"][Side.COMPUTER.value]
        return {
            "seed": seed,
            "won": status == GameStatus.COMPUTER_WON,
            "finished": status.is_over,
            "rounds": session.rounds,
            "shots": computer["shots_fired"],
            "hits": computer["hits"],
            "shot_down": computer["shot_down"],
            "ships_sunk": stats["sides"][Side.PLAYER.value]["ships_sunk"],
            "accuracy": computer["hits"] / computer["shots_fired"] if computer["shots_fired"] else 0.0,
        }

    def evaluate(self, verbose: bool = False) -> Dict:
        """
        Evaluate the heuristic on the configured games.

        Args:
            verbose: Log per-game results

        Returns:
            Evaluation statistics dictionary
        """
        logger.info(
            f"Evaluating heuristic vs {self.opponent} on {self.num_games} "
            f"{self.variant.value} games..."
        )
        start_time = time.time()

        results = []
        for i, seed in enumerate(self.seeds[:self.num_games]):
            result = self.play_game(seed)
            results.append(result)

            if verbose:
                status = "WON" if result["won"] else ("LOST" if result["finished"] else "INCOMPLETE")
                logger.info(
                    f"Game {i+1}/{self.num_games} (seed={seed}): {status} | "
                    f"Rounds: {result['rounds']} | Ships: {result['ships_sunk']}/5 | "
                    f"Accuracy: {result['accuracy']:.2%}"
                )

        elapsed_time = time.time() - start_time

        wins = [r["won"] for r in results]
        rounds = [r["rounds"] for r in results]
        shots = [r["shots"] for r in results]
        winning_shots = [r["shots"] for r in results if r["won"]]
        accuracies = [r["accuracy"] for r in results]

        return {
            "variant": self.variant.value,
            "opponent": self.opponent,
            "num_games": len(results),
            "wins": int(sum(wins)),
            "win_rate": float(np.mean(wins)),
            "avg_rounds": float(np.mean(rounds)),
            "std_rounds": float(np.std(rounds)),
            "avg_shots": float(np.mean(shots)),
            "min_shots": int(np.min(shots)),
            "max_shots": int(np.max(shots)),
            "avg_winning_shots": float(np.mean(winning_shots)) if winning_shots else None,
            "avg_accuracy": float(np.mean(accuracies)),
            "std_accuracy": float(np.std(accuracies)),
            "total_time": elapsed_time,
            "avg_time_per_game": elapsed_time / len(results),
            "game_logs": results,
        }

    def print_summary(self, results: Dict):
        """Print formatted evaluation summary."""
        print("\n" + "=" * 60)
        print("HEURISTIC OPPONENT EVALUATION RESULTS")
        print("=" * 60)
        print(f"Variant:             {results['variant']}")
        print(f"Opponent:            {results['opponent']}")
        print(f"Games Played:        {results['num_games']}")
        print(f"Wins:                {results['wins']}")
        print(f"Win Rate:            {results['win_rate']:.2%}")
        print(f"Avg Rounds:          {results['avg_rounds']:.1f} ± {results['std_rounds']:.1f}")
        print(f"Avg Shots:           {results['avg_shots']:.1f}")
        if results['avg_winning_shots']:
            print(f"Avg Winning Shots:   {results['avg_winning_shots']:.1f}")
        print(f"Avg Accuracy:        {results['avg_accuracy']:.2%}")
        print(f"Total Time:          {results['total_time']:.1f}s")
        print("=" * 60)


def main(argv: Optional[List[str]] = None):
    """Main evaluation entry point."""
    parser = argparse.ArgumentParser(description="Evaluate the heuristic Battleship opponent")
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration file')
    parser.add_argument('--num-games', type=int, default=None,
                        help='Number of games to evaluate (overrides config)')
    parser.add_argument('--variant', type=str, default=None,
                        help='Game variant (overrides config)')
    parser.add_argument('--opponent', choices=sorted(OPPONENT_FACTORIES), default=None,
                        help='Controller on the player side (overrides config)')
    parser.add_argument('--output', type=str, default='eval_results',
                        help='Output directory for results')
    parser.add_argument('--verbose', action='store_true',
                        help='Log per-game results')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = load_config(args.config)['evaluation']
    if args.num_games is not None:
        config['num_games'] = args.num_games
    if args.variant is not None:
        config['variant'] = args.variant
    if args.opponent is not None:
        config['opponent'] = args.opponent

    evaluator = Evaluator(
        variant=GameVariant.from_name(config['variant']),
        opponent=config['opponent'],
        num_games=config['num_games'],
        seeds=config['seeds'],
        max_rounds=config['max_rounds'],
    )
    results = evaluator.evaluate(verbose=args.verbose)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    results_path = output_dir / "evaluation_results.json"
    with open(results_path, 'w') as f:
        json.dump(results, f, indent=2)

    evaluator.print_summary(results)
    logger.info(f"Results saved to {results_path}")


if __name__ == "__main__":
    main()
