#!/usr/bin/env python3
"""Simule des parties de Senet entre adversaires automatiques.

Exemples :
    python simulate.py --games 200 --player1 normal --player2 easy
    python simulate.py --games 1000 --workers 4 --executor process
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from senet.ai.policies import POLICY_KINDS
from senet.app.messages import player_symbol
from senet.engine.state import Player
from senet.sim.parallel import ParallelRolloutRunner, PolicyMatchup
from senet.sim.stats import empirical_distribution, expected_distribution


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simule des parties de Senet IA contre IA")
    parser.add_argument("--games", type=int, default=100, help="Nombre de parties")
    parser.add_argument("--workers", type=int, default=1, help="Nombre de workers")
    parser.add_argument(
        "--executor",
        choices=("thread", "process"),
        default="process",
        help="Type d'exécuteur pour plusieurs workers",
    )
    parser.add_argument("--player1", choices=POLICY_KINDS, default="normal")
    parser.add_argument("--player2", choices=POLICY_KINDS, default="easy")
    parser.add_argument("--seed", type=int, default=0, help="Seed de base")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=2000,
        help="Nombre maximal de tours par partie",
    )
    parser.add_argument("--verbose", action="store_true", help="Journalisation détaillée")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    try:
        runner = ParallelRolloutRunner(
            policy_factory=PolicyMatchup(player1=args.player1, player2=args.player2, seed=args.seed),
            total_episodes=args.games,
            num_workers=args.workers,
            max_turns_per_episode=args.max_turns,
            base_seed=args.seed,
            executor_kind=args.executor,
        )
    except ValueError as exc:
        logger.error(str(exc))
        return 2

    summary = runner.run()
    wins = summary.wins
    for player, kind in ((Player.PLAYER1, args.player1), (Player.PLAYER2, args.player2)):
        rate = wins[player] / summary.total_episodes
        logger.info(f"Joueur {player_symbol(player)} ({kind}): {wins[player]} victoire(s) ({rate:.1%})")

    unfinished = summary.total_episodes - summary.completed_episodes
    if unfinished:
        logger.warning(f"{unfinished} partie(s) interrompue(s) après {args.max_turns} tours")

    observed = empirical_distribution(summary.step_histogram)
    expected = expected_distribution()
    for steps, (obs, exp) in enumerate(zip(observed, expected), start=1):
        logger.info(f"Lancer {steps}: {obs:.3f} observé / {exp:.3f} attendu")
    logger.info(
        f"{summary.total_episodes} partie(s), {summary.total_moves} coup(s), "
        f"{summary.total_throws} lancer(s) en {summary.duration_seconds:.2f}s "
        f"(écart max {summary.throw_deviation:.4f})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
