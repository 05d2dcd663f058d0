"""Parallélisation des rollouts headless.

Ce module fournit une API simple pour lancer plusieurs parties de Senet en
parallèle, en s'appuyant sur `senet.sim.runner.HeadlessEnv` :

- N workers indépendants (thread ou process), chacun avec son propre plateau.
- Agrégation de métriques de base (épisodes, coups, victoires par joueur).
- Reproductibilité via une seed de base.
"""

from __future__ import annotations

import pickle
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Literal, Tuple

import numpy as np
from loguru import logger

from senet.ai.policies import AgentPolicy, make_policy
from senet.engine.state import Player
from senet.sim.runner import EpisodeSummary, HeadlessEnv, Policies
from senet.sim.stats import STEP_VALUES, max_abs_deviation

ExecutorKind = Literal["thread", "process"]
PolicyFactory = Callable[[int], Policies]


@dataclass(frozen=True)
class PolicyMatchup:
    """Fabrique picklable associant un type de politique à chaque joueur.

    Les politiques aléatoires reçoivent une seed dérivée du worker.
    """

    player1: str = "normal"
    player2: str = "normal"
    seed: int = 0

    def __call__(self, worker_id: int) -> Dict[Player, AgentPolicy]:
        base = self.seed + worker_id * 2
        return {
            Player.PLAYER1: make_policy(self.player1, seed=base),
            Player.PLAYER2: make_policy(self.player2, seed=base + 1),
        }


@dataclass(frozen=True)
class WorkerSummary:
    """Agrège les métriques d'un worker donné."""

    worker_id: int
    episode_summaries: Tuple[EpisodeSummary, ...]
    duration_seconds: float = field(default=0.0, compare=False)

    @property
    def episodes(self) -> int:
        return len(self.episode_summaries)

    @property
    def episode_seeds(self) -> Tuple[int | None, ...]:
        return tuple(summary.seed for summary in self.episode_summaries)

    @property
    def moves(self) -> int:
        return sum(summary.moves for summary in self.episode_summaries)

    @property
    def throws(self) -> int:
        return sum(summary.throws for summary in self.episode_summaries)


@dataclass(frozen=True)
class RolloutSummary:
    """Résumé global renvoyé par `ParallelRolloutRunner.run()`."""

    worker_summaries: Tuple[WorkerSummary, ...]
    duration_seconds: float = field(default=0.0, compare=False)

    @property
    def total_workers(self) -> int:
        return len(self.worker_summaries)

    @property
    def total_episodes(self) -> int:
        return sum(worker.episodes for worker in self.worker_summaries)

    @property
    def total_moves(self) -> int:
        return sum(worker.moves for worker in self.worker_summaries)

    @property
    def total_throws(self) -> int:
        return sum(worker.throws for worker in self.worker_summaries)

    @property
    def completed_episodes(self) -> int:
        return sum(
            1
            for worker in self.worker_summaries
            for episode in worker.episode_summaries
            if episode.done
        )

    @property
    def wins(self) -> Dict[Player, int]:
        wins = {player: 0 for player in Player}
        for worker in self.worker_summaries:
            for episode in worker.episode_summaries:
                if episode.winner is not None:
                    wins[episode.winner] += 1
        return wins

    @property
    def step_histogram(self) -> np.ndarray:
        histograms = [
            np.asarray(episode.step_histogram, dtype=np.int64)
            for worker in self.worker_summaries
            for episode in worker.episode_summaries
        ]
        if not histograms:
            return np.zeros(len(STEP_VALUES), dtype=np.int64)
        return np.sum(histograms, axis=0)

    @property
    def throw_deviation(self) -> float:
        """Écart maximal entre lancers observés et distribution théorique."""

        return max_abs_deviation(self.step_histogram)


def _validate_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} doit être strictement positif (reçu: {value})")


def _distribute_episodes(total_episodes: int, num_workers: int, base_seed: int) -> Tuple[Tuple[int, Tuple[int, ...]], ...]:
    """Répartit les seeds d'épisodes entre les workers."""

    base = total_episodes // num_workers
    remainder = total_episodes % num_workers
    current_seed = base_seed
    assignments = []

    for worker_id in range(num_workers):
        count = base + (1 if worker_id < remainder else 0)
        seeds = tuple(range(current_seed, current_seed + count))
        current_seed += count
        assignments.append((worker_id, seeds))

    return tuple(assignments)


def _run_worker(
    worker_id: int,
    episode_seeds: Tuple[int, ...],
    max_turns_per_episode: int,
    policy_factory: PolicyFactory,
) -> WorkerSummary:
    """Exécute la boucle de simulation pour un worker donné."""

    start = time.perf_counter()
    if not episode_seeds:
        return WorkerSummary(worker_id=worker_id, episode_summaries=tuple(), duration_seconds=0.0)

    policies = policy_factory(worker_id)
    env = HeadlessEnv()
    episodes = tuple(
        env.play_episode(policies, seed=seed, max_turns=max_turns_per_episode)
        for seed in episode_seeds
    )

    duration = time.perf_counter() - start
    return WorkerSummary(
        worker_id=worker_id,
        episode_summaries=episodes,
        duration_seconds=duration,
    )


class ParallelRolloutRunner:
    """Orchestre l'exécution de plusieurs parties de Senet en parallèle."""

    def __init__(
        self,
        *,
        policy_factory: PolicyFactory,
        total_episodes: int,
        num_workers: int,
        max_turns_per_episode: int,
        base_seed: int = 0,
        executor_kind: ExecutorKind = "process",
    ) -> None:
        _validate_positive("num_workers", num_workers)
        _validate_positive("total_episodes", total_episodes)
        _validate_positive("max_turns_per_episode", max_turns_per_episode)

        if executor_kind not in ("thread", "process"):
            raise ValueError("executor_kind doit valoir 'thread' ou 'process'")

        if executor_kind == "process":
            try:
                pickle.dumps(policy_factory)
            except (pickle.PicklingError, AttributeError, TypeError) as exc:
                raise TypeError(
                    "policy_factory doit être picklable pour executor_kind='process'"
                ) from exc

        self._policy_factory = policy_factory
        self._total_episodes = total_episodes
        self._num_workers = num_workers
        self._max_turns_per_episode = max_turns_per_episode
        self._base_seed = base_seed
        self._executor_kind = executor_kind

    def _compute_assignments(self) -> Tuple[Tuple[int, Tuple[int, ...]], ...]:
        return _distribute_episodes(self._total_episodes, self._num_workers, self._base_seed)

    def run(self) -> RolloutSummary:
        """Exécute les rollouts et renvoie un résumé agrégé."""

        assignments = self._compute_assignments()
        start = time.perf_counter()
        logger.info(
            f"Rollouts: {self._total_episodes} partie(s) sur {self._num_workers} worker(s) "
            f"({self._executor_kind})"
        )

        # Cas trivial: un seul worker → exécution synchrone.
        if self._num_workers == 1:
            worker_id, seeds = assignments[0]
            summary = _run_worker(worker_id, seeds, self._max_turns_per_episode, self._policy_factory)
            duration = time.perf_counter() - start
            return RolloutSummary(worker_summaries=(summary,), duration_seconds=duration)

        executor_cls = ThreadPoolExecutor if self._executor_kind == "thread" else ProcessPoolExecutor
        with executor_cls(max_workers=self._num_workers) as executor:
            futures = [
                executor.submit(
                    _run_worker,
                    worker_id,
                    seeds,
                    self._max_turns_per_episode,
                    self._policy_factory,
                )
                for worker_id, seeds in assignments
            ]
            worker_summaries = [future.result() for future in futures]

        duration = time.perf_counter() - start
        logger.debug(f"Rollouts terminés en {duration:.2f}s")
        return RolloutSummary(worker_summaries=tuple(worker_summaries), duration_seconds=duration)


__all__ = [
    "PolicyMatchup",
    "WorkerSummary",
    "RolloutSummary",
    "ParallelRolloutRunner",
]
