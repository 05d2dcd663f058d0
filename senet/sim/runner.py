"""Boucle headless pour le moteur Senet.

Ce module expose un environnement minimaliste pour piloter une partie via
`reset()` / `throw()` / `step()`, ainsi qu'une boucle complète
`play_episode()` utilisée par les rollouts parallèles et `simulate.py`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple, Union

from senet.ai.policies import AgentPolicy
from senet.app.events import MoveAppliedEvent, SticksThrownEvent
from senet.app.game_service import GameService
from senet.engine.actions import LegalMove, MoveOutcome
from senet.engine.state import Board, Player
from senet.engine.sticks import StickThrow, random_binary_source
from senet.sim.stats import step_histogram

Policies = Union[AgentPolicy, Mapping[Player, AgentPolicy]]


@dataclass(frozen=True)
class StepResult:
    """Résultat d'un appel à HeadlessEnv.step()."""

    board: Board
    outcome: MoveOutcome
    done: bool
    info: Dict[str, Any]


@dataclass(frozen=True)
class EpisodeSummary:
    """Résume une partie simulée."""

    seed: int | None
    throws: int
    moves: int
    done: bool
    winner: Player | None
    pieces_off: Tuple[int, int]
    step_histogram: Tuple[int, ...]


class HeadlessEnv:
    """Environnement headless léger; une instance de service par épisode."""

    def __init__(self, *, seed: int | None = None) -> None:
        self._base_seed = seed
        self._seed: int | None = seed
        self._service: GameService | None = None
        self._rolls: List[int] = []
        self._moves = 0

    @property
    def service(self) -> GameService:
        """Retourne le service courant (reset doit avoir été appelé)."""

        if self._service is None:
            raise RuntimeError("reset() doit être appelé avant d'accéder au plateau")
        return self._service

    @property
    def board(self) -> Board:
        return self.service.board

    @property
    def rolls(self) -> List[int]:
        """Lancers observés depuis le dernier reset."""

        return list(self._rolls)

    def reset(self, *, seed: int | None = None) -> Board:
        """Réinitialise l'environnement et renvoie le plateau d'ouverture."""

        self._seed = seed if seed is not None else self._base_seed
        service = GameService(binary_source=random_binary_source(self._seed))
        service.event_bus.subscribe(self._record_throw, SticksThrownEvent)
        service.event_bus.subscribe(self._record_move, MoveAppliedEvent)
        self._service = service
        self._rolls = []
        self._moves = 0
        return service.start_new_game()

    def throw(self) -> StickThrow:
        return self.service.throw()

    def legal_moves(self) -> List[LegalMove]:
        return self.service.legal_moves()

    def step(self, start: int) -> StepResult:
        """Joue la pièce de `start` avec le lancer en attente."""

        service = self.service
        player = service.board.current_player
        steps = service.pending_steps
        outcome = service.play(start)
        board = service.board
        info = {"player": player, "steps": steps, "start": start}
        return StepResult(board=board, outcome=outcome, done=board.is_game_over(), info=info)

    def play_episode(
        self,
        policies: Policies,
        *,
        seed: int | None = None,
        max_turns: int = 2000,
    ) -> EpisodeSummary:
        """Joue une partie complète, chaque camp piloté par sa politique.

        Args:
            policies: une politique pour les deux camps, ou une par joueur
            seed: seed de l'épisode (par défaut celle de l'environnement)
            max_turns: nombre maximal de tours avant abandon

        Returns:
            Résumé de l'épisode (done=False si max_turns est atteint)
        """

        self.reset(seed=seed)
        service = self.service
        turns = 0
        while turns < max_turns and not service.board.is_game_over():
            policy = self._policy_for(policies, service.board.current_player)
            service.play_policy_turn(policy)
            turns += 1
        return self.summary()

    def summary(self) -> EpisodeSummary:
        board = self.board
        return EpisodeSummary(
            seed=self._seed,
            throws=len(self._rolls),
            moves=self._moves,
            done=board.is_game_over(),
            winner=board.winner,
            pieces_off=(board.get_pieces_off(Player.PLAYER1), board.get_pieces_off(Player.PLAYER2)),
            step_histogram=tuple(int(count) for count in step_histogram(self._rolls)),
        )

    def _record_throw(self, event: SticksThrownEvent) -> None:
        self._rolls.append(event.throw.steps)

    def _record_move(self, event: MoveAppliedEvent) -> None:
        self._moves += 1

    @staticmethod
    def _policy_for(policies: Policies, player: Player) -> AgentPolicy:
        if isinstance(policies, AgentPolicy):
            return policies
        return policies[player]


__all__ = ["HeadlessEnv", "StepResult", "EpisodeSummary"]
