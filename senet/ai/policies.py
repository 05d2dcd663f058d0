"""Sélection de coup pour le joueur contrôlé par l'ordinateur.

Le sélecteur est une fonction pure de `(difficulté, coups légaux, plateau)` :
il ne modifie jamais le plateau. Les égalités sont fréquentes ; le premier
coup rencontré dans l'ordre croissant des maisons de départ l'emporte.
"""

from __future__ import annotations

import random
from enum import Enum
from functools import reduce
from typing import Optional, Sequence, Tuple

from senet.engine.actions import LegalMove
from senet.engine.rules import HOUSE_OF_THREE_TRUTHS, SPECIAL_HOUSES
from senet.engine.state import Board

OFFBOARD_SCORE = 100
CAPTURE_BONUS = 25
# Toutes les maisons spéciales, Maison de l'Eau (27) comprise.
SPECIAL_HOUSE_BONUS = 15
EXIT_ROW_BONUS = 10


class Difficulty(Enum):
    """Niveaux de l'adversaire automatique."""

    EASY = "easy"
    NORMAL = "normal"


def score_move(difficulty: Difficulty, move: LegalMove, board: Board) -> int:
    """Évalue un coup légal.

    - EASY : 100 pour une sortie, sinon la maison d'arrivée.
    - NORMAL : même base, +25 pour une capture, +15 pour une maison
      spéciale, +10 en plus pour la rangée de sortie (28 et au-delà).
    """

    if move.offboard or move.to_house is None:
        return OFFBOARD_SCORE

    score = move.to_house
    if difficulty is Difficulty.EASY:
        return score

    if board.get_cell(move.to_house) is board.current_player.opponent:
        score += CAPTURE_BONUS
    if move.to_house in SPECIAL_HOUSES:
        score += SPECIAL_HOUSE_BONUS
    if move.to_house >= HOUSE_OF_THREE_TRUTHS:
        score += EXIT_ROW_BONUS
    return score


def select_move(
    difficulty: Difficulty,
    legal_moves: Sequence[LegalMove],
    board: Board,
) -> Optional[LegalMove]:
    """Choisit le coup de meilleur score, ou None s'il n'y a aucun coup.

    None n'est pas une erreur : l'appelant doit passer le tour.
    """

    if not legal_moves:
        return None

    def keep_best(
        best: Tuple[LegalMove, int],
        candidate: LegalMove,
    ) -> Tuple[LegalMove, int]:
        score = score_move(difficulty, candidate, board)
        # Strictement supérieur: le premier rencontré garde l'égalité.
        return (candidate, score) if score > best[1] else best

    first = legal_moves[0]
    best_move, _ = reduce(
        keep_best,
        legal_moves[1:],
        (first, score_move(difficulty, first, board)),
    )
    return best_move


class AgentPolicy:
    """Interface minimale utilisée par le service de partie et la simulation."""

    def __init__(self, *, name: str | None = None) -> None:
        self._name = name or self.__class__.__name__

    @property
    def name(self) -> str:
        return self._name

    def select_move(self, board: Board, legal_moves: Sequence[LegalMove]) -> Optional[LegalMove]:
        raise NotImplementedError


class HeuristicPolicy(AgentPolicy):
    """Politique heuristique paramétrée par la difficulté."""

    def __init__(self, difficulty: Difficulty = Difficulty.NORMAL) -> None:
        super().__init__(name=f"Heuristic{difficulty.value.capitalize()}")
        self._difficulty = difficulty

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def select_move(self, board: Board, legal_moves: Sequence[LegalMove]) -> Optional[LegalMove]:
        return select_move(self._difficulty, legal_moves, board)


class RandomLegalPolicy(AgentPolicy):
    """Politique uniformément aléatoire sur les coups légaux."""

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(name="RandomLegal")
        self._random = rng or random.Random(seed)

    def select_move(self, board: Board, legal_moves: Sequence[LegalMove]) -> Optional[LegalMove]:
        if not legal_moves:
            return None
        return self._random.choice(list(legal_moves))


class FirstLegalPolicy(AgentPolicy):
    """Politique déterministe retournant le premier coup légal."""

    def __init__(self) -> None:
        super().__init__(name="FirstLegal")

    def select_move(self, board: Board, legal_moves: Sequence[LegalMove]) -> Optional[LegalMove]:
        return legal_moves[0] if legal_moves else None


POLICY_KINDS = ("easy", "normal", "random", "first")


def make_policy(kind: str, *, seed: Optional[int] = None) -> AgentPolicy:
    """Construit une politique à partir de son nom (voir `POLICY_KINDS`)."""

    if kind == "random":
        return RandomLegalPolicy(seed=seed)
    if kind == "first":
        return FirstLegalPolicy()
    try:
        return HeuristicPolicy(Difficulty(kind))
    except ValueError:
        raise ValueError(f"Politique inconnue: {kind!r} (attendu: {', '.join(POLICY_KINDS)})") from None


__all__ = [
    "Difficulty",
    "POLICY_KINDS",
    "make_policy",
    "score_move",
    "select_move",
    "AgentPolicy",
    "HeuristicPolicy",
    "RandomLegalPolicy",
    "FirstLegalPolicy",
]
