"""Adversaire automatique Senet.

- policies.py : sélecteur heuristique (EASY / NORMAL) et politiques de base
  (aléatoire, premier coup légal) utilisées par le service et la simulation.

Exemple :
    >>> from senet.engine.state import Board
    >>> from senet.ai import Difficulty, select_move
    >>>
    >>> board = Board()
    >>> move = select_move(Difficulty.NORMAL, board.legal_moves(2), board)
"""

from .policies import (
    AgentPolicy,
    Difficulty,
    FirstLegalPolicy,
    HeuristicPolicy,
    POLICY_KINDS,
    RandomLegalPolicy,
    make_policy,
    score_move,
    select_move,
)

__all__ = [
    "AgentPolicy",
    "Difficulty",
    "FirstLegalPolicy",
    "HeuristicPolicy",
    "POLICY_KINDS",
    "RandomLegalPolicy",
    "make_policy",
    "score_move",
    "select_move",
]
