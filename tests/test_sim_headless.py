"""Tests pour l'environnement headless.

Objectifs :
- Fournir une API reset()/throw()/step() au-dessus du service de partie.
- Jouer des parties complètes entre politiques automatiques.
- Préserver la reproductibilité via les seeds.
"""

from __future__ import annotations

import pytest

from senet.ai.policies import Difficulty, FirstLegalPolicy, HeuristicPolicy, RandomLegalPolicy
from senet.engine.rules import PIECES_PER_PLAYER
from senet.engine.state import Board, Player
from senet.sim.runner import HeadlessEnv


@pytest.fixture
def headless_env():
    return HeadlessEnv(seed=123)


def test_board_requires_reset():
    with pytest.raises(RuntimeError):
        HeadlessEnv().board


def test_reset_returns_opening_board(headless_env):
    board = headless_env.reset()
    assert board == Board()
    assert headless_env.board is board
    assert headless_env.rolls == []


def test_step_applies_pending_roll(headless_env):
    headless_env.reset()
    moves = []
    for _ in range(50):
        headless_env.throw()
        moves = headless_env.legal_moves()
        if moves:
            break
    assert moves, "aucun lancer jouable en 50 essais"

    player = headless_env.board.current_player
    result = headless_env.step(moves[0].from_house)

    assert result.outcome.ok
    assert result.info["player"] is player
    assert result.done is False


def test_play_episode_finishes_with_a_winner(headless_env):
    policies = {
        Player.PLAYER1: HeuristicPolicy(Difficulty.NORMAL),
        Player.PLAYER2: HeuristicPolicy(Difficulty.EASY),
    }
    summary = headless_env.play_episode(policies, seed=7, max_turns=5000)

    assert summary.done
    assert summary.winner is not None
    winner_index = 0 if summary.winner is Player.PLAYER1 else 1
    assert summary.pieces_off[winner_index] == PIECES_PER_PLAYER
    assert sum(summary.step_histogram) == summary.throws
    assert summary.moves <= summary.throws


def test_episode_is_reproducible():
    summary_a = HeadlessEnv().play_episode(FirstLegalPolicy(), seed=11, max_turns=5000)
    summary_b = HeadlessEnv().play_episode(FirstLegalPolicy(), seed=11, max_turns=5000)
    assert summary_a == summary_b


def test_max_turns_interrupts_episode():
    summary = HeadlessEnv().play_episode(RandomLegalPolicy(seed=0), seed=3, max_turns=1)

    assert summary.throws == 1
    assert not summary.done
    assert summary.winner is None
