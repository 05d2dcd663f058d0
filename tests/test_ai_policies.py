"""Tests du sélecteur de coups (EASY / NORMAL) et des politiques de base."""

from __future__ import annotations

import pytest

from senet.ai.policies import (
    Difficulty,
    FirstLegalPolicy,
    HeuristicPolicy,
    RandomLegalPolicy,
    make_policy,
    score_move,
    select_move,
)
from senet.engine.actions import LegalMove
from senet.engine.state import Board


class TestScoring:
    def test_easy_scores_destination(self):
        board = Board()
        assert score_move(Difficulty.EASY, LegalMove(9, 11), board) == 11

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_offboard_scores_hundred(self, difficulty):
        board = Board.from_layout(player1=(29,), player2=(1,))
        assert score_move(difficulty, LegalMove(29, None, offboard=True), board) == 100

    def test_normal_capture_bonus(self):
        board = Board.from_layout(player1=(5,), player2=(7,))
        assert score_move(Difficulty.NORMAL, LegalMove(5, 7), board) == 7 + 25

    def test_normal_special_house_bonus(self):
        board = Board.from_layout(player1=(24,), player2=(1,))
        assert score_move(Difficulty.NORMAL, LegalMove(24, 26), board) == 26 + 15

    def test_normal_water_counts_as_special(self):
        board = Board.from_layout(player1=(23,), player2=(15,))
        assert score_move(Difficulty.NORMAL, LegalMove(23, 27), board) == 27 + 15

    def test_normal_exit_row_bonus(self):
        board = Board.from_layout(player1=(26,), player2=(1,))
        assert score_move(Difficulty.NORMAL, LegalMove(26, 28), board) == 28 + 15 + 10


class TestSelection:
    def test_empty_list_returns_none(self):
        assert select_move(Difficulty.NORMAL, [], Board()) is None

    def test_offboard_beats_any_destination(self):
        board = Board.from_layout(player1=(3, 28), player2=(1,))
        moves = board.legal_moves(3)
        assert select_move(Difficulty.EASY, moves, board) == LegalMove(28, None, offboard=True)

    def test_ties_go_to_first_move(self):
        board = Board()
        moves = [LegalMove(28, None, offboard=True), LegalMove(29, None, offboard=True)]
        assert select_move(Difficulty.EASY, moves, board) is moves[0]

    def test_normal_prefers_capture_easy_prefers_progress(self):
        board = Board.from_layout(player1=(5, 10), player2=(7,))
        moves = board.legal_moves(2)

        assert select_move(Difficulty.NORMAL, moves, board) == LegalMove(5, 7)
        assert select_move(Difficulty.EASY, moves, board) == LegalMove(10, 12)

    def test_selection_does_not_touch_board(self):
        board = Board()
        before = board.copy()
        select_move(Difficulty.NORMAL, board.legal_moves(1), board)
        assert board == before


class TestPolicies:
    def test_heuristic_policy_delegates(self):
        board = Board.from_layout(player1=(5, 10), player2=(7,))
        policy = HeuristicPolicy(Difficulty.NORMAL)

        assert policy.name == "HeuristicNormal"
        assert policy.select_move(board, board.legal_moves(2)) == LegalMove(5, 7)

    def test_random_policy_is_seeded(self):
        board = Board()
        moves = board.legal_moves(1)
        picks_a = [RandomLegalPolicy(seed=3).select_move(board, moves) for _ in range(5)]
        picks_b = [RandomLegalPolicy(seed=3).select_move(board, moves) for _ in range(5)]

        assert picks_a == picks_b
        assert all(pick in moves for pick in picks_a)

    def test_policies_return_none_without_moves(self):
        board = Board()
        assert RandomLegalPolicy(seed=1).select_move(board, []) is None
        assert FirstLegalPolicy().select_move(board, []) is None

    @pytest.mark.parametrize(
        "kind, expected",
        [
            ("easy", HeuristicPolicy),
            ("normal", HeuristicPolicy),
            ("random", RandomLegalPolicy),
            ("first", FirstLegalPolicy),
        ],
    )
    def test_make_policy(self, kind, expected):
        assert isinstance(make_policy(kind, seed=0), expected)

    def test_make_policy_unknown(self):
        with pytest.raises(ValueError):
            make_policy("grandmaster")
