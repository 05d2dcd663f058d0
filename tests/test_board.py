"""Tests du plateau : disposition d'ouverture, accès et positions arbitraires."""

from __future__ import annotations

import pytest

from senet.engine.rules import BOARD_HOUSES, PIECES_PER_PLAYER
from senet.engine.state import Board, Player


class TestOpening:
    """Disposition canonique d'ouverture."""

    def test_opening_layout(self):
        board = Board()
        assert board.pieces_on_board(Player.PLAYER1) == [1, 3, 5, 7, 9]
        assert board.pieces_on_board(Player.PLAYER2) == [2, 4, 6, 8, 10]
        assert all(board.get_cell(house) is None for house in range(11, BOARD_HOUSES + 1))

    def test_opening_counters(self):
        board = Board()
        assert board.get_current_player() is Player.PLAYER1
        assert board.get_pieces_off(Player.PLAYER1) == 0
        assert board.get_pieces_off(Player.PLAYER2) == 0
        assert not board.is_game_over()
        assert board.winner is None
        assert board.last_roll is None

    def test_reset_restores_opening(self):
        board = Board()
        board.move(9, 2)
        board.switch_player()
        board.last_roll = 2

        board.reset()

        assert board == Board()


class TestAccess:
    @pytest.mark.parametrize("house", [0, 31, -3])
    def test_get_cell_out_of_range_is_empty(self, house):
        assert Board().get_cell(house) is None

    def test_switch_player_alternates(self):
        board = Board()
        board.switch_player()
        assert board.current_player is Player.PLAYER2
        board.switch_player()
        assert board.current_player is Player.PLAYER1

    def test_opponent(self):
        assert Player.PLAYER1.opponent is Player.PLAYER2
        assert Player.PLAYER2.opponent is Player.PLAYER1

    def test_wrong_cell_count_rejected(self):
        with pytest.raises(ValueError):
            Board(cells=[None] * 12)


class TestFromLayout:
    """Construction de positions arbitraires."""

    def test_missing_pieces_are_counted_off(self):
        board = Board.from_layout(player1=(20, 21), player2=(1, 2, 3, 4, 5))
        assert board.get_pieces_off(Player.PLAYER1) == PIECES_PER_PLAYER - 2
        assert board.get_pieces_off(Player.PLAYER2) == 0
        assert not board.is_game_over()

    def test_empty_side_has_already_won(self):
        board = Board.from_layout(player1=(), player2=(12,))
        assert board.is_game_over()
        assert board.winner is Player.PLAYER1

    def test_overlap_rejected(self):
        with pytest.raises(ValueError):
            Board.from_layout(player1=(4,), player2=(4,))

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Board.from_layout(player1=(31,))

    def test_too_many_pieces_rejected(self):
        with pytest.raises(ValueError):
            Board.from_layout(player1=(1, 2, 3, 4, 5, 6))

    def test_current_player_honoured(self):
        board = Board.from_layout(player1=(1,), player2=(2,), current_player=Player.PLAYER2)
        assert board.current_player is Player.PLAYER2


def test_copy_is_independent():
    board = Board()
    clone = board.copy()

    clone.move(9, 2)

    assert board.get_cell(9) is Player.PLAYER1
    assert clone.get_cell(9) is None
    assert clone.get_cell(11) is Player.PLAYER1
