"""Tests de l'application des coups : capture, eau, sortie et victoire."""

from __future__ import annotations

from senet.engine.actions import MoveRejectReason
from senet.engine.rules import PIECES_PER_PLAYER
from senet.engine.state import Board, Player


def _assert_conserved(board: Board) -> None:
    for player in Player:
        on_board = len(board.pieces_on_board(player))
        assert on_board + board.get_pieces_off(player) == PIECES_PER_PLAYER


class TestCapture:
    def test_capture_swaps_pieces(self):
        board = Board.from_layout(player1=(5,), player2=(7,))

        outcome = board.move(5, 2)

        assert outcome.ok
        assert outcome.info.capture
        assert board.get_cell(7) is Player.PLAYER1
        assert board.get_cell(5) is Player.PLAYER2
        _assert_conserved(board)

    def test_opening_capture(self):
        board = Board()
        board.move(1, 1)
        assert board.get_cell(1) is Player.PLAYER2
        assert board.get_cell(2) is Player.PLAYER1


class TestSimpleMove:
    def test_move_to_empty_house(self):
        board = Board()
        outcome = board.move(9, 2)

        assert outcome.ok
        assert board.get_cell(9) is None
        assert board.get_cell(11) is Player.PLAYER1
        assert board.current_player is Player.PLAYER1

    def test_rejected_move_leaves_board_untouched(self):
        board = Board()
        before = board.copy()

        outcome = board.move(1, 2)

        assert outcome.reason is MoveRejectReason.OWN_PIECE_BLOCK
        assert board == before


class TestWaterTrigger:
    def test_waiting_piece_moves_to_rebirth_once_free(self):
        board = Board.from_layout(
            player1=(27,), player2=(15,), current_player=Player.PLAYER2
        )

        board.move(15, 2)

        assert board.get_cell(17) is Player.PLAYER2
        assert board.get_cell(15) is Player.PLAYER1
        assert board.get_cell(27) is None
        _assert_conserved(board)

    def test_piece_stays_in_water_while_rebirth_taken(self):
        board = Board.from_layout(player1=(23,), player2=(15,))

        board.move(23, 4)

        assert board.get_cell(27) is Player.PLAYER1
        assert board.get_cell(15) is Player.PLAYER2

    def test_fall_into_water_lands_on_free_rebirth(self):
        board = Board.from_layout(player1=(23,), player2=(1,))

        board.move(23, 4)

        assert board.get_cell(15) is Player.PLAYER1
        assert board.get_cell(27) is None


class TestVictory:
    def test_last_piece_off_wins(self):
        board = Board.from_layout(player1=(30,), player2=(1, 2))

        outcome = board.move(30, 1)

        assert outcome.ok and outcome.info.offboard
        assert board.get_pieces_off(Player.PLAYER1) == PIECES_PER_PLAYER
        assert board.is_game_over()
        assert board.winner is Player.PLAYER1

    def test_exit_without_victory(self):
        board = Board.from_layout(player1=(28, 12), player2=(1,))

        board.move(28, 3)

        assert board.get_pieces_off(Player.PLAYER1) == 4
        assert not board.is_game_over()
        assert board.winner is None

    def test_no_mutation_after_game_over(self):
        board = Board.from_layout(player1=(30,), player2=(1, 2))
        board.move(30, 1)
        board.switch_player()
        frozen_cells = list(board.cells)

        outcome = board.move(1, 2)

        assert outcome.reason is MoveRejectReason.GAME_OVER
        assert board.cells == frozen_cells
