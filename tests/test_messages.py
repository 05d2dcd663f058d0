"""Tests des textes affichés au joueur."""

from __future__ import annotations

import pytest

from senet.app.messages import (
    DEFAULT_REJECTION_TEXT,
    describe_pass,
    describe_rejection,
    describe_winner,
    player_symbol,
)
from senet.engine.actions import MoveRejectReason
from senet.engine.state import Player


@pytest.mark.parametrize(
    "reason",
    [reason for reason in MoveRejectReason if reason is not MoveRejectReason.INVALID_DEST],
)
def test_every_reason_has_specific_text(reason):
    assert describe_rejection(reason) != DEFAULT_REJECTION_TEXT


def test_invalid_destination_uses_generic_text():
    assert describe_rejection(MoveRejectReason.INVALID_DEST) == DEFAULT_REJECTION_TEXT


def test_exit_house_messages_name_the_house():
    text = describe_rejection(MoveRejectReason.NEED_TWO_FROM_29)
    assert text.startswith("Square 29 'House of Re-Atum': ")
    assert "throw of two" in text


class TestProtectedHouse:
    def test_prefixed_with_target_house(self):
        text = describe_rejection(MoveRejectReason.PROTECTED_HOUSE, raw_dest=15)
        assert text.startswith("Square 15 'House of Rebirth': ")

    def test_without_target_house(self):
        text = describe_rejection(MoveRejectReason.PROTECTED_HOUSE)
        assert text.startswith("that house is protected")

    def test_non_protected_target_has_no_prefix(self):
        text = describe_rejection(MoveRejectReason.PROTECTED_HOUSE, raw_dest=27)
        assert not text.startswith("Square")


def test_describe_pass():
    assert describe_pass(Player.PLAYER1, 3) == "Player ● has no legal moves with 3. Turn passes."


def test_describe_pass_with_prefix():
    text = describe_pass(Player.PLAYER2, 2, prefix="You cannot land on one of your own pieces.")
    assert text.startswith("You cannot land on one of your own pieces.\n\n")
    assert text.endswith("Player ○ has no legal moves with 2. Turn passes.")


def test_describe_winner():
    assert describe_winner(Player.PLAYER2) == f"Player {player_symbol(Player.PLAYER2)} wins!"
