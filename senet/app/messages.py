"""Textes destinés au joueur (refus de coup, passage de tour, victoire).

Le moteur ne produit que des motifs (`MoveRejectReason`) ; la traduction en
phrases est faite ici, côté application.
"""

from __future__ import annotations

from typing import Dict, Optional

from senet.engine.actions import MoveRejectReason
from senet.engine.rules import (
    FINAL_HOUSE,
    HOUSE_OF_HAPPINESS,
    HOUSE_OF_RE_ATUM,
    HOUSE_OF_REBIRTH,
    HOUSE_OF_THREE_TRUTHS,
    HOUSE_OF_WATER,
    HOUSE_NAMES,
)
from senet.engine.state import Player

PLAYER_SYMBOLS: Dict[Player, str] = {Player.PLAYER1: "●", Player.PLAYER2: "○"}

GAME_OVER_TEXT = "Game is over. Start a new game to play again."
ROLL_PENDING_TEXT = "You must move a piece before throwing again."
THROW_FIRST_TEXT = "Throw the sticks first."
NOT_YOUR_TURN_TEXT = "It is the computer's turn."
DEFAULT_REJECTION_TEXT = "That move is not allowed."


def _house_prefix(house: int) -> str:
    return f"Square {house} '{HOUSE_NAMES[house]}': "


_REJECTION_TEXTS: Dict[MoveRejectReason, str] = {
    MoveRejectReason.GAME_OVER: GAME_OVER_TEXT,
    MoveRejectReason.NO_STEPS: THROW_FIRST_TEXT,
    MoveRejectReason.INVALID_START: "You must select one of your own pieces.",
    MoveRejectReason.NOT_YOUR_PIECE: "That is not your piece.",
    MoveRejectReason.WATER_WAIT: _house_prefix(HOUSE_OF_WATER)
    + "your piece must wait here until the House of Rebirth is free.",
    MoveRejectReason.BLOCKED_BY_BARRIER: "You cannot jump over a row of three or more of your opponent's pieces.",
    MoveRejectReason.NEED_THREE_FROM_28: _house_prefix(HOUSE_OF_THREE_TRUTHS)
    + "from here you may only leave the board with a throw of three.",
    MoveRejectReason.NEED_TWO_FROM_29: _house_prefix(HOUSE_OF_RE_ATUM)
    + "from here you may only leave the board with a throw of two.",
    MoveRejectReason.NEED_ONE_FROM_30: _house_prefix(FINAL_HOUSE)
    + "from here you may only leave the board with a throw of one.",
    MoveRejectReason.CANNOT_JUMP_OVER_26: _house_prefix(HOUSE_OF_HAPPINESS)
    + "you must pass through this house before reaching the final row (28–30); "
    "you cannot jump directly beyond it (except when falling into the House of Water).",
    MoveRejectReason.CANNOT_EXIT_FROM_26: _house_prefix(HOUSE_OF_HAPPINESS)
    + "from here you may only move to houses 27–30 with rolls 1–4; you cannot leave the board directly.",
    MoveRejectReason.CANNOT_EXIT_FROM_HERE: "You cannot leave the board from this house with that roll.",
    MoveRejectReason.WATER_BLOCKED: _house_prefix(HOUSE_OF_WATER)
    + "you cannot move into the water because the House of Rebirth is blocked "
    "and the water is already occupied.",
    MoveRejectReason.OWN_PIECE_BLOCK: "You cannot land on one of your own pieces.",
    MoveRejectReason.PROTECTED_PIECE: "You cannot capture that piece because it is protected by another piece next to it.",
}

_PROTECTED_HOUSE_TEXT = "that house is protected; you cannot land on it while another piece is there."
_PREFIXED_HOUSES = (HOUSE_OF_REBIRTH, HOUSE_OF_HAPPINESS, HOUSE_OF_THREE_TRUTHS, HOUSE_OF_RE_ATUM, FINAL_HOUSE)


def player_symbol(player: Player) -> str:
    return PLAYER_SYMBOLS[player]


def describe_rejection(reason: MoveRejectReason, *, raw_dest: Optional[int] = None) -> str:
    """Phrase expliquant un refus de coup.

    Args:
        reason: motif retourné par `Board.can_move`
        raw_dest: maison visée (départ + lancer), utilisée pour nommer la
            maison protégée

    Returns:
        Texte prêt à afficher
    """

    if reason is MoveRejectReason.PROTECTED_HOUSE:
        prefix = _house_prefix(raw_dest) if raw_dest in _PREFIXED_HOUSES else ""
        return prefix + _PROTECTED_HOUSE_TEXT
    return _REJECTION_TEXTS.get(reason, DEFAULT_REJECTION_TEXT)


def describe_pass(player: Player, steps: int, *, prefix: Optional[str] = None) -> str:
    text = f"Player {player_symbol(player)} has no legal moves with {steps}. Turn passes."
    if prefix:
        return f"{prefix}\n\n{text}"
    return text


def describe_winner(player: Player) -> str:
    return f"Player {player_symbol(player)} wins!"


__all__ = [
    "PLAYER_SYMBOLS",
    "GAME_OVER_TEXT",
    "ROLL_PENDING_TEXT",
    "THROW_FIRST_TEXT",
    "NOT_YOUR_TURN_TEXT",
    "DEFAULT_REJECTION_TEXT",
    "player_symbol",
    "describe_rejection",
    "describe_pass",
    "describe_winner",
]
