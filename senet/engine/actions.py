"""Résultats de validation et descriptions de coups.

Une proposition de coup illégale n'est jamais une exception : `Board.can_move`
et `Board.move` renvoient un `MoveOutcome` qui porte soit un `MoveInfo`, soit
une `MoveRejectReason` énumérable que l'appelant traduit pour l'utilisateur.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MoveRejectReason(Enum):
    """Motifs de refus d'un coup, dans l'ordre d'évaluation des règles."""

    GAME_OVER = "game_over"
    NO_STEPS = "no_steps"
    INVALID_START = "invalid_start"
    NOT_YOUR_PIECE = "not_your_piece"
    WATER_WAIT = "water_wait"
    BLOCKED_BY_BARRIER = "blocked_by_barrier"
    NEED_THREE_FROM_28 = "need_three_from_28"
    NEED_TWO_FROM_29 = "need_two_from_29"
    NEED_ONE_FROM_30 = "need_one_from_30"
    CANNOT_JUMP_OVER_26 = "cannot_jump_over_26"
    CANNOT_EXIT_FROM_26 = "cannot_exit_from_26"
    CANNOT_EXIT_FROM_HERE = "cannot_exit_from_here"
    WATER_BLOCKED = "water_blocked"
    INVALID_DEST = "invalid_dest"
    PROTECTED_HOUSE = "protected_house"
    OWN_PIECE_BLOCK = "own_piece_block"
    PROTECTED_PIECE = "protected_piece"


@dataclass(frozen=True)
class MoveInfo:
    """Effet calculé d'un coup légal.

    Args:
        offboard: True si la pièce sort du plateau
        start: maison de départ
        destination: maison d'arrivée finale (None pour une sortie)
        capture: True si une pièce adverse est capturée
        captured_house: maison de la pièce capturée (égale à `destination`)
    """

    offboard: bool
    start: int
    destination: int | None = None
    capture: bool = False
    captured_house: int | None = None


@dataclass(frozen=True)
class MoveOutcome:
    """Résultat étiqueté: succès avec `info` ou refus avec `reason`."""

    info: MoveInfo | None = None
    reason: MoveRejectReason | None = None

    @classmethod
    def accept(cls, info: MoveInfo) -> "MoveOutcome":
        return cls(info=info)

    @classmethod
    def reject(cls, reason: MoveRejectReason) -> "MoveOutcome":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class LegalMove:
    """Coup légal proposé à l'interface ou à l'IA.

    Args:
        from_house: maison de départ
        to_house: maison d'arrivée (None si la pièce sort du plateau)
        offboard: True pour une sortie
    """

    from_house: int
    to_house: int | None
    offboard: bool = False


__all__ = ["MoveRejectReason", "MoveInfo", "MoveOutcome", "LegalMove"]
