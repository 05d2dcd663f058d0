"""Évènements publiés par la couche application (`senet.app`).

Les évènements transportent des valeurs (joueurs, coups, snapshots) plutôt
que le plateau mutable lui-même.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from senet.app.settings import GameMode
from senet.engine.actions import MoveInfo, MoveRejectReason
from senet.engine.state import Player
from senet.engine.sticks import StickThrow


@dataclass(frozen=True)
class GameStartedEvent:
    """Émis lorsqu'une partie est initialisée ou reprise."""

    snapshot: Dict[str, Any]
    resumed: bool = False


@dataclass(frozen=True)
class SticksThrownEvent:
    """Émis après chaque lancer."""

    player: Player
    throw: StickThrow
    legal_move_count: int


@dataclass(frozen=True)
class MoveAppliedEvent:
    """Émis après qu'un coup légal a été appliqué."""

    player: Player
    steps: int
    info: MoveInfo
    snapshot: Dict[str, Any]


@dataclass(frozen=True)
class MoveRejectedEvent:
    """Émis lorsqu'un coup proposé est refusé."""

    player: Player
    start: int
    steps: int
    reason: MoveRejectReason


@dataclass(frozen=True)
class TurnPassedEvent:
    """Émis quand un joueur n'a aucun coup légal; le trait a déjà changé."""

    player: Player
    steps: int
    next_player: Player


@dataclass(frozen=True)
class TurnChangedEvent:
    """Émis quand le trait passe (ou reste, sur tour supplémentaire)."""

    player: Player
    extra_turn: bool


@dataclass(frozen=True)
class GameEndedEvent:
    """Émis quand le plateau passe en fin de partie."""

    winner: Optional[Player]
    snapshot: Dict[str, Any]


@dataclass(frozen=True)
class ModeChangedEvent:
    """Émis quand le mode de jeu change (la partie est réinitialisée)."""

    mode: GameMode
