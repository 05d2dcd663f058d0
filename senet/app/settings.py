"""Réglages de session: mode de jeu et siège de l'adversaire automatique."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from senet.ai.policies import Difficulty
from senet.engine.state import Player


class GameMode(Enum):
    """Modes de jeu, dans l'ordre de rotation."""

    HUMAN_VS_HUMAN = "human_vs_human"
    VS_AI_EASY = "vs_ai_easy"
    VS_AI_NORMAL = "vs_ai_normal"

    def next(self) -> "GameMode":
        modes = list(GameMode)
        return modes[(modes.index(self) + 1) % len(modes)]

    @classmethod
    def parse(cls, value: Any) -> "GameMode":
        """Mode correspondant à `value`, ou HUMAN_VS_HUMAN si inconnu."""

        if isinstance(value, GameMode):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.HUMAN_VS_HUMAN

    @property
    def difficulty(self) -> Optional[Difficulty]:
        return _MODE_DIFFICULTY.get(self)


_MODE_DIFFICULTY: Dict[GameMode, Difficulty] = {
    GameMode.VS_AI_EASY: Difficulty.EASY,
    GameMode.VS_AI_NORMAL: Difficulty.NORMAL,
}


@dataclass(frozen=True)
class GameSettings:
    """Options d'une session.

    Args:
        mode: mode de jeu courant
        ai_player: siège occupé par l'ordinateur dans les modes contre l'IA
    """

    mode: GameMode = GameMode.HUMAN_VS_HUMAN
    ai_player: Player = Player.PLAYER2

    @property
    def difficulty(self) -> Optional[Difficulty]:
        return self.mode.difficulty

    @property
    def has_ai(self) -> bool:
        return self.difficulty is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "GameSettings":
        if not data:
            return cls()
        try:
            ai_player = Player(int(data.get("ai_player", Player.PLAYER2.value)))
        except (TypeError, ValueError):
            ai_player = Player.PLAYER2
        return cls(mode=GameMode.parse(data.get("game_mode")), ai_player=ai_player)

    def to_mapping(self) -> Dict[str, Any]:
        return {"game_mode": self.mode.value, "ai_player": self.ai_player.value}


__all__ = ["GameMode", "GameSettings"]
