"""Services d'application pour orchestrer une partie de Senet."""

from .event_bus import EventBus
from .events import (
    GameEndedEvent,
    GameStartedEvent,
    ModeChangedEvent,
    MoveAppliedEvent,
    MoveRejectedEvent,
    SticksThrownEvent,
    TurnChangedEvent,
    TurnPassedEvent,
)
from .game_service import GameService, TurnError
from .settings import GameMode, GameSettings
from .storage import SnapshotStore

__all__ = [
    "EventBus",
    "GameService",
    "TurnError",
    "GameMode",
    "GameSettings",
    "SnapshotStore",
    "GameStartedEvent",
    "SticksThrownEvent",
    "MoveAppliedEvent",
    "MoveRejectedEvent",
    "TurnPassedEvent",
    "TurnChangedEvent",
    "GameEndedEvent",
    "ModeChangedEvent",
]
