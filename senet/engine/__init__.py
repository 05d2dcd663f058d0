"""Moteur de règles Senet: plateau, lancer, validation et sérialisation."""

from . import rules  # re-export for convenience
from .actions import LegalMove, MoveInfo, MoveOutcome, MoveRejectReason
from .state import Board, Player
from .sticks import StickThrow, random_binary_source, throw_sticks

__all__ = [
    "rules",
    "Board",
    "Player",
    "LegalMove",
    "MoveInfo",
    "MoveOutcome",
    "MoveRejectReason",
    "StickThrow",
    "random_binary_source",
    "throw_sticks",
]
