"""Outils de sérialisation pour Board.

Conformité minimale :
- Snapshot JSON-friendly (listes/dicts primitifs)
- Tolérance aux anciennes versions (champs absents → valeurs sûres)
- Tolérance aux versions plus récentes (champs inconnus ignorés)
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from senet.engine.rules import BOARD_HOUSES, PIECES_PER_PLAYER
from senet.engine.sticks import BinarySource
from senet.engine.state import Board, Cell, Player, opening_cells

SCHEMA_VERSION = 4
# Les sauvegardes antérieures n'ont pas de champ de version.
LEGACY_SCHEMA_VERSION = 3


def board_to_snapshot(board: Board) -> Dict[str, Any]:
    """Convertit un Board en snapshot JSON-friendly."""

    return {
        "schema_version": SCHEMA_VERSION,
        "cells": [_cell_to_int(cell) for cell in board.cells],
        "current_player": board.current_player.value,
        "winner": board.winner.value if board.winner is not None else None,
        "game_over": board.game_over,
        "pieces_off": {str(player.value): board.pieces_off.get(player, 0) for player in Player},
        "last_roll": board.last_roll,
        "last_extra_turn": board.last_extra_turn,
    }


def snapshot_to_board(
    snapshot: Mapping[str, Any],
    *,
    binary_source: BinarySource | None = None,
) -> Board:
    """Reconstruit un Board à partir d'un snapshot.

    Raises:
        ValueError: snapshot structurellement impossible (nombre de maisons,
            occupant inconnu, dérive du nombre de pièces)
    """

    cells = _deserialize_cells(snapshot.get("cells"))
    pieces_off = _deserialize_pieces_off(snapshot.get("pieces_off"))

    for player in Player:
        on_board = sum(1 for cell in cells if cell is player)
        if on_board + pieces_off[player] != PIECES_PER_PLAYER:
            raise ValueError(
                f"Snapshot incohérent: {player.name} a {on_board} pièce(s) en jeu "
                f"et {pieces_off[player]} sortie(s)"
            )

    current_player = _parse_player(snapshot.get("current_player")) or Player.PLAYER1

    # La victoire n'est retenue que si le vainqueur a réellement tout sorti.
    winner = _parse_player(snapshot.get("winner"))
    if winner is None or pieces_off[winner] < PIECES_PER_PLAYER:
        winner = next(
            (player for player in Player if pieces_off[player] >= PIECES_PER_PLAYER),
            None,
        )

    last_roll = snapshot.get("last_roll")
    # Les sauvegardes héritées nomment le tour supplémentaire `last_extra`.
    legacy = snapshot_version(snapshot) <= LEGACY_SCHEMA_VERSION
    extra_key = "last_extra" if legacy else "last_extra_turn"
    last_extra = snapshot.get(extra_key, snapshot.get("last_extra_turn", False))

    board = Board(
        cells=cells,
        current_player=current_player,
        pieces_off=pieces_off,
        game_over=winner is not None,
        winner=winner,
        last_roll=int(last_roll) if last_roll is not None else None,
        last_extra_turn=bool(last_extra),
    )
    if binary_source is not None:
        board.binary_source = binary_source
    return board


def snapshot_version(snapshot: Mapping[str, Any]) -> int:
    """Version déclarée d'un snapshot (version héritée si absente)."""

    version = snapshot.get("schema_version")
    return int(version) if version is not None else LEGACY_SCHEMA_VERSION


def _cell_to_int(cell: Cell) -> int:
    return cell.value if cell is not None else 0


def _deserialize_cells(payload: Any) -> List[Cell]:
    if payload is None:
        return opening_cells()
    values = list(payload)
    if len(values) != BOARD_HOUSES:
        raise ValueError(f"Snapshot invalide: {len(values)} maisons au lieu de {BOARD_HOUSES}")
    cells: List[Cell] = []
    for value in values:
        if value in (0, None):
            cells.append(None)
            continue
        player = _parse_player(value)
        if player is None:
            raise ValueError(f"Occupant inconnu dans le snapshot: {value!r}")
        cells.append(player)
    return cells


def _deserialize_pieces_off(payload: Any) -> Dict[Player, int]:
    pieces_off = {player: 0 for player in Player}
    if not payload:
        return pieces_off
    # Les clés deviennent des chaînes après un aller-retour JSON.
    items = payload.items() if isinstance(payload, Mapping) else enumerate(payload, start=1)
    for key, value in items:
        player = _parse_player(key)
        if player is not None:
            pieces_off[player] = int(value or 0)
    return pieces_off


def _parse_player(value: Any) -> Player | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Player):
        return value
    try:
        return Player(int(value))
    except (TypeError, ValueError):
        return None


__all__ = [
    "SCHEMA_VERSION",
    "LEGACY_SCHEMA_VERSION",
    "board_to_snapshot",
    "snapshot_to_board",
    "snapshot_version",
]
