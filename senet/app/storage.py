"""Persistance JSON d'une partie en cours."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from loguru import logger

STORE_VERSION = 1


class SnapshotStore:
    """Fichier JSON contenant le dernier snapshot du plateau.

    Format écrit : `{"version": 1, "board": <snapshot>, "settings": {...}}`.
    À la lecture, l'enveloppe `board` est optionnelle (un snapshot nu est
    accepté) et les clés inconnues sont ignorées. Un fichier illisible est
    journalisé puis traité comme « aucune partie sauvegardée ».
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def save(
        self,
        snapshot: Mapping[str, Any],
        *,
        settings: Mapping[str, Any] | None = None,
    ) -> None:
        payload: Dict[str, Any] = {"version": STORE_VERSION, "board": dict(snapshot)}
        if settings is not None:
            payload["settings"] = dict(settings)
        try:
            encoded = json.dumps(payload)
        except (TypeError, ValueError) as exc:
            logger.error(f"Impossible d'encoder l'état de la partie: {exc}")
            raise
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Écriture atomique: un crash ne laisse jamais un fichier tronqué.
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(encoded, encoding="utf-8")
        tmp_path.replace(self._path)
        logger.debug(f"Partie sauvegardée dans {self._path}")

    def load(self) -> Optional[Dict[str, Any]]:
        """Snapshot du plateau, ou None si rien d'exploitable n'est stocké."""

        payload = self._read_payload()
        if payload is None:
            return None
        board = payload.get("board", payload)
        if not isinstance(board, dict) or not board:
            logger.warning(f"Aucun plateau exploitable dans {self._path}")
            return None
        return board

    def load_settings(self) -> Optional[Dict[str, Any]]:
        payload = self._read_payload()
        if payload is None:
            return None
        settings = payload.get("settings")
        return settings if isinstance(settings, dict) else None

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()
            logger.debug(f"Sauvegarde supprimée: {self._path}")

    def _read_payload(self) -> Optional[Dict[str, Any]]:
        if not self._path.is_file():
            return None
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error(f"Lecture impossible de {self._path}: {exc}")
            return None
        if not content.strip():
            return None
        try:
            payload = json.loads(content)
        except ValueError as exc:
            logger.error(f"Sauvegarde corrompue ignorée ({self._path}): {exc}")
            return None
        if not isinstance(payload, dict):
            logger.error(f"Sauvegarde corrompue ignorée ({self._path}): objet JSON attendu")
            return None
        return payload


__all__ = ["STORE_VERSION", "SnapshotStore"]
