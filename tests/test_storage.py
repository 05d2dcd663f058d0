"""Tests de la persistance JSON (`SnapshotStore`)."""

from __future__ import annotations

import json

from senet.app.storage import STORE_VERSION, SnapshotStore
from senet.engine.state import Board


def test_missing_file_means_no_saved_game(tmp_path):
    store = SnapshotStore(tmp_path / "senet.json")
    assert not store.exists()
    assert store.load() is None
    assert store.load_settings() is None


def test_save_then_load(tmp_path):
    store = SnapshotStore(tmp_path / "nested" / "senet.json")
    board = Board()
    board.move(9, 2)

    store.save(board.serialize(), settings={"game_mode": "vs_ai_easy", "ai_player": 2})

    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload["version"] == STORE_VERSION
    assert store.load() == board.serialize()
    assert store.load_settings() == {"game_mode": "vs_ai_easy", "ai_player": 2}


def test_nested_legacy_payload(tmp_path):
    path = tmp_path / "senet.json"
    snapshot = Board().serialize()
    path.write_text(json.dumps({"version": 3, "board": snapshot}), encoding="utf-8")

    assert SnapshotStore(path).load() == snapshot


def test_bare_snapshot_payload(tmp_path):
    path = tmp_path / "senet.json"
    snapshot = Board().serialize()
    path.write_text(json.dumps(snapshot), encoding="utf-8")

    assert SnapshotStore(path).load() == snapshot


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "senet.json"
    path.write_text("{not json", encoding="utf-8")
    assert SnapshotStore(path).load() is None


def test_non_object_payload_is_ignored(tmp_path):
    path = tmp_path / "senet.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert SnapshotStore(path).load() is None


def test_empty_file_is_ignored(tmp_path):
    path = tmp_path / "senet.json"
    path.write_text("", encoding="utf-8")
    assert SnapshotStore(path).load() is None


def test_clear(tmp_path):
    store = SnapshotStore(tmp_path / "senet.json")
    store.save(Board().serialize())
    store.clear()
    assert not store.exists()
    store.clear()
