from __future__ import annotations

import json

import pytest

from src.flight_club.flight_club.storage.fields import camel_to_snake, from_mirror, snake_to_camel, to_mirror
from src.flight_club.flight_club.storage.local_backend import JsonFileKeyValueStore, LocalMirrorBackend, MemoryKeyValueStore
from src.flight_club.flight_club.storage.seed import ADMIN_ID, default_mirror_rows


def test_field_mapping():
    assert snake_to_camel("lead_instructor_id") == "leadInstructorId"
    assert camel_to_snake("noShowCount") == "no_show_count"
    assert snake_to_camel("id") == "id"
    row = {"time_start": "18:00", "attendance_marked": False}
    assert from_mirror(to_mirror(row)) == row


def test_rows_are_stored_camel_case_under_prefixed_key():
    store = MemoryKeyValueStore()
    mirror = LocalMirrorBackend(store)

    mirror.insert("schedule", {"id": "slot-1", "date": "2024-01-01", "time_start": "18:00", "lead_instructor_id": None})

    raw = json.loads(store.get("beit_halohem_schedule"))
    assert raw == [{"id": "slot-1", "date": "2024-01-01", "timeStart": "18:00", "leadInstructorId": None}]
    assert mirror.select("schedule", filters={"id": "slot-1"})[0]["time_start"] == "18:00"


def test_update_merges_and_unknown_id_returns_none():
    mirror = LocalMirrorBackend(MemoryKeyValueStore())
    mirror.insert("notices", {"id": "n-1", "content": "a", "created_by": "u", "created_at": "2024"})

    assert mirror.update("notices", "n-1", {"content": "b"}) == {
        "id": "n-1",
        "content": "b",
        "created_by": "u",
        "created_at": "2024",
    }
    assert mirror.update("notices", "missing", {"content": "c"}) is None
    assert mirror.delete("notices", "missing") is False
    assert mirror.delete("notices", "n-1") is True
    assert mirror.select("notices") == []


def test_unknown_columns_are_rejected():
    mirror = LocalMirrorBackend(MemoryKeyValueStore())
    with pytest.raises(KeyError):
        mirror.insert("notices", {"id": "n-1", "body": "x"})
    with pytest.raises(KeyError):
        mirror.select("nope")


def test_select_orders_descending():
    mirror = LocalMirrorBackend(MemoryKeyValueStore())
    for i, ts in enumerate(["2024-01-02", "2024-01-03", "2024-01-01"]):
        mirror.insert("logs", {"id": f"log-{i}", "action": "no_show", "timestamp": ts})

    rows = mirror.select("logs", order_by="timestamp", descending=True)
    assert [r["timestamp"] for r in rows] == ["2024-01-03", "2024-01-02", "2024-01-01"]


def test_initialize_seeds_only_missing_tables():
    mirror = LocalMirrorBackend(MemoryKeyValueStore())
    defaults = default_mirror_rows(admin_email="Admin@Club.Test", admin_password_hash="hash")

    mirror.initialize(defaults)
    mirror.delete("notices", "notice-1")
    mirror.initialize(defaults)

    [admin] = mirror.select("users")
    assert (admin["id"], admin["email"], admin["role"]) == (ADMIN_ID, "admin@club.test", "admin")
    assert mirror.select("notices") == []
    assert mirror.has_table("join_requests")


def test_json_file_store_survives_new_instance(tmp_path):
    LocalMirrorBackend(JsonFileKeyValueStore(tmp_path)).insert(
        "join_requests", {"id": "request-1", "name": "דנה", "status": "pending"}
    )

    again = LocalMirrorBackend(JsonFileKeyValueStore(tmp_path))
    assert again.select("join_requests")[0]["name"] == "דנה"
    assert (tmp_path / "beit_halohem_join_requests.json").exists()


def test_json_file_store_remove(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    store.set("k", "v")
    store.remove("k")
    store.remove("k")
    assert store.get("k") is None
