"""Tests for project persistence."""

import json

import pytest

from src.models.updates import update_land
from src.storage import InMemoryProjectStore, JsonFileProjectStore, ProjectNotFoundError


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryProjectStore()
    return JsonFileProjectStore(tmp_path / "projects")


class TestProjectStore:
    """Contract shared by both stores."""

    def test_save_then_load(self, store, default_state):
        project_id = store.save(default_state)

        assert project_id
        assert store.load(project_id) == default_state

    def test_update_keeps_id(self, store, default_state):
        project_id = store.save(default_state)
        changed = update_land(default_state, land_cost=2_000_000)

        assert store.save(changed, project_id=project_id) == project_id
        assert store.load(project_id).land_cost == 2_000_000

    def test_unknown_id(self, store):
        with pytest.raises(ProjectNotFoundError):
            store.load("does-not-exist")

    def test_not_found_is_key_error(self, store):
        with pytest.raises(KeyError):
            store.load("does-not-exist")

    def test_latest_empty(self, store):
        assert store.latest() is None

    def test_latest_single(self, store, default_state):
        project_id = store.save(default_state)

        latest_id, state = store.latest()
        assert latest_id == project_id
        assert state == default_state


class TestInMemoryStore:
    """Tests specific to the in-memory store."""

    def test_latest_is_last_saved(self, default_state):
        store = InMemoryProjectStore()
        first = store.save(default_state)
        second = store.save(update_land(default_state, land_cost=1))
        store.save(default_state, project_id=first)

        latest_id, _ = store.latest()
        assert latest_id == first
        assert second != first


class TestJsonFileStore:
    """Tests specific to the JSON file store."""

    def test_file_layout(self, tmp_path, default_state):
        store = JsonFileProjectStore(tmp_path)
        project_id = store.save(default_state, name="Main Street")

        record = json.loads((tmp_path / f"{project_id}.json").read_text())
        assert record["id"] == project_id
        assert record["name"] == "Main Street"
        assert "updated_at" in record
        assert record["data"]["land_cost"] == 1_500_000

    def test_latest_skips_unreadable_files(self, tmp_path, default_state):
        store = JsonFileProjectStore(tmp_path)
        project_id = store.save(default_state)
        (tmp_path / "broken.json").write_text("{not json")

        latest_id, _ = store.latest()
        assert latest_id == project_id

    def test_latest_missing_directory(self, tmp_path):
        assert JsonFileProjectStore(tmp_path / "nowhere").latest() is None

    def test_loads_camel_case_records(self, tmp_path):
        (tmp_path / "legacy.json").write_text(json.dumps({
            "id": "legacy",
            "name": "Old",
            "updated_at": "2024-01-01T00:00:00",
            "data": {"landCost": 750_000, "maxLtc": 60},
        }))

        state = JsonFileProjectStore(tmp_path).load("legacy")
        assert state.land_cost == 750_000
        assert state.max_ltc == 60
