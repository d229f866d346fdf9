"""Tests for application wiring."""

from decimal import Decimal

import pytest

from taskbudget.config import Settings, StorageSettings
from taskbudget.models import AppData, Month
from taskbudget.orchestrator import build_store, create_app_components, current_month_summary
from taskbudget.repository import DEFAULT_DATA_KEY
from taskbudget.services.storage import InMemoryStore, JsonFileStore
from tests.conftest import fixed_clock


class TestBuildStore:
    """Tests for backend selection."""

    def test_memory_backend(self):
        assert isinstance(build_store(StorageSettings(_env_file=None, backend="memory")), InMemoryStore)

    def test_file_backend(self, tmp_path):
        store = build_store(StorageSettings(_env_file=None, backend="file", data_dir=str(tmp_path)))
        assert isinstance(store, JsonFileStore)
        assert store.path_for("data") == tmp_path / "data.json"


class TestCreateAppComponents:
    """Tests for create_app_components."""

    def test_empty_store_is_seeded(self, monkeypatch):
        monkeypatch.setenv("TASKBUDGET_STORAGE_BACKEND", "memory")
        components = create_app_components(clock=fixed_clock)
        assert components.loaded_saved_data is False
        assert isinstance(components.store, InMemoryStore)
        assert len(components.repository.tasks) == 3
        assert components.view_preferences.load_active_view() == "dashboard"

    def test_injected_store_with_saved_data(self):
        store = InMemoryStore()
        store.save(DEFAULT_DATA_KEY, AppData().to_snapshot())
        components = create_app_components(settings=Settings(), store=store, clock=fixed_clock)
        assert components.loaded_saved_data is True
        assert components.repository.tasks == ()

    def test_clock_none_uses_wall_clock(self, monkeypatch):
        monkeypatch.setenv("TASKBUDGET_STORAGE_BACKEND", "memory")
        components = create_app_components(clock=None)
        assert components.loaded_saved_data is False
        assert len(components.repository.goals) == 1

    def test_file_backend_persists_between_runs(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TASKBUDGET_STORAGE_BACKEND", "file")
        monkeypatch.setenv("TASKBUDGET_STORAGE_DATA_DIR", str(tmp_path))

        first = create_app_components(clock=fixed_clock)
        first.repository.delete_task("task1")
        first.view_preferences.save_active_view("goals")

        second = create_app_components(clock=fixed_clock)
        assert second.loaded_saved_data is True
        assert [t.id for t in second.repository.tasks] == ["task2", "task3"]
        assert second.view_preferences.load_active_view() == "goals"
        assert (tmp_path / "budget-task-app-data.json").exists()

    def test_current_month_summary(self, monkeypatch):
        monkeypatch.setenv("TASKBUDGET_STORAGE_BACKEND", "memory")
        components = create_app_components(clock=fixed_clock)
        summary = current_month_summary(components.repository, clock=fixed_clock)
        assert summary.month == Month.JUNE
        assert summary.year == 2024
        assert summary.net_balance == Decimal("2474.02")
        assert summary.goal_progress == 82


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
