import json

import pytest

from sparkplug.focus import Rewards, TimerSettings
from sparkplug.game.inventory import Inventory
from sparkplug.storage import AppData, Storage, StorageError
from sparkplug.tasks.model import Weights


def test_missing_file_gives_defaults(tmp_path):
    data = Storage(tmp_path / "none.json").load(default_weights=Weights(impact=1.0))
    assert len(data.tasks) == 0
    assert data.weights.impact == 1.0
    assert data.inventory == Inventory.empty()


def test_save_then_load(tmp_path):
    storage = Storage(tmp_path / "sub" / "data.json")
    data = AppData()
    task = data.tasks.quick_add("Plan week", tags=("home",))
    data.inventory = Inventory({"T": 2})
    data.rewards = Rewards(coins=20, streak=2, last_day="2026-10-19")
    storage.save(data)

    loaded = storage.load()
    assert loaded.tasks.get(task.id) == task
    assert loaded.inventory.count("T") == 2
    assert loaded.rewards == data.rewards


def test_reads_camel_case_keys(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({
        "tasks": [{
            "id": "a1", "title": "Old", "impact": 4, "urgency": 2, "energyFit": 5,
            "complexity": 1, "effort": 2, "tags": [], "done": False, "createdAt": 1,
        }],
        "weights": {"impact": 0.5, "urgency": 0.2, "energyFit": 0.2, "complexity": 0.1},
        "rewards": {"coins": 30, "streak": 1, "lastDay": "2026-10-01"},
    }))
    data = Storage(path).load()
    task = data.tasks.get("a1")
    assert task.energy_fit == 5
    assert task.created_at == 1
    assert data.weights.impact == 0.5
    assert data.rewards.last_day == "2026-10-01"


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json")
    with pytest.raises(StorageError):
        Storage(path).load()


def test_negative_inventory_in_file_raises(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"inventory": {"I": -3}}))
    with pytest.raises(StorageError):
        Storage(path).load()


def test_missing_file_takes_default_timer(tmp_path):
    data = Storage(tmp_path / "none.json").load(default_timer=TimerSettings(focus_len=50))
    assert data.timer.focus_len == 50
    assert data.timer.break_len == 5


def test_saved_timer_wins_over_default(tmp_path):
    storage = Storage(tmp_path / "data.json")
    data = AppData(timer=TimerSettings(focus_len=40))
    storage.save(data)
    loaded = storage.load(default_timer=TimerSettings(focus_len=50))
    assert loaded.timer.focus_len == 40
