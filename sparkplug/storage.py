"""
Persistence of the app data (tasks, weights, rewards, logs, inventory,
timer settings) as a single pretty-printed JSON document.

In-progress games are never stored; only the inventory they draw from is.
"""

from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field
from typing import Any

from sparkplug.focus import Rewards, SessionLog, TimerSettings
from sparkplug.game.inventory import Inventory
from sparkplug.tasks.model import Task, Weights
from sparkplug.tasks.service import TaskList


class StorageError(Exception):
    """Raised when the data file exists but cannot be parsed."""


@dataclass
class AppData:
    tasks: TaskList = field(default_factory=TaskList)
    weights: Weights = field(default_factory=Weights)
    rewards: Rewards = field(default_factory=Rewards)
    logs: list[SessionLog] = field(default_factory=list)
    inventory: Inventory = field(default_factory=Inventory.empty)
    timer: TimerSettings = field(default_factory=TimerSettings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": self.tasks.to_list(),
            "weights": self.weights.to_dict(),
            "rewards": self.rewards.to_dict(),
            "logs": [log.to_dict() for log in self.logs],
            "inventory": self.inventory.to_dict(),
            "timer": self.timer.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        default_weights: Weights | None = None,
        default_timer: TimerSettings | None = None,
    ) -> AppData:
        weights = data.get("weights")
        timer = data.get("timer")
        return cls(
            tasks=TaskList(Task.from_dict(t) for t in data.get("tasks", [])),
            weights=Weights.from_dict(weights) if weights else (default_weights or Weights()),
            rewards=Rewards.from_dict(data.get("rewards")),
            logs=[SessionLog.from_dict(log) for log in data.get("logs", [])],
            inventory=Inventory.from_dict(data.get("inventory")),
            timer=TimerSettings.from_dict(timer) if timer else (default_timer or TimerSettings()),
        )


class Storage:
    """Load and save AppData at a fixed path."""

    def __init__(self, path: str | pathlib.Path) -> None:
        self.path = pathlib.Path(path)

    def load(
        self,
        default_weights: Weights | None = None,
        default_timer: TimerSettings | None = None,
    ) -> AppData:
        """Read the data file. A missing file yields defaults.

        ``default_weights`` and ``default_timer`` stand in for sections the
        file does not have yet.

        Raises:
            StorageError: If the file is not valid JSON or has bad values.
        """
        if not self.path.exists():
            return AppData(
                weights=default_weights or Weights(),
                timer=default_timer or TimerSettings(),
            )
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise StorageError(f"{self.path}: expected a JSON object")
            return AppData.from_dict(data, default_weights, default_timer)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise StorageError(f"{self.path}: {e}") from e

    def save(self, data: AppData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data.to_dict(), f, indent=4)
        tmp.replace(self.path)
