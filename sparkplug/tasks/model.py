"""
Task and weight data models.

Attribute ranges:
  - impact, urgency, energy_fit, complexity: 0..5
  - effort: 1..8 (number of focus sessions the task is expected to take)

Values may be fractional. They are clamped into range whenever a task is
created or edited, so a stored task is always inside its bounds.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Mapping

ATTRIBUTE_RANGES: dict[str, tuple[int, int]] = {
    "impact": (0, 5),
    "urgency": (0, 5),
    "energy_fit": (0, 5),
    "complexity": (0, 5),
    "effort": (1, 8),
}

# Persisted field names from earlier data files.
_LEGACY_KEYS = {"energyFit": "energy_fit", "createdAt": "created_at"}


def new_task_id() -> str:
    return uuid.uuid4().hex[:8]


def clamp_attribute(name: str, value: float) -> float:
    lo, hi = ATTRIBUTE_RANGES[name]
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class Task:
    """A single task.

    Fields:
        id: Short random identifier.
        title: Single-line title.
        impact, urgency, energy_fit, complexity: 0..5 ratings.
        effort: Expected number of focus sessions, 1..8.
        tags: Free-form labels.
        done: Completion flag.
        created_at: Creation time in epoch milliseconds.
        notes: Optional free text.
    """

    id: str
    title: str
    impact: float = 3
    urgency: float = 3
    energy_fit: float = 3
    complexity: float = 2
    effort: float = 1
    tags: tuple[str, ...] = ()
    done: bool = False
    created_at: int = field(default_factory=lambda: int(time.time() * 1000))
    notes: str | None = None

    def __post_init__(self) -> None:
        for name in ATTRIBUTE_RANGES:
            object.__setattr__(self, name, clamp_attribute(name, getattr(self, name)))
        object.__setattr__(self, "tags", tuple(self.tags))

    def with_changes(self, **patch: Any) -> Task:
        """Return a copy with ``patch`` applied (attributes are clamped).

        Raises:
            TypeError: If a key is not a Task field.
        """
        return replace(self, **patch)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            key = _LEGACY_KEYS.get(key, key)
            if key in known:
                kwargs[key] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class Weights:
    """Per-attribute weights for task scoring. Any non-negative values; no sum constraint."""

    impact: float = 0.4
    urgency: float = 0.3
    energy_fit: float = 0.2
    complexity: float = 0.1

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"Weight {f.name!r} must be non-negative, got {value}")
            object.__setattr__(self, f.name, float(value))

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Weights:
        data = {_LEGACY_KEYS.get(k, k): v for k, v in (data or {}).items()}
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in known})


DEFAULT_WEIGHTS = Weights()
