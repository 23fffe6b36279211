"""
Task priority scoring.

Each of impact, urgency, energy fit, and complexity is normalized to [0, 1]
by dividing by its maximum. Effort adds a small penalty that grows with
the number of focus sessions, nudging users to split big tasks.

    score = w.impact * impact + w.urgency * urgency + w.energy_fit * fit
            - w.complexity * complexity - effort_penalty

floored at 0. The function is pure: no randomness and no hidden state.
"""

from __future__ import annotations

from typing import Iterable

from sparkplug.tasks.model import ATTRIBUTE_RANGES, DEFAULT_WEIGHTS, Task, Weights

EFFORT_PENALTY = 0.1


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def _normalized(task: Task, name: str) -> float:
    return clamp01(getattr(task, name) / ATTRIBUTE_RANGES[name][1])


def effort_penalty(effort: float) -> float:
    """Penalty in [0, EFFORT_PENALTY]; zero for single-session tasks."""
    lo, hi = ATTRIBUTE_RANGES["effort"]
    return clamp01((effort - lo) / (hi - lo)) * EFFORT_PENALTY


def task_score(task: Task, weights: Weights = DEFAULT_WEIGHTS) -> float:
    """Priority score of ``task`` under ``weights``; always >= 0."""
    raw = (
        weights.impact * _normalized(task, "impact")
        + weights.urgency * _normalized(task, "urgency")
        + weights.energy_fit * _normalized(task, "energy_fit")
        - weights.complexity * _normalized(task, "complexity")
        - effort_penalty(task.effort)
    )
    return max(0.0, raw)


def rank_tasks(tasks: Iterable[Task], weights: Weights = DEFAULT_WEIGHTS) -> list[tuple[Task, float]]:
    """Pair each task with its score, highest first.

    The sort is stable, so equal scores keep their input order.
    """
    scored = [(task, task_score(task, weights)) for task in tasks]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def best_next_task(tasks: Iterable[Task], weights: Weights = DEFAULT_WEIGHTS) -> Task | None:
    """Highest-scoring open task, or None when everything is done."""
    ranked = rank_tasks((t for t in tasks if not t.done), weights)
    return ranked[0][0] if ranked else None
