"""Tasks: data model, priority scoring, and the task list."""

from sparkplug.tasks.model import Task, Weights, DEFAULT_WEIGHTS
from sparkplug.tasks.scoring import task_score, rank_tasks, best_next_task
from sparkplug.tasks.service import TaskList

__all__ = [
    "Task",
    "Weights",
    "DEFAULT_WEIGHTS",
    "task_score",
    "rank_tasks",
    "best_next_task",
    "TaskList",
]
