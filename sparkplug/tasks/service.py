"""Task list operations: add, edit, complete, remove."""

from __future__ import annotations

import random
from typing import Any, Iterable

from sparkplug.game.inventory import Inventory, grant_random_pieces
from sparkplug.tasks.model import Task, new_task_id

READ_ONLY_FIELDS = frozenset({"id", "done"})


class TaskList:
    """Ordered task collection, newest first."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self.tasks: list[Task] = list(tasks)

    def __iter__(self):
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def get(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(f"No task with id {task_id!r}")

    def quick_add(self, title: str, **attrs: Any) -> Task:
        """Add a task with default ratings and put it at the top of the list.

        Raises:
            ValueError: If the title is blank.
        """
        title = title.strip()
        if not title:
            raise ValueError("Task title cannot be blank")
        task = Task(id=new_task_id(), title=title, **attrs)
        self.tasks.insert(0, task)
        return task

    def update(self, task_id: str, **patch: Any) -> Task:
        """Apply an attribute patch to one task; ratings are clamped.

        Completion goes through toggle_done() and ids never change.

        Raises:
            ValueError: If the patch touches ``id`` or ``done``, or blanks the title.
        """
        locked = sorted(READ_ONLY_FIELDS & patch.keys())
        if locked:
            raise ValueError(f"Cannot edit {', '.join(locked)} with update()")
        if "title" in patch:
            patch["title"] = patch["title"].strip()
            if not patch["title"]:
                raise ValueError("Task title cannot be blank")
        updated = self.get(task_id).with_changes(**patch)
        self._replace(updated)
        return updated

    def remove(self, task_id: str) -> Task:
        task = self.get(task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        return task

    def toggle_done(
        self,
        task_id: str,
        inventory: Inventory,
        rng: random.Random | None = None,
        grant_min: int = 1,
        grant_max: int = 3,
    ) -> tuple[Inventory, list[str]]:
        """Flip a task's completion flag.

        Completing a task grants random pieces. Re-opening it keeps them.

        Returns:
            (updated_inventory, granted_kinds); granted is empty on re-open.
        """
        task = self.get(task_id)
        completing = not task.done
        granted: list[str] = []
        if completing:
            inventory, granted = grant_random_pieces(inventory, grant_min, grant_max, rng)
        self._replace(task.with_changes(done=completing))
        return inventory, granted

    def open_tasks(self) -> list[Task]:
        return [t for t in self.tasks if not t.done]

    def total_effort(self) -> float:
        """Sum of expected focus sessions across open tasks."""
        return sum(t.effort for t in self.open_tasks())

    def to_list(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self.tasks]

    def _replace(self, task: Task) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]
