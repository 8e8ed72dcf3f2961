"""Task domain service."""

from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from admindash.domain.entities import Task, TaskPriority
from admindash.domain.errors import NotFoundError, ValidationError, task_not_found
from admindash.utils.ids import next_sequential_id

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore


class TaskService:
    """Service for the dashboard's to-do list."""

    def __init__(self, store: "EntityStore"):
        self.store = store

    def list_tasks(self, include_completed: bool = True) -> list[Task]:
        return [t for t in self.store.tasks if include_completed or not t.completed]

    def get_task(self, task_id: int) -> Optional[Task]:
        for task in self.store.tasks:
            if task.id == task_id:
                return task
        return None

    def add_task(
        self,
        title: str,
        due_date: datetime,
        description: str = "",
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> Task:
        """Append a new, incomplete task.

        Raises:
            ValidationError: If title is blank
        """
        if not title.strip():
            raise ValidationError("Task title is required")

        task = Task(
            id=next_sequential_id(t.id for t in self.store.tasks),
            title=title.strip(),
            description=description,
            due_date=due_date,
            priority=TaskPriority(priority),
            completed=False,
        )
        self.store.tasks = self.store.tasks + (task,)
        return task

    def toggle_task(self, task_id: int) -> Task:
        """Flip a task's completed flag.

        Raises:
            NotFoundError: If task not found
        """
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(task_not_found(task_id))
        toggled = replace(task, completed=not task.completed)
        self.store.tasks = tuple(toggled if t.id == task_id else t for t in self.store.tasks)
        return toggled
