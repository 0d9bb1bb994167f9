"""Port interfaces for user, task list and task persistence (repository boundary)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from tasktracker.app.domain import Task, TaskList, User


@runtime_checkable
class IUserRepository(Protocol):
    """User persistence; reads return the user with its task list and tasks."""

    def find_by_id(self, user_id: int) -> Optional[User]:
        """Return a user by id or None when missing."""

    def find_all(self) -> list[User]:
        """Return every user."""

    def find_by_name(self, fragment: str) -> list[User]:
        """Return users whose name contains ``fragment``."""

    def save(self, user: User) -> User:
        """Insert a user together with an empty task list."""

    def update(self, user: User) -> User:
        """Persist the user's name."""

    def delete(self, user_id: int) -> bool:
        """Delete the user row; dependents are not cascaded."""


@runtime_checkable
class ITaskListRepository(Protocol):
    """Task list persistence; reads return the list with all of its tasks."""

    def find_by_id(self, task_list_id: int) -> Optional[TaskList]:
        """Return a task list by id or None when missing."""

    def find_all(self) -> list[TaskList]:
        """Return every task list."""

    def find_by_user_id(self, user_id: int) -> Optional[TaskList]:
        """Return the task list owned by ``user_id`` or None."""

    def save(self, task_list: TaskList, user_id: int) -> TaskList:
        """Insert a task list for ``user_id``."""

    def update(self, task_list: TaskList) -> TaskList:
        """No list-owned field is mutable; only checks the row exists."""

    def delete(self, task_list_id: int) -> bool:
        """Delete the task list row; dependents are not cascaded."""


@runtime_checkable
class ITaskRepository(Protocol):
    """Task persistence."""

    def find_by_id(self, task_id: int) -> Optional[Task]:
        """Return a task by id or None when missing."""

    def find_all(self) -> list[Task]:
        """Return every task."""

    def find_by_task_list_id(self, task_list_id: int) -> list[Task]:
        """Return the tasks of a list in insertion order."""

    def save(self, task: Task, task_list_id: int) -> Task:
        """Insert a task into an existing task list."""

    def update(self, task: Task) -> Task:
        """Persist description and finished state."""

    def delete(self, task_id: int) -> bool:
        """Delete the task row."""
