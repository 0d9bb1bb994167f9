"""SQLAlchemy-backed repositories for users, task lists and tasks."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from tasktracker.app.core.errors import RecordNotFoundError
from tasktracker.app.domain import Task, TaskList, User
from tasktracker.app.models import TaskListRow, TaskRow, UserRow
from tasktracker.ports.repository import ITaskListRepository, ITaskRepository, IUserRepository

logger = logging.getLogger(__name__)

# Reading a user always brings its task list and every task along
_USER_FULL_DEPTH = selectinload(UserRow.task_list).selectinload(TaskListRow.tasks)
_TASK_LIST_FULL_DEPTH = selectinload(TaskListRow.tasks)


class _SQLAlchemyRepository:
    entity = "row"

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def _delete_row(self, model, row_id: int) -> bool:
        try:
            result = self.session.execute(delete(model).where(model.id == row_id))
            if result.rowcount == 0:
                self.session.rollback()
                raise RecordNotFoundError(self.entity, row_id)
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self._commit()
        logger.info("deleted", extra={"entity": self.entity, "entity_id": row_id, "op": "delete"})
        return True


class SQLAlchemyUserRepository(_SQLAlchemyRepository, IUserRepository):
    entity = "User"

    def _query(self):
        return self.session.query(UserRow).options(_USER_FULL_DEPTH)

    def find_by_id(self, user_id: int) -> Optional[User]:
        row = self._query().filter(UserRow.id == user_id).first()
        if row is None:
            return None
        return User.model_validate(row)

    def find_all(self) -> List[User]:
        rows = self._query().order_by(UserRow.id).all()
        return [User.model_validate(row) for row in rows]

    def find_by_name(self, fragment: str) -> List[User]:
        rows = (
            self._query()
            .filter(UserRow.name.contains(fragment, autoescape=True))
            .order_by(UserRow.id)
            .all()
        )
        logger.debug("name search matched %d", len(rows), extra={"entity": self.entity, "op": "search"})
        return [User.model_validate(row) for row in rows]

    def save(self, user: User) -> User:
        row = UserRow(name=user.name, task_list=TaskListRow())
        self.session.add(row)
        self._commit()

        user.id = row.id
        user.task_list = TaskList.model_validate(row.task_list)
        logger.info(
            "created with task_list=%s",
            user.task_list.id,
            extra={"entity": self.entity, "entity_id": user.id, "op": "save"},
        )
        return user

    def update(self, user: User) -> User:
        row = self.session.get(UserRow, user.id)
        if row is None:
            raise RecordNotFoundError(self.entity, user.id)
        row.name = user.name
        self._commit()
        logger.info("renamed", extra={"entity": self.entity, "entity_id": user.id, "op": "update"})
        return user

    def delete(self, user_id: int) -> bool:
        return self._delete_row(UserRow, user_id)


class SQLAlchemyTaskListRepository(_SQLAlchemyRepository, ITaskListRepository):
    entity = "TaskList"

    def _query(self):
        return self.session.query(TaskListRow).options(_TASK_LIST_FULL_DEPTH)

    def find_by_id(self, task_list_id: int) -> Optional[TaskList]:
        row = self._query().filter(TaskListRow.id == task_list_id).first()
        if row is None:
            return None
        return TaskList.model_validate(row)

    def find_all(self) -> List[TaskList]:
        rows = self._query().order_by(TaskListRow.id).all()
        return [TaskList.model_validate(row) for row in rows]

    def find_by_user_id(self, user_id: int) -> Optional[TaskList]:
        row = self._query().filter(TaskListRow.user_id == user_id).first()
        if row is None:
            return None
        return TaskList.model_validate(row)

    def save(self, task_list: TaskList, user_id: int) -> TaskList:
        row = TaskListRow(user_id=user_id)
        self.session.add(row)
        self._commit()

        task_list.id = row.id
        logger.info(
            "created for user=%s",
            user_id,
            extra={"entity": self.entity, "entity_id": task_list.id, "op": "save"},
        )
        return task_list

    def update(self, task_list: TaskList) -> TaskList:
        # A list has no mutable attributes of its own; its tasks change
        # through the task repository.
        if self.session.get(TaskListRow, task_list.id) is None:
            raise RecordNotFoundError(self.entity, task_list.id)
        return task_list

    def delete(self, task_list_id: int) -> bool:
        return self._delete_row(TaskListRow, task_list_id)


class SQLAlchemyTaskRepository(_SQLAlchemyRepository, ITaskRepository):
    entity = "Task"

    def find_by_id(self, task_id: int) -> Optional[Task]:
        row = self.session.get(TaskRow, task_id)
        if row is None:
            return None
        return Task.model_validate(row)

    def find_all(self) -> List[Task]:
        rows = self.session.query(TaskRow).order_by(TaskRow.id).all()
        return [Task.model_validate(row) for row in rows]

    def find_by_task_list_id(self, task_list_id: int) -> List[Task]:
        rows = (
            self.session.query(TaskRow)
            .filter(TaskRow.task_list_id == task_list_id)
            .order_by(TaskRow.id)
            .all()
        )
        return [Task.model_validate(row) for row in rows]

    def save(self, task: Task, task_list_id: int) -> Task:
        row = TaskRow(
            description=task.description,
            finished=bool(task.finished),
            task_list_id=task_list_id,
        )
        self.session.add(row)
        self._commit()

        task.id = row.id
        logger.info(
            "created in task_list=%s",
            task_list_id,
            extra={"entity": self.entity, "entity_id": task.id, "op": "save"},
        )
        return task

    def update(self, task: Task) -> Task:
        row = self.session.get(TaskRow, task.id)
        if row is None:
            raise RecordNotFoundError(self.entity, task.id)
        row.description = task.description
        row.finished = task.finished
        self._commit()
        logger.info(
            "updated finished=%s",
            task.finished,
            extra={"entity": self.entity, "entity_id": task.id, "op": "update"},
        )
        return task

    def delete(self, task_id: int) -> bool:
        return self._delete_row(TaskRow, task_id)
