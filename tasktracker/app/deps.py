"""Dependency providers wiring the repository ports to their SQL adapters."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from tasktracker.adapters.repo_sql import (
    SQLAlchemyTaskListRepository,
    SQLAlchemyTaskRepository,
    SQLAlchemyUserRepository,
)
from tasktracker.app.db import get_db
from tasktracker.ports.repository import ITaskListRepository, ITaskRepository, IUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> IUserRepository:
    return SQLAlchemyUserRepository(db)


def get_task_list_repository(db: Session = Depends(get_db)) -> ITaskListRepository:
    return SQLAlchemyTaskListRepository(db)


def get_task_repository(db: Session = Depends(get_db)) -> ITaskRepository:
    return SQLAlchemyTaskRepository(db)
