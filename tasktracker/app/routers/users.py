"""User routes, including the per-user task and task list views."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from tasktracker.app.core.errors import ApiError
from tasktracker.app.deps import get_task_list_repository, get_task_repository, get_user_repository
from tasktracker.app.domain import Task, TaskList, User
from tasktracker.app.schemas import MessageResponse, TaskBody, UserBody
from tasktracker.ports.repository import ITaskListRepository, ITaskRepository, IUserRepository

from .common import parse_id, require_text, store_call

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[User])
def list_users(repo: IUserRepository = Depends(get_user_repository)):
    with store_call("Failed to fetch users"):
        return repo.find_all()


# Declared before /{user_id} so "search" is not read as an id
@router.get("/search", response_model=List[User])
def search_users(
    name: Optional[str] = Query(default=None),
    repo: IUserRepository = Depends(get_user_repository),
):
    if not name:
        raise ApiError(400, "Name query parameter is required")
    with store_call("Failed to search users"):
        return repo.find_by_name(name)


@router.get("/{user_id}", response_model=User)
def get_user(user_id: str, repo: IUserRepository = Depends(get_user_repository)):
    uid = parse_id(user_id, "Invalid user ID")
    with store_call("Failed to fetch user"):
        user = repo.find_by_id(uid)
    if user is None:
        raise ApiError(404, "User not found")
    return user


@router.post("", response_model=User, status_code=201)
def create_user(
    body: Optional[UserBody] = None,
    repo: IUserRepository = Depends(get_user_repository),
):
    name = require_text(body.name if body else None, "Name is required")
    with store_call("Failed to create user"):
        return repo.save(User(name=name))


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str,
    body: Optional[UserBody] = None,
    repo: IUserRepository = Depends(get_user_repository),
):
    uid = parse_id(user_id, "Invalid user ID")
    name = require_text(body.name if body else None, "Name is required")
    with store_call("Failed to update user"):
        user = repo.find_by_id(uid)
        if user is None:
            raise ApiError(404, "User not found")
        user.name = name
        return repo.update(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, repo: IUserRepository = Depends(get_user_repository)):
    uid = parse_id(user_id, "Invalid user ID")
    with store_call("Failed to delete user"):
        if repo.find_by_id(uid) is None:
            raise ApiError(404, "User not found")
        repo.delete(uid)
    return MessageResponse(message="User deleted successfully")


@router.get("/{user_id}/tasklist", response_model=TaskList)
def get_user_task_list(
    user_id: str,
    repo: ITaskListRepository = Depends(get_task_list_repository),
):
    uid = parse_id(user_id, "Invalid user ID")
    with store_call("Failed to fetch task list"):
        task_list = repo.find_by_user_id(uid)
    if task_list is None:
        raise ApiError(404, "Task list not found")
    return task_list


@router.get("/{user_id}/tasks", response_model=List[Task])
def list_user_tasks(
    user_id: str,
    users: IUserRepository = Depends(get_user_repository),
    tasks: ITaskRepository = Depends(get_task_repository),
):
    uid = parse_id(user_id, "Invalid user ID")
    with store_call("Failed to fetch tasks"):
        user = users.find_by_id(uid)
        if user is None:
            raise ApiError(404, "User not found")
        if user.task_list is None:
            return []
        return tasks.find_by_task_list_id(user.task_list.id)


@router.post("/{user_id}/tasks", response_model=Task, status_code=201)
def create_user_task(
    user_id: str,
    body: Optional[TaskBody] = None,
    users: IUserRepository = Depends(get_user_repository),
    tasks: ITaskRepository = Depends(get_task_repository),
):
    uid = parse_id(user_id, "Invalid user ID")
    description = require_text(body.description if body else None, "Description is required")
    with store_call("Failed to create task"):
        user = users.find_by_id(uid)
        if user is None:
            raise ApiError(404, "User not found")
        if user.task_list is None:
            raise ApiError(404, "User has no task list")
        task = tasks.save(Task(description=description), user.task_list.id)
    logger.info("task added", extra={"entity": "User", "entity_id": uid, "op": "add_task"})
    return task
