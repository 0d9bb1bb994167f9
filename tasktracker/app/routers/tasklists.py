from __future__ import annotations

from fastapi import APIRouter, Depends

from tasktracker.app.core.errors import ApiError
from tasktracker.app.deps import get_task_list_repository
from tasktracker.app.domain import TaskList
from tasktracker.ports.repository import ITaskListRepository

from .common import parse_id, store_call

router = APIRouter(prefix="/api/tasklists", tags=["tasklists"])


@router.get("/{task_list_id}", response_model=TaskList)
def get_task_list(
    task_list_id: str,
    repo: ITaskListRepository = Depends(get_task_list_repository),
):
    lid = parse_id(task_list_id, "Invalid task list ID")
    with store_call("Failed to fetch task list"):
        task_list = repo.find_by_id(lid)
    if task_list is None:
        raise ApiError(404, "Task list not found")
    return task_list
