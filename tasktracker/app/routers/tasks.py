"""Task routes: read, edit, finish/unfinish and delete single tasks."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends

from tasktracker.app.core.errors import ApiError
from tasktracker.app.deps import get_task_repository
from tasktracker.app.domain import Task
from tasktracker.app.schemas import MessageResponse, TaskBody
from tasktracker.ports.repository import ITaskRepository

from .common import parse_id, require_text, store_call

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _load_task(repo: ITaskRepository, task_id: int) -> Task:
    task = repo.find_by_id(task_id)
    if task is None:
        raise ApiError(404, "Task not found")
    return task


@router.get("", response_model=List[Task])
def list_tasks(repo: ITaskRepository = Depends(get_task_repository)):
    with store_call("Failed to fetch tasks"):
        return repo.find_all()


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: str, repo: ITaskRepository = Depends(get_task_repository)):
    tid = parse_id(task_id, "Invalid task ID")
    with store_call("Failed to fetch task"):
        return _load_task(repo, tid)


@router.put("/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    body: Optional[TaskBody] = None,
    repo: ITaskRepository = Depends(get_task_repository),
):
    tid = parse_id(task_id, "Invalid task ID")
    description = require_text(body.description if body else None, "Description is required")
    with store_call("Failed to update task"):
        task = _load_task(repo, tid)
        task.description = description
        return repo.update(task)


@router.patch("/{task_id}/finish", response_model=Task)
def finish_task(task_id: str, repo: ITaskRepository = Depends(get_task_repository)):
    tid = parse_id(task_id, "Invalid task ID")
    with store_call("Failed to finish task"):
        task = _load_task(repo, tid)
        task.finish()
        return repo.update(task)


@router.patch("/{task_id}/unfinish", response_model=Task)
def unfinish_task(task_id: str, repo: ITaskRepository = Depends(get_task_repository)):
    tid = parse_id(task_id, "Invalid task ID")
    with store_call("Failed to unfinish task"):
        task = _load_task(repo, tid)
        task.unfinish()
        return repo.update(task)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task_id: str, repo: ITaskRepository = Depends(get_task_repository)):
    tid = parse_id(task_id, "Invalid task ID")
    with store_call("Failed to delete task"):
        _load_task(repo, tid)
        repo.delete(tid)
    return MessageResponse(message="Task deleted successfully")
