"""
Task Endpoints
==============

Create, list, check/uncheck and delete tasks.

By default any valid token may modify any task and task lists are public.
With `enforce_task_ownership` enabled, every operation is restricted to the
owner of the tasks it touches.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_current_user,
    get_current_user_optional,
    get_task_store,
    get_user_store,
)
from api.models.requests import CreateTaskRequest, UpdateTaskRequest
from api.models.responses import MessageResponse, TaskCreatedResponse, TaskResponse
from config import Settings, get_settings
from core.storage import storage_operation
from core.task_store import TaskStore
from core.user_store import UserStore
from exceptions import AuthenticationError, ForbiddenError, TaskNotFoundError
from models import Task

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks")


# -------- helpers --------
async def _ensure_owner(username: str, owner_id: str, user_store: UserStore) -> None:
    """Raise ForbiddenError unless `username` is the account with id `owner_id`."""
    user = await user_store.get_by_username(username)
    if user is None or user.id != owner_id:
        raise ForbiddenError(username, owner_id)


# -------- routes --------
@router.post("", response_model=TaskCreatedResponse)
async def create_task(
    request: CreateTaskRequest,
    username: str = Depends(get_current_user),
    task_store: TaskStore = Depends(get_task_store),
    user_store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings)
):
    """Create an unchecked task for `user_id`."""
    async with storage_operation("Task creation failed"):
        if settings.enforce_task_ownership:
            await _ensure_owner(username, request.user_id, user_store)

        task = await task_store.create(Task(user_id=request.user_id, task=request.task))

    return TaskCreatedResponse(message="Task created successfully", task_id=task.id)


@router.get("/{user_id}", response_model=list[TaskResponse])
async def list_tasks(
    user_id: str,
    username: Optional[str] = Depends(get_current_user_optional),
    task_store: TaskStore = Depends(get_task_store),
    user_store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings)
):
    """List all tasks belonging to `user_id`, oldest first."""
    async with storage_operation("Failed to fetch tasks"):
        if settings.enforce_task_ownership:
            if username is None:
                raise AuthenticationError("token required to list tasks")
            await _ensure_owner(username, user_id, user_store)

        tasks = await task_store.list_for_user(user_id)

    return [TaskResponse.from_task(t) for t in tasks]


@router.patch("/{task_id}", response_model=MessageResponse)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    username: str = Depends(get_current_user),
    task_store: TaskStore = Depends(get_task_store),
    user_store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings)
):
    """
    Set the isChecked flag of a task.

    Succeeds even when no task has this id; nothing is created in that case.
    """
    async with storage_operation("Failed to update task isChecked status"):
        if settings.enforce_task_ownership:
            task = await task_store.get(task_id)
            if task is not None:
                await _ensure_owner(username, task.user_id, user_store)

        updated = await task_store.set_checked(task_id, request.isChecked)

    if updated:
        logger.info(f"Task {task_id} isChecked status updated to {request.isChecked}")
    else:
        logger.info(f"Task {task_id} not found, isChecked update ignored")

    return MessageResponse(message="Task isChecked status updated successfully")


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    username: str = Depends(get_current_user),
    task_store: TaskStore = Depends(get_task_store),
    user_store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings)
):
    """
    Delete a task.

    Raises:
        404: No task has this id
    """
    async with storage_operation("Failed to delete task"):
        if settings.enforce_task_ownership:
            task = await task_store.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)
            await _ensure_owner(username, task.user_id, user_store)

        removed = await task_store.delete(task_id)

    if not removed:
        raise TaskNotFoundError(task_id)

    return MessageResponse(message="Task deleted successfully")
