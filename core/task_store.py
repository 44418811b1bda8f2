"""
Task Store
==========

Persists Task documents in Redis as JSON strings, with a per-user sorted
set (scored by creation time) so a user's tasks list in creation order.
"""

import json
import logging
import time
from typing import Optional

from core.storage import StorageKeys
from models import Task


logger = logging.getLogger(__name__)


class TaskStore:
    """Storage handle for task records."""

    def __init__(self, redis_client, key_prefix: str = "tasktracker"):
        self.redis = redis_client
        self.keys = StorageKeys(key_prefix)

    async def create(self, task: Task) -> Task:
        """
        Insert a new task.

        Args:
            task: The task to persist

        Returns:
            The stored task
        """
        await self.redis.set(self.keys.task(task.id), json.dumps(task.to_document()))
        await self.redis.zadd(self.keys.user_tasks(task.user_id), {task.id: time.time()})
        return task

    async def get(self, task_id: str) -> Optional[Task]:
        data = await self.redis.get(self.keys.task(task_id))
        if data is None:
            return None
        return Task.model_validate(json.loads(data))

    async def list_for_user(self, user_id: str) -> list[Task]:
        """Return all tasks whose user_id matches, oldest first."""
        task_ids = await self.redis.zrange(self.keys.user_tasks(user_id), 0, -1)
        if not task_ids:
            return []

        documents = await self.redis.mget([self.keys.task(tid) for tid in task_ids])
        return [
            Task.model_validate(json.loads(doc))
            for doc in documents
            if doc is not None
        ]

    async def set_checked(self, task_id: str, is_checked: bool) -> bool:
        """
        Set the isChecked flag of a task.

        The write uses SET XX, so a task deleted in the meantime is never
        recreated.

        Returns:
            True if a task was updated, False if none matched
        """
        task = await self.get(task_id)
        if task is None:
            return False

        task.is_checked = is_checked
        updated = await self.redis.set(
            self.keys.task(task_id),
            json.dumps(task.to_document()),
            xx=True
        )
        return bool(updated)

    async def delete(self, task_id: str) -> bool:
        """
        Remove a task by id.

        Returns:
            True if a task was removed, False if none matched
        """
        task = await self.get(task_id)
        removed = await self.redis.delete(self.keys.task(task_id))
        if task is not None:
            await self.redis.zrem(self.keys.user_tasks(task.user_id), task_id)
        return removed > 0
