"""
Core Module
===========

Storage handles and account logic for Task Tracker:
- storage: Redis connection and error guard
- user_store / task_store: document persistence
- user_registry: registration and login
- security: password hashing and session tokens
"""

from core.storage import StorageKeys, connect_storage, ping_storage, storage_operation
from core.task_store import TaskStore
from core.user_registry import LoginResult, UserRegistry
from core.user_store import UserStore

__all__ = [
    'StorageKeys',
    'connect_storage',
    'ping_storage',
    'storage_operation',
    'TaskStore',
    'LoginResult',
    'UserRegistry',
    'UserStore',
]
