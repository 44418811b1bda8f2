# tests/test_stores.py

from __future__ import annotations

import asyncio

import pytest

from core.task_store import TaskStore
from core.user_registry import UserRegistry
from core.user_store import UserStore
from exceptions import UsernameTakenError
from models import Task, User


@pytest.mark.asyncio
async def test_username_is_claimed_once(user_store: UserStore) -> None:
    assert await user_store.create(User(username="alice", password="h1"))
    assert not await user_store.create(User(username="alice", password="h2"))

    stored = await user_store.get_by_username("alice")
    assert stored is not None
    assert stored.password == "h1"


@pytest.mark.asyncio
async def test_username_lookup_is_exact(user_store: UserStore) -> None:
    await user_store.create(User(username="alice", password="h"))

    assert await user_store.get_by_username("Alice") is None
    assert await user_store.get_by_username("alice ") is None


@pytest.mark.asyncio
async def test_list_all_returns_every_user(user_store: UserStore) -> None:
    for name in ("carol", "alice", "bob"):
        await user_store.create(User(username=name, password="h"))

    users = await user_store.list_all()

    assert [u.username for u in users] == ["alice", "bob", "carol"]


@pytest.mark.asyncio
async def test_concurrent_registrations_for_one_name_yield_one_account(user_store: UserStore) -> None:
    registry = UserRegistry(user_store)

    results = await asyncio.gather(
        registry.register("alice", "pw1"),
        registry.register("alice", "pw2"),
        return_exceptions=True,
    )

    created = [r for r in results if isinstance(r, User)]
    rejected = [r for r in results if isinstance(r, UsernameTakenError)]
    assert len(created) == 1
    assert len(rejected) == 1
    assert [u.id for u in await user_store.list_all()] == [created[0].id]


@pytest.mark.asyncio
async def test_failed_insert_releases_username(user_store: UserStore, fake_redis) -> None:
    original_set = fake_redis.set

    async def broken_set(*args, **kwargs):
        raise RuntimeError("write failed")

    fake_redis.set = broken_set
    with pytest.raises(RuntimeError):
        await user_store.create(User(username="alice", password="h"))

    fake_redis.set = original_set
    assert await user_store.create(User(username="alice", password="h"))


@pytest.mark.asyncio
async def test_new_task_is_unchecked_and_listed_in_creation_order(task_store: TaskStore) -> None:
    first = await task_store.create(Task(user_id="u1", task="buy milk"))
    second = await task_store.create(Task(user_id="u1", task="walk dog"))
    await task_store.create(Task(user_id="u2", task="other"))

    tasks = await task_store.list_for_user("u1")

    assert [t.id for t in tasks] == [first.id, second.id]
    assert all(t.is_checked is False for t in tasks)


@pytest.mark.asyncio
async def test_list_for_unknown_user_is_empty(task_store: TaskStore) -> None:
    assert await task_store.list_for_user("nobody") == []


@pytest.mark.asyncio
async def test_set_checked_toggles_both_ways(task_store: TaskStore) -> None:
    task = await task_store.create(Task(user_id="u1", task="buy milk"))

    assert await task_store.set_checked(task.id, True)
    assert (await task_store.get(task.id)).is_checked is True

    assert await task_store.set_checked(task.id, False)
    assert (await task_store.get(task.id)).is_checked is False


@pytest.mark.asyncio
async def test_set_checked_on_missing_task_creates_nothing(task_store: TaskStore, fake_redis) -> None:
    assert not await task_store.set_checked("missing", True)
    assert await task_store.get("missing") is None
    assert fake_redis.strings == {}


@pytest.mark.asyncio
async def test_delete_removes_task_and_index_entry(task_store: TaskStore) -> None:
    task = await task_store.create(Task(user_id="u1", task="buy milk"))

    assert await task_store.delete(task.id)
    assert await task_store.get(task.id) is None
    assert await task_store.list_for_user("u1") == []
    assert not await task_store.delete(task.id)


@pytest.mark.asyncio
async def test_task_document_uses_wire_field_names(task_store: TaskStore, fake_redis) -> None:
    task = await task_store.create(Task(user_id="u1", task="buy milk"))

    raw = fake_redis.strings[f"test:task:{task.id}"]

    assert '"isChecked": false' in raw
    assert '"user_id": "u1"' in raw
