# tests/fakes.py

from __future__ import annotations

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """
    In-memory stand-in for the subset of redis.asyncio.Redis the stores use.

    - Strings, hashes and sorted sets live in separate dicts
    - Responses are already-decoded str, like decode_responses=True
    - `fail = True` makes every command raise ConnectionError
    """

    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.fail = False
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Connection refused")

    async def ping(self) -> bool:
        self._check()
        return True

    async def aclose(self) -> None:
        self.closed = True

    # strings
    async def get(self, key: str) -> str | None:
        self._check()
        return self.strings.get(key)

    async def set(self, key: str, value: str, nx: bool = False, xx: bool = False) -> bool | None:
        self._check()
        exists = key in self.strings
        if (nx and exists) or (xx and not exists):
            return None
        self.strings[key] = value
        return True

    async def mget(self, keys: list[str]) -> list[str | None]:
        self._check()
        return [self.strings.get(k) for k in keys]

    async def delete(self, *keys: str) -> int:
        self._check()
        removed = 0
        for key in keys:
            for store in (self.strings, self.hashes, self.zsets):
                if key in store:
                    del store[key]
                    removed += 1
        return removed

    # hashes
    async def hsetnx(self, key: str, field: str, value: str) -> int:
        self._check()
        h = self.hashes.setdefault(key, {})
        if field in h:
            return 0
        h[field] = value
        return 1

    async def hget(self, key: str, field: str) -> str | None:
        self._check()
        return self.hashes.get(key, {}).get(field)

    async def hdel(self, key: str, *fields: str) -> int:
        self._check()
        h = self.hashes.get(key, {})
        return sum(1 for f in fields if h.pop(f, None) is not None)

    async def hvals(self, key: str) -> list[str]:
        self._check()
        return list(self.hashes.get(key, {}).values())

    # sorted sets
    async def zadd(self, key: str, mapping: dict[str, float]) -> int:
        self._check()
        z = self.zsets.setdefault(key, {})
        added = sum(1 for m in mapping if m not in z)
        z.update(mapping)
        return added

    async def zrange(self, key: str, start: int, end: int) -> list[str]:
        self._check()
        members = sorted(self.zsets.get(key, {}).items(), key=lambda kv: (kv[1], kv[0]))
        ordered = [m for m, _ in members]
        return ordered[start:] if end == -1 else ordered[start:end + 1]

    async def zrem(self, key: str, *members: str) -> int:
        self._check()
        z = self.zsets.get(key, {})
        return sum(1 for m in members if z.pop(m, None) is not None)
