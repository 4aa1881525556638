"""
Per-entity serialization for workflow operations.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, Iterable, List, Tuple

Key = Tuple[str, Hashable]


class EntityLockRegistry:
    """Hands out one asyncio.Lock per entity key.

    Operations that touch several entities acquire their locks in sorted key
    order so two operations can never wait on each other. A key's lock is
    dropped once nobody holds or waits for it.
    """

    def __init__(self):
        self._locks: Dict[Key, asyncio.Lock] = {}
        self._users: Dict[Key, int] = {}

    def _checkout(self, key: Key) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1
        return lock

    def _checkin(self, key: Key) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]

    @asynccontextmanager
    async def hold(self, *keys: Key) -> AsyncIterator[None]:
        ordered = sorted(set(keys), key=lambda k: (k[0], str(k[1])))
        checked_out: List[Key] = []
        acquired: List[asyncio.Lock] = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                checked_out.append(key)
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key in checked_out:
                self._checkin(key)

    def is_locked(self, key: Key) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def known_keys(self) -> Iterable[Key]:
        """Keys currently held or waited on."""
        return list(self._locks)
