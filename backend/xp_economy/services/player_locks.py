"""Player Locks: in-process serialization of matches that share players.

Invariants:
    - One asyncio.Lock per player id, created on first use and dropped once no
      holder or waiter references it, so the registry only tracks live players
    - hold() acquires in ascending id order and releases in reverse, so two
      matches with overlapping players can never deadlock
    - Matches over disjoint player sets never wait on each other

Design Decisions:
    - Module-level registry (player_locks): single-process uvicorn; cross-process
      safety comes from row locks and conditional updates in the repository
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable


class PlayerLockRegistry:
    """Per-player asyncio locks, reference counted by holders and waiters."""

    def __init__(self):
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def _checkout(self, player_id: int) -> asyncio.Lock:
        lock = self._locks.get(player_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[player_id] = lock
        self._users[player_id] = self._users.get(player_id, 0) + 1
        return lock

    def _checkin(self, player_id: int) -> None:
        remaining = self._users[player_id] - 1
        if remaining:
            self._users[player_id] = remaining
        else:
            del self._users[player_id]
            del self._locks[player_id]

    def is_locked(self, player_id: int) -> bool:
        lock = self._locks.get(player_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, player_ids: Iterable[int]) -> AsyncIterator[None]:
        registered: list[int] = []
        acquired: list[asyncio.Lock] = []
        try:
            for player_id in sorted(set(player_ids)):
                lock = self._checkout(player_id)
                registered.append(player_id)
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for player_id in reversed(registered):
                self._checkin(player_id)


player_locks = PlayerLockRegistry()
