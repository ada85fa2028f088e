"""
Pending selection sessions for media-request-bot.

One session per sender, kept in memory for the life of the process.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from .models import Session

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory store of pending selections keyed by sender id.

    The store also provides a per-sender critical section (`lock`). The
    orchestrator holds it while it processes a message, so a sender's
    messages are handled strictly one after another while different
    senders run concurrently. A sender's lock only exists while someone
    holds or waits for it.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Drop sessions older than this. None keeps them
                until they are resolved or replaced.
            clock: Monotonic time source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, tuple[Session, float]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def get(self, sender: str) -> Session | None:
        entry = self._sessions.get(sender)
        if entry is None:
            return None

        session, created = entry
        if self.ttl_seconds is not None and self._clock() - created > self.ttl_seconds:
            logger.info(f"Session for {sender} expired after {self.ttl_seconds}s")
            del self._sessions[sender]
            return None
        return session

    def set(self, sender: str, session: Session) -> None:
        """Store a session, replacing any pending one."""
        if sender in self._sessions:
            logger.debug(f"Replacing pending session for {sender}")
        self._sessions[sender] = (session, self._clock())

    def clear(self, sender: str) -> None:
        self._sessions.pop(sender, None)

    @asynccontextmanager
    async def lock(self, sender: str) -> AsyncIterator[None]:
        """Per-sender critical section."""
        lock = self._locks.get(sender)
        if lock is None:
            lock = self._locks[sender] = asyncio.Lock()
        self._lock_users[sender] = self._lock_users.get(sender, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._lock_users[sender] -= 1
            if not self._lock_users[sender]:
                del self._lock_users[sender]
                del self._locks[sender]

    def __contains__(self, sender: str) -> bool:
        return self.get(sender) is not None

    def __len__(self) -> int:
        return len(self._sessions)
