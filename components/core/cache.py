"""
Entity cache and change feed.

The cache holds a single value per entity key ``(table, user_id)``. Writers
publish ChangeEvents on the feed; the cache treats every event as an
invalidation signal and never as data.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

CacheKey = Tuple[str, int]
Listener = Callable[["ChangeEvent"], Awaitable[None]]

_MISSING = object()


@dataclass(frozen=True)
class ChangeEvent:
    """A row in ``table`` owned by ``user_id`` changed."""
    table: str
    user_id: int
    action: str  # UPSERT | INSERT | UPDATE | DELETE
    row_id: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


class ChangeFeed:
    """
    In-process publish/subscribe of row changes.

    Each ``listen()`` consumer gets a queue of at most ``queue_size`` events;
    when it falls behind, the oldest pending event is dropped.
    """

    def __init__(self, queue_size: int = 1000) -> None:
        self.queue_size = queue_size
        self._listeners: List[Listener] = []
        self._queues: List[asyncio.Queue] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def publish(self, event: ChangeEvent) -> None:
        logger.debug("change_published", table=event.table, user_id=event.user_id, action=event.action)
        for listener in list(self._listeners):
            try:
                await listener(event)
            except Exception:
                # one failing listener must not block delivery to the others
                logger.exception("change_listener_failed", table=event.table)
        for queue in list(self._queues):
            if queue.full():
                queue.get_nowait()
                logger.warning("change_listener_lagging", table=event.table, queue_size=self.queue_size)
            queue.put_nowait(event)

    async def listen(self) -> AsyncIterator[ChangeEvent]:
        """Yield events in publish order until the consumer stops iterating."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._queues.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)


@dataclass
class _Entry:
    value: Any
    stored_at: float


class QueryCache:
    """Per-entity cache with optimistic updates and feed-driven invalidation."""

    def __init__(self, ttl_seconds: float = 300) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[CacheKey, _Entry] = {}
        self._feed: Optional[ChangeFeed] = None

    def __contains__(self, key: CacheKey) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def get(self, key: CacheKey, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        if time.monotonic() - entry.stored_at > self.ttl_seconds:
            del self._entries[key]
            return default
        return entry.value

    def set(self, key: CacheKey, value: Any) -> None:
        self._entries[key] = _Entry(value, time.monotonic())

    def invalidate(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    def invalidate_user(self, user_id: int) -> None:
        for key in [k for k in self._entries if k[1] == user_id]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_load(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value
        value = await loader()
        self.set(key, value)
        return value

    async def optimistic_update(
        self,
        key: CacheKey,
        optimistic_value: Any,
        mutation: Callable[[], Awaitable[Any]],
    ) -> Any:
        """
        Apply ``optimistic_value`` at once, then reconcile with the mutation result.

        If the mutation raises, the previous entry is restored and the error
        propagates to the caller.
        """
        previous = self._entries.get(key)
        self.set(key, optimistic_value)
        try:
            result = await mutation()
        except Exception:
            if previous is None:
                self._entries.pop(key, None)
            else:
                self._entries[key] = previous
            logger.warning("optimistic_update_reverted", table=key[0], user_id=key[1])
            raise
        self.set(key, result)
        return result

    def attach(self, feed: ChangeFeed) -> None:
        """Invalidate entries named by events published on ``feed``."""
        self._feed = feed
        feed.subscribe(self._on_change)

    def detach(self) -> None:
        if self._feed is not None:
            self._feed.unsubscribe(self._on_change)
            self._feed = None

    async def _on_change(self, event: ChangeEvent) -> None:
        if event.action == "DELETE" and event.table == "users":
            self.invalidate_user(event.user_id)
        else:
            self.invalidate((event.table, event.user_id))
