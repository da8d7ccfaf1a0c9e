"""
TTL cache backed by a JSON file.

Saves the result of a function in a file under a temp Dir and serves it
until it is older than the cache's time-to-live.

    cache = Cache("exchange-rates", ttl=3600, get_value=fetch_rates)
    rates = await cache.read()  # calls fetch_rates() at most once an hour
"""

import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

from pydantic import ValidationError

from dirkit.models.cache import CacheEntry
from dirkit.snapshot import snapshot
from dirkit.storage.dir import Dir, temp
from dirkit.utils.format import format_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Cache(Generic[T]):
    """
    A cached value stored as ``{"created_at": ..., "value": ...}`` JSON.

    Args:
        key: Unique name for the cache file
        ttl: Cache duration in seconds
        get_value: Sync or async function that produces a fresh value
        root: Dir to store the cache file in, defaults to ``temp/cache``
    """

    def __init__(
        self,
        key: str,
        ttl: float,
        get_value: Callable[[], Union[T, Awaitable[T]]],
        root: Optional[Dir] = None,
    ):
        self.key = key
        self.ttl = ttl
        self.get_value = get_value
        self.file = (root or temp.dir("cache")).file(key).json()

    async def read(self) -> T:
        """Return the stored value if it is still fresh, otherwise refresh it."""
        entry = self._load()
        if entry is not None and entry.is_fresh(self.ttl):
            logger.debug(f"Cache hit: {self.key}")
            return entry.value
        logger.debug(f"Cache miss: {self.key} (ttl {format_ms(self.ttl * 1000)})")
        return await self.write()

    async def write(self) -> T:
        """
        Call ``get_value`` and store its result.

        Returns the stored snapshot, the same value a later cache hit returns.
        """
        value = self.get_value()
        if inspect.isawaitable(value):
            value = await value
        entry = CacheEntry(created_at=time.time(), value=snapshot(value))
        self.file.write(entry.model_dump())
        return entry.value

    def clear(self) -> None:
        self.file.delete()

    def _load(self) -> Optional[CacheEntry]:
        raw: Any = self.file.read()
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid cache entry {self.file.path}: {e}")
            return None
