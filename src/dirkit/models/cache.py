"""Stored shape of a dirkit cache entry."""

import time
from typing import Any, Optional

from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """
    One cached value and the time it was stored

    Attributes:
        created_at: Unix timestamp (seconds) when the value was stored
        value: The cached value, already reduced to JSON-safe data
    """

    created_at: float = Field(default_factory=time.time, ge=0)
    value: Any = None

    def is_fresh(self, ttl: float, now: Optional[float] = None) -> bool:
        """True while ``created_at + ttl`` is still in the future."""
        if now is None:
            now = time.time()
        return self.value is not None and self.created_at + ttl > now
