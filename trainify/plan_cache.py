# trainify/plan_cache.py

"""
Time- and size-bounded cache of generated plans.

One instance is built per process and injected into the plan generator.
Entries expire after `ttl_seconds`; once more than `max_entries` are stored the
oldest insertion is evicted first. The cache is only touched from the event
loop thread, so it carries no locking.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from trainify.schemas import GeneratedPlans


DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 10


@dataclass
class PlanCacheEntry:
    plans: GeneratedPlans
    timestamp: float


class PlanCache:
    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, PlanCacheEntry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[GeneratedPlans]:
        """Returns the cached plans for `key`, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            logger.debug("Plan cache entry expired")
            del self._entries[key]
            return None
        return entry.plans

    def put(self, key: str, plans: GeneratedPlans) -> None:
        """Stores plans under `key`, then evicts the oldest entry while over capacity."""
        self._entries.pop(key, None)
        self._entries[key] = PlanCacheEntry(plans=plans, timestamp=self._clock())
        while len(self._entries) > self.max_entries:
            self.evict_oldest()

    def evict_oldest(self) -> Optional[str]:
        """Removes the oldest inserted entry and returns its key."""
        if not self._entries:
            return None
        key, _ = self._entries.popitem(last=False)
        logger.debug(f"Evicted oldest plan cache entry ({len(self._entries)} remaining)")
        return key

    def clear(self) -> None:
        self._entries.clear()
