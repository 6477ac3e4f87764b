"""Single-slot read-through cache for the full employee list."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from app.models.employee import Employee

logger = logging.getLogger(__name__)


class EmployeeListCache:
    """Holds the last complete employee list until explicitly invalidated.

    There is no TTL. Population is single-flight: concurrent readers that miss
    wait on one load instead of each hitting the remote API. ``invalidate``
    bumps a generation counter so that a load already in flight when a
    mutation happens does not store its (possibly stale) result.
    """

    def __init__(self) -> None:
        self._employees: tuple[Employee, ...] | None = None
        self._generation = 0
        self._lock = asyncio.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def is_valid(self) -> bool:
        return self._employees is not None

    async def get_or_load(self, loader: Callable[[], Awaitable[list[Employee]]]) -> list[Employee]:
        cached = self._employees
        if cached is not None:
            self.hits += 1
            return list(cached)

        async with self._lock:
            # Another reader may have populated the slot while we waited.
            cached = self._employees
            if cached is not None:
                self.hits += 1
                return list(cached)

            self.misses += 1
            generation = self._generation
            loaded = tuple(await loader())

            if generation == self._generation:
                self._employees = loaded
                logger.debug("Employee list cached (%d employees)", len(loaded))
            else:
                logger.debug("Cache invalidated during load, result not stored")
            return list(loaded)

    def invalidate(self) -> None:
        self._generation += 1
        self._employees = None
        logger.debug("Employee list cache invalidated")
