# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Process-scoped memoizing cache with single-flight misses.

``EntityCache.get_or_fetch`` returns a cached value when one exists.
Otherwise the first caller for a key becomes the leader and runs the fetch;
callers arriving while that fetch is in flight await the leader's result
instead of starting their own. Only successes are stored. A failed or
cancelled fetch leaves the key absent, so the next caller fetches again.

Entries never expire. The cache lives as long as the server process and
is handed to its users explicitly; there is no module-level instance.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar


logger = logging.getLogger(__name__)

V = TypeVar("V")


class _Abandoned(Exception):
    """The leader was cancelled before producing a value."""


class EntityCache(Generic[V]):
    """String-keyed cache whose concurrent misses share one fetch."""

    def __init__(self) -> None:
        self._values: dict[str, V] = {}
        self._in_flight: dict[str, asyncio.Future[V]] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def peek(self, key: str) -> V | None:
        """Return the cached value for ``key`` without fetching."""
        return self._values.get(key)

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[V]]) -> V:
        """Return the value for ``key``, running ``fetch`` at most once per miss.

        Args:
            key: Cache key.
            fetch: Zero-argument coroutine factory producing the value.
                Exceptions it raises propagate to every caller waiting
                on the same miss and are not cached.

        Returns:
            The cached or freshly fetched value.

        """
        while True:
            if key in self._values:
                logger.debug("cache hit: %s", key)
                return self._values[key]

            pending = self._in_flight.get(key)
            if pending is None:
                break

            logger.debug("cache join: %s", key)
            try:
                # shield: a cancelled waiter must not cancel the shared future
                return await asyncio.shield(pending)
            except _Abandoned:
                continue

        logger.debug("cache miss: %s", key)
        future: asyncio.Future[V] = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            value = await fetch()
        except Exception as exc:
            future.set_exception(exc)
            future.exception()
            raise
        except BaseException:
            # cancellation: waiters retry rather than inherit it
            future.set_exception(_Abandoned())
            future.exception()
            raise
        else:
            self._values[key] = value
            future.set_result(value)
            return value
        finally:
            self._in_flight.pop(key, None)
