"""Lazy per-planet rating averages, cached for the lifetime of a session."""

import asyncio
import contextlib
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

import httpx

from exorate.models import AggregateStat
from exorate.ratings import RatingsBackend, RatingsClient, RatingsError

logger = logging.getLogger(__name__)


class RatingAggregator:
    """Cache of AggregateStat by planet name.

    A name is looked up at most once until ``clear()``; the "already cached"
    check happens when a lookup is dispatched, so two overlapping ``resolve``
    calls may both fetch the same name. Failed lookups are not cached.

    Args:
        backend: Ratings table connection settings.
        max_concurrency: Upper bound on in-flight lookups. None = unbounded.
    """

    def __init__(self, backend: RatingsBackend, max_concurrency: int | None = None) -> None:
        self._backend = backend
        self._max_concurrency = max_concurrency
        self._stats: dict[str, AggregateStat] = {}

    @property
    def stats(self) -> Mapping[str, AggregateStat]:
        """Read-only view of every resolved stat."""
        return MappingProxyType(self._stats)

    def get(self, planet_name: str) -> AggregateStat | None:
        return self._stats.get(planet_name)

    def is_pending(self, planet_name: str) -> bool:
        return planet_name not in self._stats

    def clear(self) -> None:
        """Drop every cached stat so the next resolve refetches."""
        self._stats.clear()

    async def resolve(self, names: Iterable[str]) -> None:
        """Fetch stats for every name not yet cached, concurrently.

        Args:
            names: Planet names currently on screen. Duplicates are ignored.
        """
        pending = [n for n in dict.fromkeys(names) if n not in self._stats]
        if not pending:
            return
        limiter = (
            asyncio.Semaphore(self._max_concurrency)
            if self._max_concurrency
            else contextlib.nullcontext()
        )
        async with self._backend.connect() as client:
            await asyncio.gather(
                *(self._resolve_one(client, name, limiter) for name in pending)
            )

    async def _resolve_one(self, client: RatingsClient, name: str, limiter) -> None:
        try:
            async with limiter:
                stat = await client.fetch_stat(name)
        except (httpx.HTTPError, RatingsError) as e:
            logger.warning("Rating lookup failed for %s: %s", name, e)
            return
        self._stats[name] = stat
