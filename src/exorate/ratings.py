"""Ratings backend — hosted ratings table reached over the Supabase REST API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from exorate.models import AggregateStat

MIN_RATING = 0
MAX_RATING = 10


class RatingsError(Exception):
    """Ratings backend returned an unusable payload."""


def validate_rating(rating: int) -> int:
    """Return rating unchanged if it is an integer in [0, 10], else raise ValueError."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValueError(f"rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")
    return rating


class RatingsClient:
    """Per-request operations over one open HTTP connection pool."""

    def __init__(self, http: httpx.AsyncClient, table: str) -> None:
        self._http = http
        self._path = f"/rest/v1/{table}"

    async def fetch_stat(self, planet_name: str) -> AggregateStat:
        """Average every rating stored for planet_name.

        Returns:
            AggregateStat; ``AggregateStat(0.0, 0)`` when nothing is stored.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response.
            RatingsError: When the response is not a JSON list of rating rows.
        """
        resp = await self._http.get(
            self._path,
            params={"select": "rating", "planet_name": f"eq.{planet_name}"},
        )
        resp.raise_for_status()
        try:
            rows = resp.json()
        except ValueError as e:
            raise RatingsError(f"rating lookup for {planet_name!r} returned non-JSON body") from e
        if not isinstance(rows, list):
            raise RatingsError(f"expected a list of rows for {planet_name!r}")
        try:
            ratings = [float(row["rating"]) for row in rows]
        except (KeyError, TypeError, ValueError) as e:
            raise RatingsError(f"malformed rating row for {planet_name!r}") from e
        count = len(ratings)
        average = sum(ratings) / count if count else 0.0
        return AggregateStat(average=average, count=count)

    async def submit_rating(self, planet_name: str, rating: int) -> dict:
        """Insert one rating row and return it as stored.

        Raises:
            ValueError: If rating is not an integer in [0, 10].
            httpx.HTTPError: On transport failure or a non-2xx response.
            RatingsError: When the backend echoes no inserted row or no JSON.
        """
        validate_rating(rating)
        resp = await self._http.post(
            self._path,
            json={"planet_name": planet_name, "rating": rating},
            headers={"Prefer": "return=representation"},
        )
        resp.raise_for_status()
        try:
            rows = resp.json()
        except ValueError as e:
            raise RatingsError(f"insert for {planet_name!r} returned non-JSON body") from e
        if not isinstance(rows, list) or not rows:
            raise RatingsError(f"no rating returned after insert for {planet_name!r}")
        return rows[0]


class RatingsBackend:
    """Connection settings for the ratings table.

    Args:
        base_url: Project URL (``https://<ref>.supabase.co``).
        api_key: Public anon key; sent as both ``apikey`` and bearer token.
        table: Table holding ``planet_name`` / ``rating`` rows.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport override (tests use MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "ratings",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.table = table
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[RatingsClient]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as http:
            yield RatingsClient(http, self.table)
