import json

import httpx
import pytest

from exorate.ratings import RatingsBackend


class FakeRatingsTable:
    """In-memory stand-in for the hosted ratings table, served over MockTransport."""

    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.fail_names: set[str] = set()
        self.requests: list[httpx.Request] = []

    def add(self, planet_name: str, *ratings: int) -> None:
        for rating in ratings:
            self.rows.append(
                {"id": len(self.rows) + 1, "planet_name": planet_name, "rating": rating}
            )

    def lookups(self) -> list[str]:
        return [
            r.url.params["planet_name"].removeprefix("eq.")
            for r in self.requests
            if r.method == "GET"
        ]

    def inserts(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            name = request.url.params["planet_name"].removeprefix("eq.")
            if name in self.fail_names:
                return httpx.Response(500, json={"message": "lookup failed"})
            return httpx.Response(
                200,
                json=[{"rating": r["rating"]} for r in self.rows if r["planet_name"] == name],
            )
        if request.method == "POST":
            body = json.loads(request.content)
            if body["planet_name"] in self.fail_names:
                return httpx.Response(500, json={"message": "insert failed"})
            self.add(body["planet_name"], body["rating"])
            return httpx.Response(201, json=[self.rows[-1]])
        return httpx.Response(405)


@pytest.fixture
def table() -> FakeRatingsTable:
    return FakeRatingsTable()


@pytest.fixture
def backend(table: FakeRatingsTable) -> RatingsBackend:
    return RatingsBackend(
        "https://example.supabase.co",
        "anon-key",
        transport=httpx.MockTransport(table.handler),
    )
