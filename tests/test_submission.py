import asyncio

import pytest

from exorate.aggregator import RatingAggregator
from exorate.models import AggregateStat, SessionInfo
from exorate.submission import SignInRequiredError, SubmissionCoordinator

SESSION = SessionInfo(label="astro@example.com")


@pytest.fixture
def aggregator(backend) -> RatingAggregator:
    return RatingAggregator(backend)


@pytest.fixture
def coordinator(backend, aggregator) -> SubmissionCoordinator:
    return SubmissionCoordinator(backend, aggregator)


def test_no_session_makes_no_requests_and_keeps_drafts(coordinator, table):
    drafts = {"Kepler-22 b": 7, "TRAPPIST-1 e": 9}

    with pytest.raises(SignInRequiredError):
        asyncio.run(coordinator.submit(drafts, None))

    assert table.requests == []
    assert drafts == {"Kepler-22 b": 7, "TRAPPIST-1 e": 9}


def test_one_request_per_draft(coordinator, table):
    drafts = {"Kepler-22 b": 7, "TRAPPIST-1 e": 9, "Proxima Cen b": 0}

    report = asyncio.run(coordinator.submit(drafts, SESSION))

    assert sorted(table.inserts(), key=lambda row: row["planet_name"]) == [
        {"planet_name": "Kepler-22 b", "rating": 7},
        {"planet_name": "Proxima Cen b", "rating": 0},
        {"planet_name": "TRAPPIST-1 e", "rating": 9},
    ]
    assert report.complete
    assert report.submitted == ("Kepler-22 b", "TRAPPIST-1 e", "Proxima Cen b")


def test_submission_clears_stat_cache(coordinator, aggregator, table):
    asyncio.run(aggregator.resolve(["Kepler-22 b", "TRAPPIST-1 e"]))
    assert aggregator.get("Kepler-22 b") == AggregateStat(average=0.0, count=0)

    asyncio.run(coordinator.submit({"Kepler-22 b": 8}, SESSION))

    assert aggregator.stats == {}
    asyncio.run(aggregator.resolve(["Kepler-22 b", "TRAPPIST-1 e"]))
    assert aggregator.get("Kepler-22 b") == AggregateStat(average=8.0, count=1)
    assert table.lookups().count("TRAPPIST-1 e") == 2


def test_drafts_are_retained_after_submit(coordinator):
    drafts = {"Kepler-22 b": 8}
    asyncio.run(coordinator.submit(drafts, SESSION))
    assert drafts == {"Kepler-22 b": 8}


def test_failures_do_not_short_circuit(coordinator, aggregator, table, caplog):
    table.fail_names.add("WASP-12 b")
    asyncio.run(aggregator.resolve(["Kepler-22 b"]))

    report = asyncio.run(
        coordinator.submit({"WASP-12 b": 3, "Kepler-22 b": 6, "TRAPPIST-1 e": 10}, SESSION)
    )

    assert len(table.inserts()) == 3
    assert report.submitted == ("Kepler-22 b", "TRAPPIST-1 e")
    assert report.failed == ("WASP-12 b",)
    assert not report.complete
    assert aggregator.stats == {}
    assert "Rating submission failed for WASP-12 b" in caplog.text


def test_invalid_draft_is_reported_not_sent(coordinator, table):
    report = asyncio.run(coordinator.submit({"Kepler-22 b": 42, "TRAPPIST-1 e": 4}, SESSION))
    assert table.inserts() == [{"planet_name": "TRAPPIST-1 e", "rating": 4}]
    assert report.failed == ("Kepler-22 b",)


def test_bounded_submission(backend, aggregator, table):
    coordinator = SubmissionCoordinator(backend, aggregator, max_concurrency=2)
    drafts = {f"Planet {i}": i % 11 for i in range(7)}

    report = asyncio.run(coordinator.submit(drafts, SESSION))

    assert len(table.inserts()) == 7
    assert report.complete
