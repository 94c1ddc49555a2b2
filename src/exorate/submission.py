"""Rating submission — flushes drafts to the ratings backend in one concurrent batch."""

import asyncio
import contextlib
import logging
from collections.abc import Mapping

import httpx

from exorate.aggregator import RatingAggregator
from exorate.models import SessionInfo, SubmissionReport
from exorate.ratings import RatingsBackend, RatingsClient, RatingsError

logger = logging.getLogger(__name__)


class SignInRequiredError(Exception):
    """Submission attempted without a signed-in session."""


class SubmissionCoordinator:
    """Sends every draft rating as its own request and invalidates cached averages.

    Args:
        backend: Ratings table connection settings.
        aggregator: Stat cache cleared once a batch settles.
        max_concurrency: Upper bound on in-flight inserts. None = unbounded.
    """

    def __init__(
        self,
        backend: RatingsBackend,
        aggregator: RatingAggregator,
        max_concurrency: int | None = None,
    ) -> None:
        self._backend = backend
        self._aggregator = aggregator
        self._max_concurrency = max_concurrency

    async def submit(
        self, drafts: Mapping[str, int], session: SessionInfo | None
    ) -> SubmissionReport:
        """Persist every draft rating, waiting for all requests to settle.

        A failed request does not stop the others. Once all have settled the
        aggregate cache is cleared, whatever the individual outcomes. The
        drafts mapping is left as it was.

        Args:
            drafts: Planet name → rating in [0, 10].
            session: Current signed-in user, or None.

        Returns:
            SubmissionReport naming the planets persisted and those that failed.

        Raises:
            SignInRequiredError: When session is None. No request is made.
        """
        if session is None:
            raise SignInRequiredError("sign in before submitting ratings")

        entries = list(drafts.items())
        limiter = (
            asyncio.Semaphore(self._max_concurrency)
            if self._max_concurrency
            else contextlib.nullcontext()
        )
        async with self._backend.connect() as client:
            outcomes = await asyncio.gather(
                *(
                    self._submit_one(client, name, rating, limiter)
                    for name, rating in entries
                )
            )

        self._aggregator.clear()
        report = SubmissionReport(
            submitted=tuple(name for (name, _), ok in zip(entries, outcomes) if ok),
            failed=tuple(name for (name, _), ok in zip(entries, outcomes) if not ok),
        )
        logger.info(
            "%s submitted %d ratings (%d failed)",
            session.label,
            len(report.submitted),
            len(report.failed),
        )
        return report

    async def _submit_one(
        self, client: RatingsClient, name: str, rating: int, limiter
    ) -> bool:
        try:
            async with limiter:
                await client.submit_rating(name, rating)
        except (httpx.HTTPError, RatingsError, ValueError) as e:
            logger.warning("Rating submission failed for %s: %s", name, e)
            return False
        return True
