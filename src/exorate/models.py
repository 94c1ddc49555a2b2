"""Data model definitions — explicit boundaries between fetch, query, and rating layers."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CelestialRecord:
    """A single catalog planet after parsing and scoring."""

    name: str  # Planet name ("Kepler-22 b"); draft and stat key
    radius: float  # Planet radius (Earth radii), > 0
    equilibrium_temp: float  # Equilibrium temperature (K), > 0
    host_star_temp: float  # Host star effective temperature (K)
    similarity_score: float  # Earth Similarity Index; NaN for out-of-range inputs


@dataclass(frozen=True)
class AggregateStat:
    """Mean and count of every rating submitted for one planet."""

    average: float
    count: int


class SortField(Enum):
    """Sort order selectable in the catalog view. Values are display labels."""

    SIMILARITY_SCORE = "ESI"
    RADIUS = "Radius"
    TEMPERATURE = "Temperature"
    AVERAGE_RATING = "Avg Rating"


@dataclass(frozen=True)
class CatalogQuery:
    """User-controlled view parameters. Not yet clamped against the data."""

    search_term: str = ""
    min_radius: float = 0.0  # Inclusive lower bound (Earth radii)
    max_radius: float = 10.0  # Inclusive upper bound (Earth radii)
    min_similarity: float = 0.0  # Minimum ESI
    sort_field: SortField = SortField.SIMILARITY_SCORE
    display_count: int = 10


@dataclass(frozen=True)
class SessionInfo:
    """A signed-in user as reported by the auth provider."""

    label: str  # Email, or display name when the provider withholds it


@dataclass(frozen=True)
class SubmissionReport:
    """Outcome of one submission batch."""

    submitted: tuple[str, ...]  # Planet names persisted
    failed: tuple[str, ...]  # Planet names whose request failed

    @property
    def complete(self) -> bool:
        return not self.failed
