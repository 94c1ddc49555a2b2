"""Per-session explorer state — the one object the Streamlit page mutates."""

from dataclasses import dataclass, field

from exorate.aggregator import RatingAggregator
from exorate.models import CatalogQuery, CelestialRecord
from exorate.query import visible_records
from exorate.ratings import validate_rating

DEFAULT_RATING = 5


@dataclass
class ExplorerState:
    """Catalog, view parameters, drafts, and stat cache for one browser session.

    Stored in ``st.session_state`` and handed by reference to the pure query
    functions; nothing here is module-global.
    """

    aggregator: RatingAggregator | None
    records: tuple[CelestialRecord, ...] = ()
    query: CatalogQuery = field(default_factory=CatalogQuery)
    drafts: dict[str, int] = field(default_factory=dict)
    fetch_error: str | None = None
    loaded: bool = False

    def replace_records(self, records: tuple[CelestialRecord, ...]) -> None:
        """Swap in a freshly fetched catalog."""
        self.records = records
        self.fetch_error = None
        self.loaded = True

    def fail_fetch(self, message: str) -> None:
        self.records = ()
        self.fetch_error = message
        self.loaded = True

    def set_rating(self, planet_name: str, value: int) -> None:
        self.drafts[planet_name] = validate_rating(value)

    def draft_for(self, planet_name: str, default: int = DEFAULT_RATING) -> int:
        return self.drafts.get(planet_name, default)

    def visible(self) -> list[CelestialRecord]:
        stats = self.aggregator.stats if self.aggregator is not None else None
        return visible_records(self.records, self.query, stats)
