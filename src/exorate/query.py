"""Catalog view queries — pure filter, sort, and truncation over parsed records."""

from collections.abc import Iterable, Mapping, Sequence

from exorate.models import AggregateStat, CatalogQuery, CelestialRecord, SortField


def filter_records(
    records: Iterable[CelestialRecord], query: CatalogQuery
) -> list[CelestialRecord]:
    """Keep records matching the search term, radius bounds, and ESI floor.

    The search is a case-insensitive substring match on the name. Both radius
    bounds are inclusive. A NaN score never passes the ESI floor.
    """
    term = query.search_term.lower()
    return [
        r
        for r in records
        if term in r.name.lower()
        and query.min_radius <= r.radius <= query.max_radius
        and r.similarity_score >= query.min_similarity
    ]


def sort_records(
    records: Iterable[CelestialRecord],
    field: SortField,
    stats: Mapping[str, AggregateStat] | None = None,
) -> list[CelestialRecord]:
    """Order records by field. Ties keep their input order.

    ESI and average rating sort descending; radius and temperature ascending.
    Planets without a resolved stat rank as an average of 0.
    """
    if field is SortField.RADIUS:
        return sorted(records, key=lambda r: r.radius)
    if field is SortField.TEMPERATURE:
        return sorted(records, key=lambda r: r.equilibrium_temp)
    if field is SortField.AVERAGE_RATING:
        stats = stats or {}

        def _average(r: CelestialRecord) -> float:
            stat = stats.get(r.name)
            return stat.average if stat is not None else 0.0

        return sorted(records, key=_average, reverse=True)
    return sorted(records, key=lambda r: r.similarity_score, reverse=True)


def clamp_display_count(display_count: int, filtered_count: int) -> int:
    """Clamp a requested display count to [1, filtered_count or 1]."""
    return min(max(1, display_count), filtered_count or 1)


def visible_records(
    records: Sequence[CelestialRecord],
    query: CatalogQuery,
    stats: Mapping[str, AggregateStat] | None = None,
) -> list[CelestialRecord]:
    """Filter, sort, and truncate records for display.

    Args:
        records: Full parsed catalog.
        query: Current view parameters.
        stats: Resolved aggregate stats by planet name, for rating sort.

    Returns:
        At most ``clamp_display_count(query.display_count, n)`` records,
        where n is the number that passed the filter.
    """
    matched = filter_records(records, query)
    ordered = sort_records(matched, query.sort_field, stats)
    return ordered[: clamp_display_count(query.display_count, len(ordered))]
