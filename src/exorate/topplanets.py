"""CLI entry point: print the most Earth-like planets in the live catalog.

    uv run python -m exorate.topplanets -n 20 --min-esi 0.8
"""

import argparse

from dotenv import load_dotenv

load_dotenv()

from exorate.catalog import CatalogError, load_catalog  # noqa: E402
from exorate.config import configure_logging, load_settings  # noqa: E402
from exorate.models import CatalogQuery, CelestialRecord  # noqa: E402
from exorate.query import visible_records  # noqa: E402


def format_table(records: list[CelestialRecord]) -> str:
    """Fixed-width table of name, radius, temperature, and ESI."""
    header = f"{'Planet':<28} {'Radius':>8} {'Temp K':>8} {'ESI':>6}"
    rows = [
        f"{r.name:<28} {r.radius:>8.2f} {r.equilibrium_temp:>8.1f} {r.similarity_score:>6.3f}"
        for r in records
    ]
    return "\n".join([header, "-" * len(header), *rows])


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("-n", type=int, default=10, help="number of planets to show")
    parser.add_argument("--min-esi", type=float, default=0.0, help="minimum ESI")
    parser.add_argument("--search", default="", help="name substring filter")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)
    try:
        records = load_catalog(settings.catalog_url, timeout=settings.http_timeout)
    except CatalogError as e:
        print(f"Error: {e}")
        return 1

    query = CatalogQuery(
        search_term=args.search,
        min_radius=0.0,
        max_radius=float("inf"),
        min_similarity=args.min_esi,
        display_count=args.n,
    )
    print(format_table(visible_records(records, query)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
