"""Catalog layer — NASA Exoplanet Archive download, CSV parsing, and ESI scoring."""

import io
import logging

import httpx
import numpy as np
import pandas as pd

from exorate.models import CelestialRecord

logger = logging.getLogger(__name__)

CATALOG_URL = (
    "https://exoplanetarchive.ipac.caltech.edu/TAP/sync"
    "?query=select+pl_name,pl_rade,pl_eqt,st_teff+from+pscomppars&format=csv"
)

NAME_COL = "pl_name"
RADIUS_COL = "pl_rade"
TEMP_COL = "pl_eqt"
HOST_TEMP_COL = "st_teff"
_REQUIRED_COLS = (NAME_COL, RADIUS_COL, TEMP_COL, HOST_TEMP_COL)

EARTH_RADIUS = 1.0  # Earth radii
EARTH_TEMP = 288.0  # Kelvin


class CatalogError(Exception):
    """Catalog could not be loaded."""


class CatalogFetchError(CatalogError):
    """Archive request failed."""


class CatalogFormatError(CatalogError):
    """Archive response is unreadable or missing required columns."""


def fetch_catalog_csv(url: str = CATALOG_URL, timeout: float = 30.0) -> str:
    """Download the raw catalog CSV.

    Args:
        url: TAP sync query URL returning CSV.
        timeout: Request timeout in seconds.

    Returns:
        Response body as text.

    Raises:
        CatalogFetchError: On transport failure or a non-2xx response.
    """
    try:
        resp = httpx.get(url, timeout=timeout, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        raise CatalogFetchError(f"archive request failed: {e}") from e
    return resp.text


def similarity_score(radius, temp):
    """Earth Similarity Index from planet radius and equilibrium temperature.

    Accepts scalars or numpy arrays. Extreme inputs can drive a sub-score
    negative, in which case the result is NaN rather than clamped.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        esi_radius = 1 - np.abs(radius - EARTH_RADIUS) / (radius + EARTH_RADIUS)
        esi_temp = 1 - np.abs(temp - EARTH_TEMP) / (temp + EARTH_TEMP)
        return np.sqrt(esi_radius * esi_temp)


def parse_catalog(text: str) -> tuple[CelestialRecord, ...]:
    """Parse archive CSV into scored records, dropping malformed rows.

    A row is dropped when its name is blank, its radius or equilibrium
    temperature is not a positive finite number, or its host star
    temperature is not finite. Every other row is kept in input order,
    repeated names included. Names are read verbatim as text.

    Raises:
        CatalogFormatError: When the CSV is unreadable or lacks a required column.
    """
    if not text.strip():
        return ()

    try:
        df = pd.read_csv(io.StringIO(text), dtype={NAME_COL: str}, keep_default_na=False)
    except pd.errors.ParserError as e:
        raise CatalogFormatError(f"unreadable CSV: {e}") from e
    missing = [c for c in _REQUIRED_COLS if c not in df.columns]
    if missing:
        raise CatalogFormatError(f"missing columns: {', '.join(missing)}")

    names = df[NAME_COL].fillna("").astype(str)
    radius = pd.to_numeric(df[RADIUS_COL], errors="coerce").to_numpy(dtype=float)
    temp = pd.to_numeric(df[TEMP_COL], errors="coerce").to_numpy(dtype=float)
    host = pd.to_numeric(df[HOST_TEMP_COL], errors="coerce").to_numpy(dtype=float)

    valid = (
        (names.str.strip() != "").to_numpy()
        & np.isfinite(radius)
        & (radius > 0)
        & np.isfinite(temp)
        & (temp > 0)
        & np.isfinite(host)
    )
    scores = np.full(len(df), np.nan)
    scores[valid] = similarity_score(radius[valid], temp[valid])

    records: list[CelestialRecord] = []
    for i in np.flatnonzero(valid):
        records.append(
            CelestialRecord(
                name=names.iat[i],
                radius=float(radius[i]),
                equilibrium_temp=float(temp[i]),
                host_star_temp=float(host[i]),
                similarity_score=float(scores[i]),
            )
        )

    logger.debug("Parsed %d of %d catalog rows", len(records), len(df))
    return tuple(records)


def load_catalog(url: str = CATALOG_URL, timeout: float = 30.0) -> tuple[CelestialRecord, ...]:
    """Top-level entry point: download and parse the catalog.

    Args:
        url: TAP sync query URL returning CSV.
        timeout: Request timeout in seconds.

    Returns:
        Scored records in archive order.

    Raises:
        CatalogFetchError: On transport failure.
        CatalogFormatError: When the response is unreadable or lacks required columns.
    """
    records = parse_catalog(fetch_catalog_csv(url, timeout=timeout))
    logger.info("Loaded %d planets from %s", len(records), url)
    return records
