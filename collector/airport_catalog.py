"""
Aerofly Real-Weather - Airport Catalog
Downloads the OurAirports CSV catalog, keeps it in a local file cache and
turns it into read-only Airport records for the nearest-airport resolver.
"""

from __future__ import annotations

import csv
import io
import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import httpx

from config import (
    AIRPORTS_CSV_URL,
    RUNWAYS_CSV_URL,
    CACHE_DIR,
    AIRPORT_CATALOG_MAX_AGE_DAYS,
    AIRPORT_CATEGORIES,
    HTTP_TIMEOUT_SECONDS,
)
from core.models import Airport, Runway

logger = logging.getLogger("airport_catalog")

AIRPORTS_FILE = "airports.csv"
RUNWAYS_FILE = "runways.csv"


def _safe_float(value: Optional[str]) -> Optional[float]:
    if value is None or not str(value).strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def is_fresh(path: Path, max_age_days: float, now: Optional[float] = None) -> bool:
    """True when the cached file exists and is younger than max_age_days."""
    if not path.exists():
        return False
    now = time.time() if now is None else now
    age_seconds = now - path.stat().st_mtime
    return age_seconds < max_age_days * 86400


def _download(url: str, dest: Path, client: httpx.Client) -> bool:
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Catalog download failed for {url}: {e}")
        return False

    tmp = dest.with_suffix(dest.suffix + ".part")
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(response.text, encoding="utf-8")
        tmp.replace(dest)
    except OSError as e:
        logger.warning(f"Could not write catalog cache {dest}: {e}")
        return False
    logger.info(f"Catalog refreshed: {dest}")
    return True


def ensure_cached(url: str, dest: Path, max_age_days: float, client: httpx.Client) -> Optional[Path]:
    """
    Return a usable local copy of url.

    Fresh cache -> used as is. Stale or missing -> downloaded again; if the
    download fails a stale copy is still returned, a missing one gives None.
    """
    if is_fresh(dest, max_age_days):
        return dest
    if _download(url, dest, client):
        return dest
    if dest.exists():
        logger.warning(f"Using stale catalog {dest}")
        return dest
    return None


def _airport_identifier(row: Dict[str, str]) -> str:
    code = (row.get("gps_code") or "").strip().upper()
    if len(code) == 4 and code.isalnum():
        return code
    return (row.get("ident") or "").strip().upper()


def parse_runways(rows: Iterable[Dict[str, str]]) -> Dict[str, Tuple[Runway, ...]]:
    """Open runway ends grouped by airport ident."""
    grouped: Dict[str, List[Runway]] = {}
    for row in rows:
        if (row.get("closed") or "0").strip() == "1":
            continue
        airport_ident = (row.get("airport_ident") or "").strip().upper()
        if not airport_ident:
            continue
        for end in ("le", "he"):
            ident = (row.get(f"{end}_ident") or "").strip().upper()
            if not ident:
                continue
            grouped.setdefault(airport_ident, []).append(
                Runway(ident=ident, heading_deg=_safe_float(row.get(f"{end}_heading_degT")))
            )
    return {k: tuple(v) for k, v in grouped.items()}


def parse_airports(
    rows: Iterable[Dict[str, str]],
    runways: Optional[Dict[str, Tuple[Runway, ...]]] = None,
) -> List[Airport]:
    """Catalog rows -> Airport records, in file order."""
    runways = runways or {}
    airports = []
    for row in rows:
        raw_type = (row.get("type") or "").strip()
        ident = (row.get("ident") or "").strip().upper()
        airports.append(Airport(
            icao_code=_airport_identifier(row),
            latitude_deg=_safe_float(row.get("latitude_deg")),
            longitude_deg=_safe_float(row.get("longitude_deg")),
            category=AIRPORT_CATEGORIES.get(raw_type, raw_type),
            name=(row.get("name") or "").strip(),
            runways=runways.get(ident, ()),
        ))
    return airports


def _read_csv(path: Path) -> Optional[List[Dict[str, str]]]:
    """Rows of a cached CSV, None when the file is unreadable or corrupt."""
    try:
        text = path.read_text(encoding="utf-8")
        return list(csv.DictReader(io.StringIO(text)))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.warning(f"Unreadable catalog file {path}: {e}")
        return None


def load_airport_catalog(
    cache_dir: Path = CACHE_DIR,
    max_age_days: float = AIRPORT_CATALOG_MAX_AGE_DAYS,
    client: Optional[httpx.Client] = None,
) -> Optional[List[Airport]]:
    """
    Load the airport catalog, refreshing the cache when it is too old.

    Returns None when no catalog could be obtained. Missing runway data only
    drops the runway lists.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=HTTP_TIMEOUT_SECONDS, follow_redirects=True)

    try:
        airports_path = ensure_cached(AIRPORTS_CSV_URL, cache_dir / AIRPORTS_FILE, max_age_days, client)
        runways_path = ensure_cached(RUNWAYS_CSV_URL, cache_dir / RUNWAYS_FILE, max_age_days, client)
    finally:
        if owns_client:
            client.close()

    airport_rows = _read_csv(airports_path) if airports_path else None
    if airport_rows is None:
        logger.warning("Airport catalog unavailable")
        return None

    runway_rows = _read_csv(runways_path) if runways_path else None
    runways = parse_runways(runway_rows) if runway_rows is not None else {}
    airports = parse_airports(airport_rows, runways)
    logger.info(f"Airport catalog loaded: {len(airports)} records")
    return airports
