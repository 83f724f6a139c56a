"""
Aerofly Real-Weather - Configuration
Central configuration for report sources, the airport catalog and the simulator file.
"""

import os as _os
from pathlib import Path


def _env_str(name: str, default: str) -> str:
    return str(_os.environ.get(name, default)).strip() or default


def _env_float(name: str, default: float) -> float:
    raw = _os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = _os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ============================================================================
# REPORT SOURCES
# ============================================================================

# NOAA TG-FTP station files (plain text, header line + raw report)
TGFTP_METAR_URL = "https://tgftp.nws.noaa.gov/data/observations/metar/stations/{station_id}.TXT"

HTTP_TIMEOUT_SECONDS = _env_float("AEROWX_HTTP_TIMEOUT_SECONDS", 10.0)

# ============================================================================
# AIRPORT CATALOG (OurAirports)
# ============================================================================

AIRPORTS_CSV_URL = "https://davidmegginson.github.io/ourairports-data/airports.csv"
RUNWAYS_CSV_URL = "https://davidmegginson.github.io/ourairports-data/runways.csv"

CACHE_DIR = Path(_env_str("AEROWX_CACHE_DIR", str(Path.home() / ".cache" / "aerofly_realweather")))

# Cached catalog files older than this are downloaded again
AIRPORT_CATALOG_MAX_AGE_DAYS = _env_int("AIRPORT_CATALOG_MAX_AGE_DAYS", 30)

# Catalog "type" column -> resolver category
AIRPORT_CATEGORIES = {
    "large_airport": "large",
    "medium_airport": "medium",
    "small_airport": "small",
}

# ============================================================================
# SIMULATOR FILES
# ============================================================================

MCF_PATH = Path(_env_str(
    "AEROFLY_MCF_PATH",
    str(Path.home() / "Library" / "Application Support" / "Aerofly FS 4" / "main.mcf"),
))

# Live aircraft state exported as {"position": [x, y, z], "velocity": [vx, vy, vz]}
POSITION_FILE = Path(_env_str("AEROWX_POSITION_FILE", str(CACHE_DIR / "position.json")))

# NormalizedState channel -> main.mcf float64 key
MCF_WEATHER_KEYS = {
    "wind_dir_deg": "direction_in_degree",
    "wind_strength": "strength",
    "turbulence": "turbulence",
    "visibility": "visibility",
    "cloud_density": "cumulus_density",
    "cloud_height": "cumulus_height",
    "cirrus_density": "cirrus_density",
    "cirrus_height": "cirrus_height",
    "thermal_activity": "thermal_activity",
}

# ============================================================================
# WEATHER MODEL
# ============================================================================

# Months with full thermal activity; outside this window the seasonal bias applies
GROWING_SEASON_MONTHS = range(3, 11)

# Cloud cover code -> cumulus density
CLOUD_DENSITY = {
    "FEW": 0.3,
    "SCT": 0.5,
    "BKN": 0.7,
    "OVC": 1.0,
}
