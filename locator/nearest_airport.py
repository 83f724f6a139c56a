"""
Aerofly Real-Weather - Nearest Airport Resolver
Finds the closest eligible airport to a position and suggests a runway for the wind.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Sequence

from core.models import Airport, Runway

ELIGIBLE_CATEGORIES = {"large", "medium", "small"}

_RUNWAY_NUMBER_RE = re.compile(r"^(\d{1,2})[LRCW]?$")


def planar_distance_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Euclidean distance in degree space.

    Not a great-circle distance. Good enough at the short ranges the cruise
    lookup works at, and the ranking it produces must stay stable.
    """
    return math.sqrt((lat2 - lat1) ** 2 + (lon2 - lon1) ** 2)


def is_eligible(airport: Airport) -> bool:
    return (
        airport.category in ELIGIBLE_CATEGORIES
        and airport.latitude_deg is not None
        and airport.longitude_deg is not None
    )


def find_nearest_airport(lat: float, lon: float, catalog: Iterable[Airport]) -> Optional[Airport]:
    """
    Closest large/medium/small airport to (lat, lon).

    Returns None when no airport in the catalog is eligible. On equal
    distances the first airport in catalog order wins.
    """
    best: Optional[Airport] = None
    best_distance = math.inf
    for airport in catalog:
        if not is_eligible(airport):
            continue
        distance = planar_distance_deg(lat, lon, airport.latitude_deg, airport.longitude_deg)
        if distance < best_distance:
            best = airport
            best_distance = distance
    return best


def suggest_runway_number(wind_dir_deg: float) -> str:
    """
    Runway designator facing the wind, e.g. 355 -> "36", 4 -> "36", 5 -> "01".
    """
    number = int((wind_dir_deg + 5) // 10)
    if number <= 0:
        number = 36
    elif number > 36:
        number -= 36
    return f"{number:02d}"


def angular_difference(a_deg: float, b_deg: float) -> float:
    diff = (a_deg - b_deg) % 360
    return min(diff, 360 - diff)


def runway_heading(runway: Runway) -> Optional[float]:
    """Published heading, or the designator number x10 when the heading is missing."""
    if runway.heading_deg is not None:
        return runway.heading_deg
    match = _RUNWAY_NUMBER_RE.match(runway.ident.strip().upper())
    if not match:
        return None
    return float(int(match.group(1)) * 10)


def select_runway(wind_dir_deg: float, runways: Sequence[Runway]) -> Optional[Runway]:
    """Runway whose heading is closest to the wind direction (first wins on ties)."""
    best: Optional[Runway] = None
    best_diff = math.inf
    for runway in runways:
        heading = runway_heading(runway)
        if heading is None:
            continue
        diff = angular_difference(heading, wind_dir_deg)
        if diff < best_diff:
            best = runway
            best_diff = diff
    return best
