"""
Aerofly Real-Weather - Locator Module
Aircraft position resolution and nearest-airport lookup.
"""

from .geodetic import ecef_to_geodetic, resolve_position
from .nearest_airport import find_nearest_airport, suggest_runway_number, select_runway

__all__ = [
    "ecef_to_geodetic",
    "resolve_position",
    "find_nearest_airport",
    "suggest_runway_number",
    "select_runway",
]
