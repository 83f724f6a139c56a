"""
Aerofly Real-Weather - Geodetic Position Resolver
=================================================
Converts the simulator's ECEF (Earth-Centered Earth-Fixed) aircraft state
into latitude, longitude, altitude and ground speed.

Notes:
  - Latitude uses a fixed 5-pass fixed-point iteration on the WGS-84
    ellipsoid. The pass count is part of the numeric contract; there is no
    tolerance-based early exit.
  - Altitude is |r| - a (spherical surrogate). It is exact only on the
    equator and drifts up to ~21 km low toward the poles. Downstream
    consumers rely on this value, so it is kept as is.
"""

from typing import Sequence, Tuple

import numpy as np

from core.models import Position

# ===== WGS-84 CONSTANTS =====
WGS84_A = 6378137.0           # Semi-major axis [m]
WGS84_E2 = 0.00669437999014   # First eccentricity squared

LATITUDE_ITERATIONS = 5
MPS_TO_KNOTS = 1.94384


def _as_vector(values: Sequence[float], name: str) -> np.ndarray:
    vec = np.asarray(values, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have exactly 3 components, got shape {vec.shape}")
    return vec


def ecef_to_geodetic(x: float, y: float, z: float) -> Tuple[float, float]:
    """ECEF metres to WGS-84 (lat_deg, lon_deg)."""
    lon = np.arctan2(y, x)
    p = np.sqrt(x**2 + y**2)

    lat = np.arctan2(z, p * (1 - WGS84_E2))
    for _ in range(LATITUDE_ITERATIONS):
        sin_lat = np.sin(lat)
        N = WGS84_A / np.sqrt(1 - WGS84_E2 * sin_lat**2)
        lat = np.arctan2(z + WGS84_E2 * N * sin_lat, p)

    return float(np.degrees(lat)), float(np.degrees(lon))


def spherical_altitude(position_ecef: Sequence[float]) -> float:
    """Distance from the Earth's centre minus the equatorial radius [m]."""
    return float(np.linalg.norm(_as_vector(position_ecef, "position")) - WGS84_A)


def ground_speed_knots(velocity_ecef: Sequence[float]) -> float:
    """Magnitude of the ECEF velocity converted from m/s to knots."""
    return float(np.linalg.norm(_as_vector(velocity_ecef, "velocity")) * MPS_TO_KNOTS)


def resolve_position(position_ecef: Sequence[float], velocity_ecef: Sequence[float]) -> Position:
    """
    Resolve the aircraft's live position.

    Args:
        position_ecef: [x, y, z] in metres
        velocity_ecef: [vx, vy, vz] in metres/second

    Returns:
        Position with lat/lon in degrees, altitude in metres, ground speed in knots
    """
    x, y, z = _as_vector(position_ecef, "position")
    lat_deg, lon_deg = ecef_to_geodetic(x, y, z)
    return Position(
        latitude_deg=lat_deg,
        longitude_deg=lon_deg,
        altitude_m=spherical_altitude(position_ecef),
        ground_speed_kt=ground_speed_knots(velocity_ecef),
    )
