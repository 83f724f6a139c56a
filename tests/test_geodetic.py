import math
from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from locator.geodetic import (
    WGS84_A,
    WGS84_E2,
    ecef_to_geodetic,
    ground_speed_knots,
    resolve_position,
    spherical_altitude,
)


def _geodetic_to_ecef(lat_deg: float, lon_deg: float, alt_m: float = 0.0):
    lat = math.radians(lat_deg)
    lon = math.radians(lon_deg)
    n = WGS84_A / math.sqrt(1 - WGS84_E2 * math.sin(lat) ** 2)
    x = (n + alt_m) * math.cos(lat) * math.cos(lon)
    y = (n + alt_m) * math.cos(lat) * math.sin(lon)
    z = (n * (1 - WGS84_E2) + alt_m) * math.sin(lat)
    return x, y, z


def test_equator_prime_meridian() -> None:
    lat, lon = ecef_to_geodetic(6378137.0, 0.0, 0.0)

    assert lat == pytest.approx(0.0, abs=1e-12)
    assert lon == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize(
    "lat_deg, lon_deg",
    [(45.0, 0.0), (51.4775, -0.4614), (33.6407, -84.4277), (-33.9461, 151.1772), (70.0, 25.0)],
)
def test_round_trip_recovers_latitude_and_longitude(lat_deg, lon_deg) -> None:
    x, y, z = _geodetic_to_ecef(lat_deg, lon_deg, 10000.0)
    lat, lon = ecef_to_geodetic(x, y, z)

    assert lat == pytest.approx(lat_deg, abs=1e-7)
    assert lon == pytest.approx(lon_deg, abs=1e-9)


def test_north_pole() -> None:
    lat, lon = ecef_to_geodetic(0.0, 0.0, 6356752.314)

    assert lat == pytest.approx(90.0)
    assert lon == pytest.approx(0.0)


def test_altitude_is_radius_minus_equatorial_radius() -> None:
    assert spherical_altitude([WGS84_A + 1000.0, 0.0, 0.0]) == pytest.approx(1000.0)
    # Off the equator the surrogate stays spherical, not ellipsoidal
    x, y, z = _geodetic_to_ecef(45.0, 0.0, 0.0)
    assert spherical_altitude([x, y, z]) == pytest.approx(math.sqrt(x * x + y * y + z * z) - WGS84_A)
    assert spherical_altitude([x, y, z]) < -10000.0


def test_ground_speed_converts_to_knots() -> None:
    assert ground_speed_knots([100.0, 0.0, 0.0]) == pytest.approx(194.384)
    assert ground_speed_knots([30.0, 40.0, 0.0]) == pytest.approx(50 * 1.94384)
    assert ground_speed_knots([0.0, 0.0, 0.0]) == 0.0


def test_resolve_position_combines_all_fields() -> None:
    position = resolve_position([WGS84_A + 3048.0, 0.0, 0.0], [0.0, 120.0, 0.0])

    assert position.latitude_deg == pytest.approx(0.0, abs=1e-12)
    assert position.longitude_deg == pytest.approx(0.0, abs=1e-12)
    assert position.altitude_m == pytest.approx(3048.0)
    assert position.ground_speed_kt == pytest.approx(120 * 1.94384)


def test_resolve_position_rejects_short_vectors() -> None:
    with pytest.raises(ValueError):
        resolve_position([1.0, 2.0], [0.0, 0.0, 0.0])
