from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.models import Airport, Runway
from locator.nearest_airport import (
    angular_difference,
    find_nearest_airport,
    planar_distance_deg,
    select_runway,
    suggest_runway_number,
)


def _airport(code, lat, lon, category="large", runways=()):
    return Airport(icao_code=code, latitude_deg=lat, longitude_deg=lon, category=category, runways=runways)


def test_nearest_airport_picks_closest() -> None:
    catalog = [_airport("A", 0.0, 0.0), _airport("B", 10.0, 10.0)]

    assert find_nearest_airport(1.0, 1.0, catalog).icao_code == "A"
    assert find_nearest_airport(9.0, 9.5, catalog).icao_code == "B"


def test_nearest_airport_first_wins_on_ties() -> None:
    catalog = [_airport("EAST", 0.0, 1.0), _airport("WEST", 0.0, -1.0)]

    assert find_nearest_airport(0.0, 0.0, catalog).icao_code == "EAST"
    assert find_nearest_airport(0.0, 0.0, list(reversed(catalog))).icao_code == "WEST"


def test_nearest_airport_skips_ineligible_records() -> None:
    catalog = [
        _airport("HELI", 0.0, 0.0, category="heliport"),
        _airport("CLSD", 0.0, 0.01, category="closed"),
        _airport("NOLA", None, 0.0),
        _airport("NOLO", 0.0, None),
        _airport("SMAL", 2.0, 2.0, category="small"),
        _airport("MEDI", 3.0, 3.0, category="medium"),
    ]

    assert find_nearest_airport(0.0, 0.0, catalog).icao_code == "SMAL"


def test_nearest_airport_not_found() -> None:
    assert find_nearest_airport(0.0, 0.0, []) is None
    assert find_nearest_airport(0.0, 0.0, [_airport("HELI", 0.0, 0.0, category="heliport")]) is None


def test_planar_distance_is_degree_space_euclidean() -> None:
    assert planar_distance_deg(0.0, 0.0, 3.0, 4.0) == pytest.approx(5.0)
    # Longitude degrees count the same at any latitude
    assert planar_distance_deg(80.0, 0.0, 80.0, 1.0) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "wind_dir, expected",
    [(355, "36"), (359, "36"), (4, "36"), (0, "36"), (5, "01"), (94, "09"), (95, "10"), (265, "27"), (180, "18")],
)
def test_suggest_runway_number(wind_dir, expected) -> None:
    assert suggest_runway_number(wind_dir) == expected


def test_angular_difference_wraps_around_north() -> None:
    assert angular_difference(350, 10) == 20
    assert angular_difference(10, 350) == 20
    assert angular_difference(90, 270) == 180


def test_select_runway_prefers_heading_closest_to_wind() -> None:
    runways = (Runway("09", 92.0), Runway("27", 272.0))

    assert select_runway(250, runways).ident == "27"
    assert select_runway(60, runways).ident == "09"


def test_select_runway_first_wins_on_ties() -> None:
    runways = (Runway("09", 90.0), Runway("27", 270.0))

    assert select_runway(0, runways).ident == "09"


def test_select_runway_falls_back_to_designator_heading() -> None:
    runways = (Runway("04L", None), Runway("22R", None), Runway("H1", None))

    assert select_runway(210, runways).ident == "22R"
    assert select_runway(30, (Runway("H1", None),)) is None
    assert select_runway(30, ()) is None
