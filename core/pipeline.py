"""
Aerofly Real-Weather - Pipeline
Ties collectors and the pure engine together for the route and cruise scenarios.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from collector.metar.metar_parser import parse_metar
from core.models import CLEAR_WEATHER, Airport, NormalizedState, Position, Runway
from core.qc import QualityControl
from locator.geodetic import resolve_position
from locator.nearest_airport import find_nearest_airport, select_runway, suggest_runway_number
from synthesizer.atmosphere import normalize
from synthesizer.blend import blend

logger = logging.getLogger("pipeline")

ReportFetcher = Callable[[str], Optional[str]]


@dataclass
class WeatherResult:
    """Final state plus the stations that fell back to clear weather."""
    state: NormalizedState
    stations: List[str]
    failed_stations: List[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return bool(self.failed_stations)


@dataclass
class CruiseResult:
    position: Position
    airport: Airport
    weather: WeatherResult
    runway_number: str
    runway: Optional[Runway] = None


def derive_state(raw_metar: Optional[str], month: int) -> Optional[NormalizedState]:
    """Raw report -> normalized state. None when the report is absent."""
    if not raw_metar or not raw_metar.strip():
        return None
    state = normalize(parse_metar(raw_metar), month)
    qc = QualityControl.check_state_bounds(state)
    if not qc.is_valid:
        logger.warning(f"State failed QC: {qc.flags}")
    return state


def station_weather(raw_reports: Sequence[Optional[str]], stations: Sequence[str], month: int) -> WeatherResult:
    """
    Derive one state per station and blend them.

    If any station's report is missing the whole result is CLEAR_WEATHER.
    """
    if len(raw_reports) != len(stations):
        raise ValueError(f"{len(raw_reports)} reports for {len(stations)} stations")
    if not stations:
        raise ValueError("at least one station is required")
    if len(stations) > 2:
        raise ValueError("at most two stations can be blended")

    states = []
    failed = []
    for station_id, raw in zip(stations, raw_reports):
        state = derive_state(raw, month)
        if state is None:
            logger.warning(f"No METAR for {station_id}")
            failed.append(station_id)
        states.append(state)

    if failed:
        logger.warning(f"Using clear weather ({', '.join(failed)} unavailable)")
        combined = CLEAR_WEATHER
    elif len(states) == 2:
        combined = blend(states[0], states[1])
    else:
        combined = states[0]

    return WeatherResult(state=combined, stations=list(stations), failed_stations=failed)


def route_weather(origin: str, destination: str, month: int, fetch: ReportFetcher) -> WeatherResult:
    """Blended origin/destination weather."""
    stations = [origin.strip().upper(), destination.strip().upper()]
    reports = [fetch(station_id) for station_id in stations]
    return station_weather(reports, stations, month)


def cruise_weather(
    position_ecef: Sequence[float],
    velocity_ecef: Sequence[float],
    catalog: Sequence[Airport],
    month: int,
    fetch: ReportFetcher,
) -> Optional[CruiseResult]:
    """
    Weather at the airport nearest to the aircraft.

    Returns None when no eligible airport exists in the catalog.
    """
    position = resolve_position(position_ecef, velocity_ecef)
    logger.info(
        f"Aircraft at {position.latitude_deg:.4f}, {position.longitude_deg:.4f} "
        f"alt={position.altitude_m:.0f}m gs={position.ground_speed_kt:.0f}kt"
    )

    airport = find_nearest_airport(position.latitude_deg, position.longitude_deg, catalog)
    if airport is None:
        logger.warning("No eligible airport found near aircraft position")
        return None

    weather = station_weather([fetch(airport.icao_code)], [airport.icao_code], month)
    wind_dir = weather.state.wind_dir_deg
    return CruiseResult(
        position=position,
        airport=airport,
        weather=weather,
        runway_number=suggest_runway_number(wind_dir),
        runway=select_runway(wind_dir, airport.runways),
    )
