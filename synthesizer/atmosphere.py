"""
Aerofly Real-Weather - Atmosphere Engine (Deterministic)
Maps a decoded METAR onto the simulator's bounded weather channels.
"""

import math
from typing import Sequence

from config import CLOUD_DENSITY, GROWING_SEASON_MONTHS
from core.models import CloudLayer, NormalizedState, Observation

# Normalization scales
WIND_FULL_SCALE_KT = 40.0
VISIBILITY_FULL_SCALE_M = 50000.0
VISIBILITY_SATURATION_RATE = 5.0
CLOUD_HEIGHT_FULL_SCALE_M = 3000.0
GUST_FULL_SCALE_KT = 20.0
GUST_EXPONENT = 1.6

# Floors
TURBULENCE_FLOOR = 0.1
CIRRUS_DENSITY_FLOOR = 0.05

# Winter bias
WINTER_THERMAL_FACTOR = 0.8
WINTER_VISIBILITY_FACTOR = 0.9


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def wind_strength_from_speed(speed_kt: float) -> float:
    return clamp(speed_kt / WIND_FULL_SCALE_KT, 0.0, 1.0)


def visibility_from_distance(visibility_m: float) -> float:
    """
    Exponential saturation: low visibility degrades clarity sharply while
    anything beyond ~30 km reads as clear. visibility(50 km) = 1 - e^-5.
    """
    ratio = clamp(visibility_m / VISIBILITY_FULL_SCALE_M, 0.0, 1.0)
    return clamp(1.0 - math.exp(-VISIBILITY_SATURATION_RATE * ratio), 0.0, 1.0)


def turbulence_from_gust_excess(gust_excess_kt: float) -> float:
    """Gust-factor law with a residual floor of 0.1."""
    excess = max(gust_excess_kt, 0.0)
    return clamp((excess / GUST_FULL_SCALE_KT) ** GUST_EXPONENT, TURBULENCE_FLOOR, 1.0)


def cloud_density_from_layers(layers: Sequence[CloudLayer]) -> float:
    """Mean cover density across all layers, 0 for a clear sky."""
    if not layers:
        return 0.0
    return sum(CLOUD_DENSITY.get(layer.code, 0.0) for layer in layers) / len(layers)


def cloud_height_from_layers(layers: Sequence[CloudLayer]) -> float:
    """Mean base height scaled to 3000 m, 0 for a clear sky."""
    if not layers:
        return 0.0
    mean_height_m = sum(layer.height_m for layer in layers) / len(layers)
    return clamp(mean_height_m / CLOUD_HEIGHT_FULL_SCALE_M, 0.0, 1.0)


def is_growing_season(month: int) -> bool:
    return month in GROWING_SEASON_MONTHS


def normalize(obs: Observation, month: int) -> NormalizedState:
    """
    Derive the full simulator state from one observation.

    Base channels come straight from the report; cirrus and thermal
    channels are derived from them. Outside March-October thermals weaken
    (x0.8) and haze worsens (x0.9). The winter factors are applied last and
    are not clamped again.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1..12, got {month}")

    wind_strength = wind_strength_from_speed(obs.wind_speed_kt)
    visibility = visibility_from_distance(obs.visibility_m)
    cloud_density = cloud_density_from_layers(obs.cloud_layers)
    cloud_height = cloud_height_from_layers(obs.cloud_layers)
    turbulence = turbulence_from_gust_excess(obs.gust_speed_kt - obs.wind_speed_kt)

    cirrus_density = clamp(0.6 * (1.0 - visibility) + 0.4 * cloud_density, CIRRUS_DENSITY_FLOOR, 1.0)
    cirrus_height = clamp(3.0 * cloud_height, 0.0, 1.0)
    thermal_activity = clamp(
        0.5 * cloud_density + 0.3 * wind_strength + 0.2 * (1.0 - visibility),
        0.0,
        1.0,
    )

    if not is_growing_season(month):
        thermal_activity *= WINTER_THERMAL_FACTOR
        visibility *= WINTER_VISIBILITY_FACTOR

    return NormalizedState(
        wind_dir_deg=obs.wind_dir_deg,
        wind_strength=wind_strength,
        visibility=visibility,
        cloud_height=cloud_height,
        cloud_density=cloud_density,
        turbulence=turbulence,
        cirrus_density=cirrus_density,
        cirrus_height=cirrus_height,
        thermal_activity=thermal_activity,
    )


def format_weather_summary(state: NormalizedState) -> str:
    """Console block listing every channel written to the simulator."""
    rows = [
        ("Wind Direction", f"{state.wind_dir_deg}°"),
        ("Wind Strength", f"{state.wind_strength:.3f}"),
        ("Visibility", f"{state.visibility:.3f}"),
        ("Cloud Base", f"{state.cloud_height:.3f}"),
        ("Cumulus Dens.", f"{state.cloud_density:.3f}"),
        ("Cirrus Height", f"{state.cirrus_height:.3f}"),
        ("Cirrus Dens.", f"{state.cirrus_density:.3f}"),
        ("Turbulence", f"{state.turbulence:.3f}"),
        ("Thermals", f"{state.thermal_activity:.3f}"),
    ]
    lines = ["--- Final Weather Summary ---"]
    lines.extend(f"{label:<14}: {value}" for label, value in rows)
    return "\n".join(lines)
