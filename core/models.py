from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple, Dict, Any

FEET_TO_METERS = 0.3048


@dataclass(frozen=True)
class CloudLayer:
    """One reported cloud layer (cover code + base height)."""
    code: str  # FEW / SCT / BKN / OVC
    height_ft: float

    @property
    def height_m(self) -> float:
        return self.height_ft * FEET_TO_METERS


@dataclass(frozen=True)
class Observation:
    """
    Structured view of one raw METAR line.
    Only the groups the weather engine consumes are kept.
    """
    wind_dir_deg: int = 0
    wind_speed_kt: float = 0.0
    gust_speed_kt: float = 0.0
    visibility_m: float = 9999.0
    cloud_layers: Tuple[CloudLayer, ...] = ()

    @property
    def gust_excess_kt(self) -> float:
        return max(self.gust_speed_kt - self.wind_speed_kt, 0.0)

    @property
    def is_clear(self) -> bool:
        return not self.cloud_layers


@dataclass(frozen=True)
class NormalizedState:
    """
    Simulator-ready atmosphere. Every channel except the wind direction
    lies in [0, 1].
    """
    wind_dir_deg: int
    wind_strength: float
    visibility: float
    cloud_height: float
    cloud_density: float
    turbulence: float
    cirrus_density: float
    cirrus_height: float
    thermal_activity: float

    def channels(self) -> Dict[str, float]:
        """Bounded channels only (direction excluded)."""
        d = asdict(self)
        d.pop("wind_dir_deg")
        return d

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Substituted by the caller for an airport whose report could not be fetched
CLEAR_WEATHER = NormalizedState(
    wind_dir_deg=0,
    wind_strength=0.0,
    visibility=1.0,
    cloud_height=1.0,
    cloud_density=0.0,
    turbulence=0.1,
    cirrus_density=0.05,
    cirrus_height=1.0,
    thermal_activity=0.2,
)


@dataclass(frozen=True)
class Position:
    latitude_deg: float
    longitude_deg: float
    altitude_m: float
    ground_speed_kt: float


@dataclass(frozen=True)
class Runway:
    ident: str                       # "27L", "09", ...
    heading_deg: Optional[float] = None


@dataclass(frozen=True)
class Airport:
    """Airport catalog record. Coordinates may be missing in the source data."""
    icao_code: str
    latitude_deg: Optional[float]
    longitude_deg: Optional[float]
    category: str  # large / medium / small, or the raw catalog type
    name: str = ""
    runways: Tuple[Runway, ...] = field(default_factory=tuple)
