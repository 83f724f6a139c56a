"""
Utilities to decode the weather-engine groups from a raw METAR line.

Key rules:
- Parsing never fails. A missing or malformed group falls back to its
  documented default through `safe_number`.
- Wind: (ddd|VRB)ss(Gxx)KT. VRB reads as 180 degrees; no wind group reads as calm.
- Visibility: first standalone 4-digit group, default 9999 (metres).
- Clouds: every FEW/SCT/BKN/OVC layer with a 3-digit height in hundreds of feet.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from collector.metar.report_type import strip_report_keyword
from core.models import CloudLayer, Observation
from core.qc import safe_number


_WIND_RE = re.compile(r"\b(\d{3}|VRB)(\d{2})(?:G(\d{2}))?KT\b")
_VISIBILITY_RE = re.compile(r"(?<= )(\d{4})(?= )")
_CLOUD_RE = re.compile(r"(FEW|SCT|BKN|OVC)(\d{3})")

VARIABLE_WIND_DIR_DEG = 180
DEFAULT_VISIBILITY_M = 9999.0


def _parse_wind(body: str) -> Tuple[int, float, float]:
    match = _WIND_RE.search(body)
    if not match:
        # No wind group: calm
        return 0, 0.0, 0.0

    direction_token, speed_token, gust_token = match.groups()
    speed = safe_number(speed_token, 0.0)
    if direction_token == "VRB":
        direction = VARIABLE_WIND_DIR_DEG
    else:
        direction = int(safe_number(direction_token, 0.0)) % 360
    gust = safe_number(gust_token, speed)
    return direction, speed, max(gust, speed)


def _parse_visibility(body: str) -> float:
    match = _VISIBILITY_RE.search(body)
    return safe_number(match.group(1) if match else None, DEFAULT_VISIBILITY_M)


def _parse_clouds(body: str) -> Tuple[CloudLayer, ...]:
    layers: List[CloudLayer] = []
    for code, height_token in _CLOUD_RE.findall(body):
        hundreds_ft = safe_number(height_token, 0.0)
        layers.append(CloudLayer(code=code, height_ft=hundreds_ft * 100.0))
    return tuple(layers)


def parse_metar(raw_metar: Optional[str]) -> Observation:
    """
    Decode a raw METAR line into an Observation.

    Remarks are ignored so that remark groups cannot be read as
    visibility or cloud layers.
    """
    body = strip_report_keyword(raw_metar).split(" RMK ", 1)[0]

    direction, speed, gust = _parse_wind(body)

    return Observation(
        wind_dir_deg=direction,
        wind_speed_kt=speed,
        gust_speed_kt=gust,
        visibility_m=_parse_visibility(body),
        cloud_layers=_parse_clouds(body),
    )
