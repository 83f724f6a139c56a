"""
Aerofly Real-Weather - MCF Writer
Writes weather channels and the UTC clock into Aerofly FS 4's main.mcf.

Each value lives on its own line as <[type][key][value]>; a key is rewritten
in place wherever it appears, so applying the same state twice leaves the
file unchanged.
"""

import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from config import MCF_PATH, MCF_WEATHER_KEYS
from core.models import NormalizedState

logger = logging.getLogger("mcf_writer")

Number = Union[int, float]


def format_mcf_value(value: Number) -> str:
    if isinstance(value, int):
        return str(value)
    return f"{value:.6f}"


def replace_mcf_value(text: str, value_type: str, key: str, value: Number) -> str:
    """Rewrite every <[value_type][key]...> line in text."""
    pattern = re.compile(r"<\[" + re.escape(value_type) + r"\]\[" + re.escape(key) + r"\].*")
    replacement = f"<[{value_type}][{key}][{format_mcf_value(value)}]>"
    new_text, count = pattern.subn(lambda _m: replacement, text)
    if count == 0:
        logger.warning(f"Key {value_type}:{key} not found in MCF")
    return new_text


def backup_mcf(path: Path = MCF_PATH) -> Path:
    """Copy main.mcf to main.mcf.bak before it is modified."""
    backup_path = path.with_name(path.name + ".bak")
    shutil.copy2(path, backup_path)
    logger.info(f"MCF backup written: {backup_path}")
    return backup_path


def weather_values(state: NormalizedState) -> Dict[str, Number]:
    """main.mcf key -> value for every weather channel."""
    values = state.to_dict()
    return {key: values[field] for field, key in MCF_WEATHER_KEYS.items()}


def time_values(now: Optional[datetime] = None) -> Dict[str, Number]:
    """UTC wall clock as main.mcf time fields (hours carry minutes as a fraction)."""
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return {
        "time_year": now.year,
        "time_month": now.month,
        "time_day": now.day,
        "time_hours": now.hour + now.minute / 60,
    }


def _apply(path: Path, values: Dict[str, Number], types: Dict[str, str]) -> None:
    text = path.read_text(encoding="utf-8")
    for key, value in values.items():
        text = replace_mcf_value(text, types.get(key, "float64"), key, value)
    path.write_text(text, encoding="utf-8")


def write_weather(state: NormalizedState, path: Path = MCF_PATH, backup: bool = True) -> None:
    """Write every weather channel to main.mcf (float64 keys)."""
    path = Path(path)
    if backup:
        backup_mcf(path)
    _apply(path, weather_values(state), {})
    logger.info(f"Weather written to {path}")


def sync_time(path: Path = MCF_PATH, now: Optional[datetime] = None) -> Dict[str, Number]:
    """Set the simulator clock to the current UTC date and time."""
    values = time_values(now)
    types = {"time_year": "int32", "time_month": "int32", "time_day": "int32", "time_hours": "float64"}
    _apply(Path(path), values, types)
    logger.info(f"UTC time synced: {values}")
    return values
