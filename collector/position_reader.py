"""
Aerofly Real-Weather - Position Reader
Reads the aircraft's exported ECEF position/velocity pair.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from config import POSITION_FILE

logger = logging.getLogger("position_reader")


def _vector(value) -> Optional[List[float]]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return None
    try:
        return [float(v) for v in value]
    except (TypeError, ValueError):
        return None


def read_position_file(path: Path = POSITION_FILE) -> Optional[Tuple[List[float], List[float]]]:
    """
    Load {"position": [x, y, z], "velocity": [vx, vy, vz]} (metres, m/s).

    Returns None when the file is missing or does not hold two 3-vectors.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning(f"Position file not found: {path}")
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Position file unreadable ({path}): {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Position file has no position/velocity object: {path}")
        return None

    position = _vector(data.get("position"))
    velocity = _vector(data.get("velocity"))
    if position is None or velocity is None:
        logger.warning(f"Position file needs 3-component position and velocity: {path}")
        return None
    return position, velocity
