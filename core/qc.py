from typing import List, Optional
from dataclasses import dataclass
import re

from core.models import NormalizedState

_SAFE_NUMBER_RE = re.compile(r"^[0-9.]+$")


@dataclass
class QCResult:
    is_valid: bool
    status: str  # OK, OUT_OF_BOUNDS
    flags: List[str]


def safe_number(raw: Optional[str], default: float) -> float:
    """
    Guard for every numeric report field.

    Accepts only unsigned digits/dots; anything else (None, empty, "//",
    "M05", "1.2.3") yields the caller's default instead of an error.
    """
    if raw is None:
        return default
    text = str(raw).strip()
    if not text or not _SAFE_NUMBER_RE.match(text):
        return default
    try:
        return float(text)
    except ValueError:
        # "1.2.3" passes the character check but is not a number
        return default


class QualityControl:
    """
    Quality Control (QC) rules for derived weather states.
    """

    CHANNEL_MIN = 0.0
    CHANNEL_MAX = 1.0

    @staticmethod
    def check_state_bounds(state: NormalizedState) -> QCResult:
        """Every non-direction channel must lie in [0, 1]."""
        flags = []
        for name, value in state.channels().items():
            if not (QualityControl.CHANNEL_MIN <= value <= QualityControl.CHANNEL_MAX):
                flags.append(f"{name.upper()}_OUT_OF_BOUNDS")

        if not (0 <= state.wind_dir_deg < 360):
            flags.append("WIND_DIR_OUT_OF_RANGE")

        if flags:
            return QCResult(False, "OUT_OF_BOUNDS", flags)
        return QCResult(True, "OK", flags)
