"""
Aerofly Real-Weather - Synthesizer Module
Deterministic METAR -> simulator weather engine.
"""

from .atmosphere import (
    normalize,
    format_weather_summary,
)
from .blend import blend

__all__ = [
    "normalize",
    "blend",
    "format_weather_summary",
]
