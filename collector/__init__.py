"""
Aerofly Real-Weather - Collector Module
Report, airport catalog and aircraft position acquisition.
"""

from .metar.tgftp_fetcher import fetch_metar_tgftp
from .metar.metar_parser import parse_metar
from .airport_catalog import load_airport_catalog
from .position_reader import read_position_file

__all__ = [
    "fetch_metar_tgftp", "parse_metar",
    "load_airport_catalog", "read_position_file",
]
