"""
NOAA TG-FTP (Text) Source
Fetches the latest raw METAR line for a station from the NOAA TG-FTP server.
"""

import httpx
from typing import Optional
import logging

from config import TGFTP_METAR_URL, HTTP_TIMEOUT_SECONDS

logger = logging.getLogger("metar_tgftp")


def fetch_metar_tgftp(station_id: str, client: Optional[httpx.Client] = None) -> Optional[str]:
    """
    Fetch the raw METAR for a station (blocking, no retry).
    URL: https://tgftp.nws.noaa.gov/data/observations/metar/stations/{station_id}.TXT

    Returns None when the report is unavailable.
    """
    station_id = station_id.strip().upper()
    url = TGFTP_METAR_URL.format(station_id=station_id)

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=HTTP_TIMEOUT_SECONDS, follow_redirects=True)

    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"NOAA TG-FTP error for {station_id}: {e}")
        return None
    finally:
        if owns_client:
            client.close()

    # Format is:
    # 2024/01/12 21:00
    # KATL 122052Z 31008KT 10SM FEW250 09/01 A3012 RMK AO2 SLP198 T00890006
    lines = [line.strip() for line in response.text.strip().splitlines() if line.strip()]
    if not lines:
        logger.warning(f"NOAA TG-FTP returned an empty report for {station_id}")
        return None

    raw_ob = lines[-1]
    logger.debug(f"NOAA TG-FTP {station_id}: {raw_ob}")
    return raw_ob
