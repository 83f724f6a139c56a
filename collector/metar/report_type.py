from __future__ import annotations

from typing import Optional


def strip_report_keyword(raw_metar: Optional[str]) -> str:
    """
    Drop a leading METAR/SPECI keyword (and COR) so the body starts at the station id.

    TG-FTP lines usually start with the station id; the keyword is only
    present when the report was copied from a bulletin.
    """
    parts = str(raw_metar or "").strip().split()
    while parts and parts[0].upper() in ("METAR", "SPECI", "COR"):
        parts.pop(0)
    return " ".join(parts)
