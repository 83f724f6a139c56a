from datetime import datetime, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.models import CLEAR_WEATHER, NormalizedState
from registrar.mcf_writer import replace_mcf_value, sync_time, write_weather


MCF_TEMPLATE = """<[file][][]
    <[tmsettings_weather][weather][]
        <[float64][direction_in_degree][0]>
        <[float64][strength][0.2]>
        <[float64][turbulence][0.5]>
        <[float64][visibility][0.9]>
        <[float64][cumulus_density][0.1]>
        <[float64][cumulus_height][0.4]>
        <[float64][cirrus_density][0.2]>
        <[float64][cirrus_height][0.6]>
        <[float64][thermal_activity][0.3]>
    >
    <[tmsettings_time][time][]
        <[int32][time_year][2020]>
        <[int32][time_month][1]>
        <[int32][time_day][1]>
        <[float64][time_hours][12.0]>
    >
>
"""

STATE = NormalizedState(
    wind_dir_deg=270,
    wind_strength=0.25,
    visibility=0.8,
    cloud_height=0.33,
    cloud_density=0.6,
    turbulence=0.1,
    cirrus_density=0.36,
    cirrus_height=0.99,
    thermal_activity=0.45,
)


def _mcf(tmp_path: Path) -> Path:
    path = tmp_path / "main.mcf"
    path.write_text(MCF_TEMPLATE, encoding="utf-8")
    return path


def test_write_weather_rewrites_every_channel_and_keeps_backup(tmp_path) -> None:
    path = _mcf(tmp_path)

    write_weather(STATE, path)
    text = path.read_text(encoding="utf-8")

    assert "        <[float64][direction_in_degree][270]>" in text
    assert "<[float64][strength][0.250000]>" in text
    assert "<[float64][turbulence][0.100000]>" in text
    assert "<[float64][visibility][0.800000]>" in text
    assert "<[float64][cumulus_density][0.600000]>" in text
    assert "<[float64][cumulus_height][0.330000]>" in text
    assert "<[float64][cirrus_density][0.360000]>" in text
    assert "<[float64][cirrus_height][0.990000]>" in text
    assert "<[float64][thermal_activity][0.450000]>" in text
    # Untouched sections survive
    assert "<[int32][time_year][2020]>" in text

    backup = tmp_path / "main.mcf.bak"
    assert backup.read_text(encoding="utf-8") == MCF_TEMPLATE


def test_write_weather_is_idempotent(tmp_path) -> None:
    path = _mcf(tmp_path)

    write_weather(CLEAR_WEATHER, path)
    first = path.read_text(encoding="utf-8")
    write_weather(CLEAR_WEATHER, path)

    assert path.read_text(encoding="utf-8") == first


def test_replace_mcf_value_missing_key_leaves_text_unchanged() -> None:
    assert replace_mcf_value(MCF_TEMPLATE, "float64", "no_such_key", 1.0) == MCF_TEMPLATE


def test_sync_time_writes_utc_clock(tmp_path) -> None:
    path = _mcf(tmp_path)
    now = datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)

    values = sync_time(path, now=now)
    text = path.read_text(encoding="utf-8")

    assert values["time_hours"] == 14.5
    assert "<[int32][time_year][2026]>" in text
    assert "<[int32][time_month][10]>" in text
    assert "<[int32][time_day][19]>" in text
    assert "<[float64][time_hours][14.500000]>" in text
    assert "<[float64][strength][0.2]>" in text
