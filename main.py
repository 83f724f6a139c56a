# Aerofly Real-Weather - Main Entry Point
# Fetches METARs, derives simulator weather and writes it into main.mcf.

# Load environment variables FIRST (before any other imports)
from dotenv import load_dotenv
load_dotenv()

import argparse
import logging
from datetime import datetime
from typing import List, Optional

from config import MCF_PATH, POSITION_FILE
from collector import fetch_metar_tgftp, load_airport_catalog, read_position_file
from core.pipeline import WeatherResult, cruise_weather, route_weather
from registrar.mcf_writer import sync_time, write_weather
from synthesizer import format_weather_summary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Aerofly FS 4 real-weather updater")
    parser.add_argument("origin", nargs="?", help="Start ICAO (e.g. KSFO)")
    parser.add_argument("destination", nargs="?", help="End ICAO (e.g. KLAX)")
    parser.add_argument("--cruise", action="store_true", help="Use weather at the airport nearest the aircraft")
    parser.add_argument("--sync-time", action="store_true", help="Set the simulator clock to current UTC")
    parser.add_argument("--mcf", type=str, help=f"Path to main.mcf (default: {MCF_PATH})")
    parser.add_argument("--position-file", type=str, help=f"Aircraft state JSON (default: {POSITION_FILE})")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _prompt_route(args: argparse.Namespace) -> None:
    """Interactive fallback when the route is not given on the command line."""
    args.origin = input("Start ICAO: ").strip()
    args.destination = input("End ICAO: ").strip()
    if not args.sync_time:
        args.sync_time = input("Sync system UTC time? (y/n) ").strip().lower().startswith("y")


def _run_cruise(args: argparse.Namespace, month: int) -> Optional[WeatherResult]:
    state = read_position_file(args.position_file or POSITION_FILE)
    if state is None:
        print("✗ Aircraft position unavailable")
        return None

    catalog = load_airport_catalog()
    if catalog is None:
        print("✗ Airport catalog unavailable")
        return None

    position, velocity = state
    result = cruise_weather(position, velocity, catalog, month, fetch_metar_tgftp)
    if result is None:
        print("✗ No airport found near the aircraft")
        return None

    print(f"  Position      : {result.position.latitude_deg:.4f}, {result.position.longitude_deg:.4f}")
    print(f"  Altitude      : {result.position.altitude_m:.0f} m")
    print(f"  Ground Speed  : {result.position.ground_speed_kt:.0f} kt")
    print(f"  Nearest ICAO  : {result.airport.icao_code} {result.airport.name}")
    runway = result.runway.ident if result.runway else result.runway_number
    print(f"  Runway        : {runway}")
    return result.weather


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    mcf_path = args.mcf or MCF_PATH
    month = datetime.now().month

    if args.cruise:
        print("\nResolving aircraft position...")
        weather = _run_cruise(args, month)
        if weather is None:
            return 1
    else:
        if not (args.origin and args.destination):
            _prompt_route(args)
        print(f"\nFetching METARs for {args.origin.upper()} and {args.destination.upper()}...")
        weather = route_weather(args.origin, args.destination, month, fetch_metar_tgftp)

    if weather.used_fallback:
        print(f"⚠ METAR fetch failed for {', '.join(weather.failed_stations)}. Using clear weather.")

    try:
        write_weather(weather.state, mcf_path)
        if args.sync_time:
            sync_time(mcf_path)
    except FileNotFoundError:
        print(f"✗ Aerofly configuration not found: {mcf_path}")
        return 1

    print()
    print(format_weather_summary(weather.state))
    if args.sync_time:
        print("UTC Time Sync : enabled")
    print("Weather successfully updated in Aerofly FS4.\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
