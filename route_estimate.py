# Main script: resolves two places and reports the driving distance and duration between them.

import os
import sys
import json
import argparse
from dotenv import load_dotenv

from mapbox_adapters import DEFAULT_TIMEOUT, Geocoder, RouteEstimator
from route_structures import Location, RouteLookupError, RouteResult

DEFAULT_CONFIG_PATH = "config.json"


def load_access_token(config_path: str = DEFAULT_CONFIG_PATH) -> str | None:
    """
    Reads the Mapbox token from MAPBOX_ACCESS_TOKEN, falling back to the
    'mapbox_access_token' key of a JSON config file.
    """
    token = os.getenv("MAPBOX_ACCESS_TOKEN")
    if token:
        return token
    try:
        with open(config_path, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        print(f"   > Could not read config file '{config_path}': {e}")
        return None
    if not isinstance(config, dict):
        return None
    return config.get("mapbox_access_token") or None


def load_timeout() -> float:
    raw = os.getenv("ROUTE_HTTP_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        print(f"   > Ignoring invalid ROUTE_HTTP_TIMEOUT '{raw}', using {DEFAULT_TIMEOUT}s.")
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


# --- Presentation ---

def format_location(title: str, location: Location) -> str:
    return "\n".join([
        f"\n{title}:",
        f"  Country: {location.country}",
        f"  Region: {location.region}",
        f"  City: {location.city}",
        f"  Latitude: {location.latitude:.6f}",
        f"  Longitude: {location.longitude:.6f}",
        f"  Full address: {location.display_name}",
    ])


def format_route(route: RouteResult) -> str:
    """Converts meters and seconds into the km/minute figures shown to the user."""
    return "\n".join([
        "\nRoute information:",
        f"  Distance: {route.distance_meters:.2f} m ({route.distance_meters / 1000:.2f} km)",
        f"  Duration: {route.duration_seconds:.0f} s ({route.duration_seconds / 60:.2f} min)",
    ])


# --- Core Logic ---

def estimate_trip(first: str, second: str, geocoder: Geocoder, estimator: RouteEstimator) -> bool:
    """
    Runs one full lookup and prints the report.
    Returns False (after printing the reason) if any step fails.
    """
    print("\nResolving the first address...")
    try:
        start = geocoder.resolve(first)
    except RouteLookupError as e:
        print(f"Error geocoding the first address: {e}\n")
        return False
    print(format_location("Point 1", start))

    print("\nResolving the second address...")
    try:
        end = geocoder.resolve(second)
    except RouteLookupError as e:
        print(f"Error geocoding the second address: {e}\n")
        return False
    print(format_location("Point 2", end))

    print("\nCalculating the route...")
    try:
        route = estimator.estimate(start, end)
    except RouteLookupError as e:
        print(f"Error getting the route: {e}\n")
        return False
    print(format_route(route))
    return True


def run_session(geocoder: Geocoder, estimator: RouteEstimator, max_failures: int = 3, read=input) -> int:
    """
    Prompts for address pairs until the user enters a blank line, input ends,
    or max_failures lookups in a row have failed. Returns the process exit code.
    """
    failures = 0
    while True:
        try:
            first = read("\nEnter the first address or place (e.g. 'м. Київ, вул. Хрещатик'), blank to quit: ").strip()
            if not first:
                return 0
            second = read("Enter the second address or place: ").strip()
        except EOFError:
            return 0
        if not second:
            print("The second address cannot be empty.")
            continue

        if estimate_trip(first, second, geocoder, estimator):
            failures = 0
            print("\n=== Done ===")
            continue

        failures += 1
        if failures >= max_failures:
            print(f"Giving up after {failures} failed attempts in a row.")
            return 1


def main(argv=None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Route Estimate: driving distance and time between two places.")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the exact API calls being made.")
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH,
                        help="JSON file holding 'mapbox_access_token' (used when MAPBOX_ACCESS_TOKEN is unset).")
    parser.add_argument('--max-failures', type=int, default=3,
                        help="Stop after this many failed lookups in a row.")
    args = parser.parse_args(argv)

    if args.max_failures < 1:
        parser.error("--max-failures must be at least 1")

    token = load_access_token(args.config)
    if not token:
        print("FATAL ERROR: No Mapbox access token. Set MAPBOX_ACCESS_TOKEN "
              f"or add 'mapbox_access_token' to {args.config}.")
        return 1

    timeout = load_timeout()
    geocoder = Geocoder(token, timeout=timeout, verbose=args.verbose)
    estimator = RouteEstimator(token, timeout=timeout, verbose=args.verbose)
    return run_session(geocoder, estimator, max_failures=args.max_failures)


if __name__ == '__main__':
    sys.exit(main())
