# Contains the adapter classes for communicating with the Mapbox geocoding and directions APIs.

import requests
from urllib.parse import quote

from route_structures import (
    UNKNOWN,
    DecodeError,
    Location,
    NetworkError,
    NotFoundError,
    RouteResult,
)

DEFAULT_TIMEOUT = 10

# Mapbox context ids look like "region.8927", "place.2951" or "region.postal_region".
# Matching is done on the prefix, so every sub-type of a kind still counts.
CONTEXT_FIELDS = (
    ('country', 'country'),
    ('region', 'region'),
    ('place', 'city'),
)

# Errors raised while walking a parsed body that does not have the expected shape.
SCHEMA_ERRORS = (KeyError, IndexError, TypeError, ValueError, AttributeError)


def json_number(value) -> float:
    """Accepts JSON numbers only; strings, booleans and nulls are schema errors."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return float(value)


def json_text(value) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {value!r}")
    return value


def parse_geometry(route: dict) -> tuple:
    """
    Reads the GeoJSON line of a route as (longitude, latitude) pairs.
    The line is optional: a missing or malformed geometry yields an empty tuple.
    """
    try:
        coordinates = (route.get('geometry') or {}).get('coordinates') or []
        return tuple((json_number(point[0]), json_number(point[1])) for point in coordinates)
    except SCHEMA_ERRORS:
        return ()


class MapboxAdapter:
    """
    Shared plumbing for the Mapbox clients: credentials, transport and JSON decoding.
    The session can be anything with a requests-style get(); it defaults to the requests module.
    """
    operation = 'mapbox'

    def __init__(self, access_token: str, session=None, timeout: float = DEFAULT_TIMEOUT, verbose: bool = False):
        self.access_token = access_token
        self.session = session if session is not None else requests
        self.timeout = timeout
        self.verbose = verbose

    def fetch_json(self, url: str, query: str, extra_params: dict | None = None):
        """Issues the GET request and returns the decoded JSON body."""
        params = {'access_token': self.access_token}
        if extra_params:
            params.update(extra_params)
        if self.verbose:
            shown = {**params, 'access_token': '***'}
            print(f"   > [Mapbox] GET {url} {shown}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(str(e), self.operation, query) from e

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"response is not valid JSON ({e})", self.operation, query) from e


class Geocoder(MapboxAdapter):
    """Resolves free-text place descriptions through the Mapbox places endpoint."""
    operation = 'geocode'
    GEOCODE_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{address}.json"

    def resolve(self, address: str) -> Location:
        """
        Resolves an address, landmark or city name into a Location.

        The provider's top-ranked feature is used as-is; no secondary scoring is done.
        Raises NetworkError, DecodeError or NotFoundError.
        """
        if self.verbose:
            print(f"   > [Mapbox] Geocoding address: '{address}'...")
        url = self.GEOCODE_URL.format(address=quote(address, safe=''))
        data = self.fetch_json(url, address)

        try:
            features = data['features']
            if not isinstance(features, list):
                raise TypeError("'features' is not a list")
        except SCHEMA_ERRORS as e:
            raise DecodeError(f"unexpected geocoding response ({e!r})", self.operation, address) from e

        if not features:
            raise NotFoundError("no matching place", self.operation, address)

        try:
            return self.parse_feature(features[0])
        except SCHEMA_ERRORS as e:
            raise DecodeError(f"unexpected geocoding response ({e!r})", self.operation, address) from e

    @staticmethod
    def parse_feature(feature: dict) -> Location:
        # center is [longitude, latitude]
        center = feature['center']
        longitude, latitude = json_number(center[0]), json_number(center[1])

        admin = {'country': UNKNOWN, 'region': UNKNOWN, 'city': UNKNOWN}
        for entry in feature.get('context') or []:
            entry_id, text = json_text(entry['id']), json_text(entry['text'])
            for prefix, name in CONTEXT_FIELDS:
                if entry_id.startswith(prefix):
                    # Later entries override earlier ones.
                    admin[name] = text
                    break

        return Location(
            latitude=latitude,
            longitude=longitude,
            display_name=json_text(feature['place_name']),
            **admin,
        )


class RouteEstimator(MapboxAdapter):
    """Computes driving routes through the Mapbox directions endpoint."""
    operation = 'directions'
    DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox/driving/{coordinates}"

    @staticmethod
    def format_coordinates(origin: Location, destination: Location) -> str:
        """Formats both points as 'lon,lat;lon,lat' with six decimals each."""
        return ';'.join(
            f"{point.longitude:.6f},{point.latitude:.6f}" for point in (origin, destination)
        )

    def estimate(self, origin: Location, destination: Location) -> RouteResult:
        """
        Returns the distance and duration of the provider's first route.

        Identical points are still sent to the provider. Values are passed
        through in meters and seconds without conversion.
        """
        coordinates = self.format_coordinates(origin, destination)
        url = self.DIRECTIONS_URL.format(coordinates=coordinates)
        data = self.fetch_json(url, coordinates, {'geometries': 'geojson'})

        try:
            routes = data['routes']
            if not isinstance(routes, list):
                raise TypeError("'routes' is not a list")
        except SCHEMA_ERRORS as e:
            raise DecodeError(f"unexpected directions response ({e!r})", self.operation, coordinates) from e

        if not routes:
            raise NotFoundError("no drivable route", self.operation, coordinates)

        try:
            route = routes[0]
            result = RouteResult(
                distance_meters=json_number(route['distance']),
                duration_seconds=json_number(route['duration']),
                geometry=parse_geometry(route),
            )
        except SCHEMA_ERRORS as e:
            raise DecodeError(f"unexpected directions response ({e!r})", self.operation, coordinates) from e

        if self.verbose:
            print(f"   > [Mapbox] Route geometry: {len(result.geometry)} points")
        return result
