# Defines the value objects and error types shared by the geocoder and the route estimator.

import math
from dataclasses import dataclass, field

# Placeholder for administrative fields the provider did not report.
UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Location:
    """A resolved place: coordinates plus its administrative context."""
    latitude: float
    longitude: float
    display_name: str
    country: str = UNKNOWN
    region: str = UNKNOWN
    city: str = UNKNOWN

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class RouteResult:
    """Distance and duration of a single driving route, as reported by the provider."""
    distance_meters: float
    duration_seconds: float
    # (longitude, latitude) pairs of the route line.
    geometry: tuple = field(default=(), repr=False)

    def __post_init__(self):
        if not math.isfinite(self.distance_meters) or self.distance_meters < 0:
            raise ValueError(f"Invalid route distance: {self.distance_meters}")
        if not math.isfinite(self.duration_seconds) or self.duration_seconds < 0:
            raise ValueError(f"Invalid route duration: {self.duration_seconds}")


class RouteLookupError(Exception):
    """
    Base class for every failure of a geocoding or directions lookup.
    Carries the operation that failed and the query it was given.
    """

    def __init__(self, message: str, operation: str, query: str):
        super().__init__(f"{operation} failed for '{query}': {message}")
        self.operation = operation
        self.query = query


class NetworkError(RouteLookupError):
    """The provider could not be reached or rejected the request."""


class DecodeError(RouteLookupError):
    """The response body did not match the expected structure."""


class NotFoundError(RouteLookupError):
    """A well-formed response that held no usable place or route."""
