"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

import polyline

from ..exceptions import ParseError
from ..models.domain import Geopoint

EARTH_RADIUS_KM = 6371.0
LOCATION_KEY_PRECISION = 6


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_exceeds(first: Geopoint, second: Geopoint, threshold_km: float) -> bool:
    """Return True if the great-circle distance between two points is above ``threshold_km``."""

    distance = haversine_km(first.latitude, first.longitude, second.latitude, second.longitude)
    return distance > threshold_km


def destination_point(origin: Geopoint, distance_m: float, bearing_deg: float) -> Geopoint:
    """Project a point ``distance_m`` meters from ``origin`` along the initial bearing ``bearing_deg``."""

    angular = (distance_m / 1000.0) / EARTH_RADIUS_KM
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)

    sin_phi2 = math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(angular) * math.cos(theta)
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))
    y = math.sin(theta) * math.sin(angular) * math.cos(phi1)
    x = math.cos(angular) - math.sin(phi1) * sin_phi2
    lambda2 = lambda1 + math.atan2(y, x)

    longitude = (math.degrees(lambda2) + 540) % 360 - 180
    return Geopoint(latitude=math.degrees(phi2), longitude=longitude)


def parse_geopoint(value: str | Sequence[Any]) -> Geopoint:
    """Parse a ``"lon,lat"`` string or a ``[lon, lat]`` pair."""

    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",")]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            raise ParseError(f"Expected 'lon,lat', got {value!r}")
        return Geopoint.from_lon_lat(parts)
    if isinstance(value, (list, tuple)):
        return Geopoint.from_lon_lat(value)
    raise ParseError(f"Unsupported coordinate value: {value!r}")


def format_coordinates(points: Iterable[Geopoint | Mapping[str, Any]]) -> str:
    """Join points as ``lon,lat;lon,lat`` for OSRM queries."""

    formatted = []
    for point in points:
        geopoint = Geopoint.coerce(point)
        formatted.append(f"{geopoint.longitude},{geopoint.latitude}")
    return ";".join(formatted)


def location_key(location: Geopoint) -> tuple[float, float]:
    """Canonical hashable key for a location, rounded to roughly 10 cm."""

    return (
        round(location.longitude, LOCATION_KEY_PRECISION),
        round(location.latitude, LOCATION_KEY_PRECISION),
    )


def merge_step_geometries(geometries: Sequence[str], count: int = 2) -> str:
    """Decode the first ``count`` encoded polylines, concatenate them and re-encode."""

    coordinates: list[tuple[float, float]] = []
    for geometry in geometries[:count]:
        if geometry:
            coordinates.extend(polyline.decode(geometry))
    return polyline.encode(coordinates)
