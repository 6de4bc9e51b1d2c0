"""Translate Mapbox-style directions paths into OSRM route queries."""

from __future__ import annotations

from ...exceptions import MalformedRequestError, ParseError
from ...models.domain import Geopoint
from ..geospatial import parse_geopoint

ROUTE_PREFIX = "route/v1"
ROUTE_QUERY = "steps=true&annotations=true&overview=full&continue_straight=true"


def translate_path(original_path: str, account: str = "mapbox") -> str:
    """Map the directions endpoint to the OSRM route endpoint.

    All GET params from the client are dropped and replaced by the fixed set
    OSRM needs to produce step-level output. Malformed paths are passed
    through untouched and surface as engine errors.
    """
    path = original_path.replace(f"directions/v5/{account}", ROUTE_PREFIX, 1)
    return f"{path.split('?')[0]}?{ROUTE_QUERY}"


def parse_waypoints(original_path: str) -> list[Geopoint]:
    """Return the ordered coordinates carried by the last path segment."""
    path = original_path.split("?")[0].rstrip("/")
    segment = path.rsplit("/", 1)[-1] if "/" in path else ""
    coordinates = [item for item in segment.split(";") if item]
    if len(coordinates) < 2:
        raise MalformedRequestError(f"Expected origin and destination coordinates in {original_path!r}")
    try:
        return [parse_geopoint(item) for item in coordinates]
    except ParseError as exc:
        raise MalformedRequestError(f"Invalid coordinate in {original_path!r}: {exc}") from exc


def get_origin(original_path: str) -> Geopoint:
    return parse_waypoints(original_path)[0]


def get_destination(original_path: str) -> Geopoint:
    return parse_waypoints(original_path)[-1]
