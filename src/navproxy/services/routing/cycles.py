"""Detect looping routes that are unfit to present as detours."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Geopoint, Route, Waypoint
from ..geospatial import distance_exceeds, location_key


def has_waypoint_backtrack(waypoints: Sequence[Waypoint] | None) -> bool:
    """True if a waypoint lies before a previous one along the route."""
    furthest = 0.0
    for waypoint in waypoints or ():
        if waypoint.distance is None:
            continue
        if waypoint.distance < furthest:
            return True
        furthest = waypoint.distance
    return False


def has_cycle(
    route: Route,
    waypoints: Sequence[Waypoint] | None,
    origin: Geopoint,
    radius_km: float = 0.025,
) -> bool:
    """Return True if the route loops back on itself.

    A route loops when its waypoints go backwards, when any intersection
    after the very first one comes back within ``radius_km`` of the origin,
    or when it passes the same intersection twice.

    Each leg after the first departs from where the previous leg arrived, so
    that shared waypoint is not counted as a second pass.
    """
    if has_waypoint_backtrack(waypoints):
        return True

    visited: set[tuple[float, float]] = set()
    current_leg = 0
    previous_key: tuple[float, float] | None = None
    for position, (leg_index, _, _, _, intersection) in enumerate(route.iter_intersections()):
        key = location_key(intersection.location)
        if leg_index != current_leg:
            current_leg = leg_index
            if key == previous_key:
                continue

        if position > 0 and not distance_exceeds(intersection.location, origin, radius_km):
            return True

        if key in visited:
            return True
        visited.add(key)
        previous_key = key
    return False
