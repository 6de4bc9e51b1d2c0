"""Synthesize detours that branch off the primary route at an intersection.

For every road meeting the intersection that the primary route neither
arrives on nor leaves by, a via-point is projected a short distance down that
road and the engine is asked for a route ``intersection -> via-point ->
destination``. The candidates are ranked by the total time they imply for
the trip: their own duration plus the time needed to reach the intersection.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Mapping, Protocol, Sequence

from ...exceptions import UpstreamEngineError
from ...models.domain import AlternativeRoute, Geopoint, Intersection, Route, ViaPoint, Waypoint
from ..geospatial import destination_point, merge_step_geometries
from .models import SynthesisConfig

logger = logging.getLogger(__name__)


class RoutingEngine(Protocol):
    async def route(self, coordinates: Sequence[Any], *, profile: str = "driving", steps: bool = True, **params: Any) -> dict: ...


def compute_via_points(intersection: Intersection, distance_m: float = 100.0) -> list[ViaPoint]:
    """Project a point ``distance_m`` meters down every unused road of the intersection."""
    used = {bearing for bearing in (intersection.bearing_in, intersection.bearing_out) if bearing is not None}
    return [
        ViaPoint(location=destination_point(intersection.location, distance_m, bearing), bearing=bearing)
        for bearing in intersection.bearings
        if bearing not in used
    ]


def waypoints_along(route: Route) -> list[Waypoint]:
    """Distance along the route at which each waypoint is reached."""
    travelled = 0.0
    waypoints = [Waypoint(distance=travelled)]
    for leg in route.legs:
        travelled += leg.distance
        waypoints.append(Waypoint(distance=travelled))
    return waypoints


def strip_alternative_route(route: Mapping[str, Any]) -> dict:
    """Return a copy of the route whose geometry only covers its first two steps."""
    stripped = copy.deepcopy(dict(route))
    legs = stripped.get("legs") or [{}]
    steps = legs[0].get("steps") or []
    geometries = [step.get("geometry") for step in steps[:2] if isinstance(step.get("geometry"), str)]
    stripped["geometry"] = merge_step_geometries(geometries, count=2)
    return stripped


def _candidate(intersection: Intersection, response: Mapping[str, Any], config: SynthesisConfig) -> AlternativeRoute:
    routes = response.get("routes") or []
    if not routes:
        raise UpstreamEngineError("OSRM returned no route for a detour candidate.", code=response.get("code"))
    payload = routes[0]
    if config.strip_alternatives:
        payload = strip_alternative_route(payload)
    try:
        route = Route.from_payload(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamEngineError(f"OSRM returned a malformed detour route: {exc!r}") from exc
    return AlternativeRoute(
        intersection=intersection,
        route=route,
        payload=payload,
        base_duration=route.duration,
        adjusted_duration=route.duration + intersection.duration,
        waypoints=waypoints_along(route),
    )


async def synthesize_alternatives(
    intersection: Intersection,
    destination: Geopoint,
    engine: RoutingEngine,
    config: SynthesisConfig | None = None,
) -> list[AlternativeRoute]:
    """Request one detour per unused road and rank them by adjusted duration.

    All engine requests run concurrently. If any of them fails the whole
    synthesis fails with :class:`UpstreamEngineError`.
    """
    config = config or SynthesisConfig()
    via_points = compute_via_points(intersection, config.via_point_distance_m)
    if not via_points:
        return []

    responses = await asyncio.gather(
        *(
            engine.route([intersection.location, via_point.location, destination], profile=config.profile, steps=True)
            for via_point in via_points
        )
    )
    candidates = [_candidate(intersection, response, config) for response in responses]
    ranked = sorted(candidates, key=lambda candidate: candidate.adjusted_duration)
    logger.debug(
        f"Synthesized {len(ranked)} detours at {intersection.location.longitude},{intersection.location.latitude}"
    )
    return ranked
