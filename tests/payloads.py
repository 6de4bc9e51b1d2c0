"""Builders for OSRM-shaped route payloads used across the test suite."""

from __future__ import annotations

from typing import Sequence

from navproxy.models.domain import Geopoint


def intersection(lon: float, lat: float, bearings: Sequence[float] = (0, 180), in_index: int | None = 1, out_index: int | None = 0) -> dict:
    payload = {"location": [lon, lat], "bearings": list(bearings), "entry": [True] * len(bearings)}
    if in_index is not None:
        payload["in"] = in_index
    if out_index is not None:
        payload["out"] = out_index
    return payload


def step(
    intersections: Sequence[dict],
    duration: float = 60.0,
    distance: float = 500.0,
    maneuver_type: str = "turn",
    modifier: str | None = "left",
    name: str = "",
    bearing_after: float = 0,
) -> dict:
    maneuver = {
        "type": maneuver_type,
        "bearing_before": 0,
        "bearing_after": bearing_after,
        "location": list(intersections[0]["location"]) if intersections else [0.0, 0.0],
    }
    if modifier is not None:
        maneuver["modifier"] = modifier
    return {
        "intersections": list(intersections),
        "duration": duration,
        "distance": distance,
        "geometry": "",
        "maneuver": maneuver,
        "driving_side": "right",
        "name": name,
        "mode": "driving",
        "weight": duration,
    }


def leg(steps: Sequence[dict], annotation: bool = False) -> dict:
    payload = {
        "steps": list(steps),
        "duration": sum(item["duration"] for item in steps),
        "distance": sum(item["distance"] for item in steps),
        "summary": "",
        "weight": sum(item["duration"] for item in steps),
    }
    if annotation:
        payload["annotation"] = {"distance": [1.0, 2.0], "duration": [0.1, 0.2], "nodes": [1, 2, 3]}
    return payload


def route(legs: Sequence[dict], duration: float | None = None) -> dict:
    total = sum(item["duration"] for item in legs) if duration is None else duration
    return {
        "legs": list(legs),
        "duration": total,
        "distance": sum(item["distance"] for item in legs),
        "geometry": "",
        "weight": total,
        "weight_name": "routability",
    }


def response(routes: Sequence[dict]) -> dict:
    return {"code": "Ok", "routes": list(routes), "waypoints": []}


def path_route(points: Sequence[Geopoint], duration: float) -> dict:
    """A route visiting ``points`` in order, one leg per consecutive pair.

    Every leg departs from its start point and arrives at its end point, as OSRM
    reports multi-leg routes.
    """
    spans = list(zip(points, points[1:]))
    legs = []
    for start, end in spans:
        depart = step([intersection(start.longitude, start.latitude)], duration=duration / len(spans), maneuver_type="depart")
        arrive = step(
            [intersection(end.longitude, end.latitude, bearings=(180,), in_index=0, out_index=None)],
            duration=0.0,
            distance=0.0,
            maneuver_type="arrive",
            modifier=None,
        )
        legs.append(leg([depart, arrive]))
    return route(legs, duration=duration)
