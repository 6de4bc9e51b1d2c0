"""Collect the upcoming intersections of a route."""

from __future__ import annotations

from dataclasses import replace

from ...models.domain import Intersection, Route


def harvest_intersections(route: Route, limit: int) -> list[Intersection]:
    """Return at most ``limit`` intersections in traversal order.

    Each record is a copy carrying the time needed to reach it: the summed
    duration of every step before the one it belongs to.
    """
    intersections: list[Intersection] = []
    if limit <= 0:
        return intersections

    elapsed = 0.0
    for leg in route.legs:
        for step in leg.steps:
            for intersection in step.intersections:
                intersections.append(replace(intersection, duration=elapsed))
                if len(intersections) >= limit:
                    return intersections
            elapsed += step.duration
    return intersections
