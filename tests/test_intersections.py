from navproxy.models.domain import Route
from navproxy.services.routing.intersections import harvest_intersections

import payloads


def _route_with_intersections(per_step: int, step_durations: list[float], legs: int = 1) -> Route:
    built_legs = []
    counter = 0
    for _ in range(legs):
        steps = []
        for duration in step_durations:
            points = []
            for _ in range(per_step):
                counter += 1
                points.append(payloads.intersection(13.0 + counter * 0.001, 52.0))
            steps.append(payloads.step(points, duration=duration))
        built_legs.append(payloads.leg(steps))
    return Route.from_payload(payloads.route(built_legs))


def test_harvest_never_exceeds_limit():
    route = _route_with_intersections(per_step=4, step_durations=[10, 20, 30], legs=3)

    harvested = harvest_intersections(route, 5)

    assert len(harvested) == 5
    assert [item.location.longitude for item in harvested] == [
        13.0 + index * 0.001 for index in range(1, 6)
    ]


def test_harvest_returns_everything_below_limit():
    route = _route_with_intersections(per_step=1, step_durations=[10, 20])
    assert len(harvest_intersections(route, 5)) == 2


def test_harvest_with_non_positive_limit_is_empty():
    route = _route_with_intersections(per_step=1, step_durations=[10])
    assert harvest_intersections(route, 0) == []


def test_harvest_stamps_time_to_reach():
    route = _route_with_intersections(per_step=2, step_durations=[10, 20, 30], legs=2)

    harvested = harvest_intersections(route, 12)

    assert [item.duration for item in harvested] == [
        0, 0, 10, 10, 30, 30,  # first leg
        60, 60, 70, 70, 90, 90,  # second leg continues the running total
    ]


def test_harvest_does_not_mutate_route():
    route = _route_with_intersections(per_step=1, step_durations=[10, 20])

    harvested = harvest_intersections(route, 5)

    assert harvested[1].duration == 10
    assert all(
        intersection.duration == 0
        for leg in route.legs
        for step in leg.steps
        for intersection in step.intersections
    )
