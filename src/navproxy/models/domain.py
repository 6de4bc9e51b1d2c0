"""Domain models for routes returned by the routing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..exceptions import ParseError


@dataclass(frozen=True, slots=True)
class Geopoint:
    """A WGS84 coordinate. OSRM and the client both order pairs as lon,lat."""

    latitude: float
    longitude: float

    @classmethod
    def from_lon_lat(cls, pair: Sequence[Any]) -> "Geopoint":
        if len(pair) < 2:
            raise ParseError(f"Expected a lon,lat pair, got {pair!r}")
        try:
            return cls(latitude=float(pair[1]), longitude=float(pair[0]))
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Non-numeric coordinate in {pair!r}") from exc

    @classmethod
    def coerce(cls, value: Any) -> "Geopoint":
        """Normalize a Geopoint, a lon/lat pair or a lat/lon mapping into a Geopoint."""
        if isinstance(value, Geopoint):
            return value
        if isinstance(value, Mapping):
            if "latitude" in value and "longitude" in value:
                return cls.from_lon_lat((value["longitude"], value["latitude"]))
            if "lat" in value and "lon" in value:
                return cls.from_lon_lat((value["lon"], value["lat"]))
            raise ParseError(f"Mapping has no lat/lon keys: {sorted(value)}")
        if isinstance(value, (list, tuple)):
            return cls.from_lon_lat(value)
        raise ParseError(f"Unsupported coordinate value: {value!r}")

    def as_lon_lat(self) -> list[float]:
        return [self.longitude, self.latitude]


class Severity(str, Enum):
    MODERATE = "moderate"
    HEAVY = "heavy"


@dataclass(slots=True)
class Maneuver:
    type: str
    modifier: Optional[str] = None
    bearing_before: Optional[float] = None
    bearing_after: Optional[float] = None
    location: Optional[Geopoint] = None
    exit: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Maneuver":
        location = payload.get("location")
        return cls(
            type=payload.get("type", ""),
            modifier=payload.get("modifier"),
            bearing_before=payload.get("bearing_before"),
            bearing_after=payload.get("bearing_after"),
            location=Geopoint.from_lon_lat(location) if location else None,
            exit=payload.get("exit"),
        )


@dataclass(slots=True)
class Intersection:
    """A point where roads meet. ``duration`` is the time needed to reach it, in seconds."""

    location: Geopoint
    bearings: tuple[float, ...]
    in_index: Optional[int] = None
    out_index: Optional[int] = None
    duration: float = 0.0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Intersection":
        return cls(
            location=Geopoint.from_lon_lat(payload["location"]),
            bearings=tuple(payload.get("bearings") or ()),
            in_index=payload.get("in"),
            out_index=payload.get("out"),
        )

    @property
    def bearing_in(self) -> Optional[float]:
        if self.in_index is None or not 0 <= self.in_index < len(self.bearings):
            return None
        return self.bearings[self.in_index]

    @property
    def bearing_out(self) -> Optional[float]:
        if self.out_index is None or not 0 <= self.out_index < len(self.bearings):
            return None
        return self.bearings[self.out_index]


@dataclass(slots=True)
class Step:
    maneuver: Maneuver
    intersections: list[Intersection]
    duration: float
    distance: float
    geometry: Optional[str] = None
    driving_side: Optional[str] = None
    name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Step":
        return cls(
            maneuver=Maneuver.from_payload(payload.get("maneuver") or {}),
            intersections=[Intersection.from_payload(item) for item in payload.get("intersections") or []],
            duration=float(payload.get("duration") or 0.0),
            distance=float(payload.get("distance") or 0.0),
            geometry=payload.get("geometry"),
            driving_side=payload.get("driving_side"),
            name=payload.get("name") or "",
        )


@dataclass(slots=True)
class Leg:
    steps: list[Step]
    duration: float = 0.0
    distance: float = 0.0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Leg":
        return cls(
            steps=[Step.from_payload(item) for item in payload.get("steps") or []],
            duration=float(payload.get("duration") or 0.0),
            distance=float(payload.get("distance") or 0.0),
        )


@dataclass(slots=True)
class Route:
    legs: list[Leg]
    duration: float
    distance: float
    geometry: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Route":
        geometry = payload.get("geometry")
        return cls(
            legs=[Leg.from_payload(item) for item in payload.get("legs") or []],
            duration=float(payload.get("duration") or 0.0),
            distance=float(payload.get("distance") or 0.0),
            geometry=geometry if isinstance(geometry, str) else None,
        )

    def iter_intersections(self):
        """Yield ``(leg_index, step_index, intersection_index, step, intersection)`` in traversal order."""
        for leg_index, leg in enumerate(self.legs):
            for step_index, step in enumerate(leg.steps):
                for intersection_index, intersection in enumerate(step.intersections):
                    yield leg_index, step_index, intersection_index, step, intersection


@dataclass(frozen=True, slots=True)
class ViaPoint:
    location: Geopoint
    bearing: float


@dataclass(frozen=True, slots=True)
class Waypoint:
    distance: Optional[float] = None


@dataclass(slots=True)
class AlternativeRoute:
    intersection: Intersection
    route: Route
    payload: dict
    base_duration: float
    adjusted_duration: float
    severity: Optional[Severity] = None
    waypoints: list[Waypoint] = field(default_factory=list)
