"""Directions orchestration service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from ...config import Settings, settings as default_settings
from ...exceptions import UpstreamEngineError
from ...models.domain import AlternativeRoute, Geopoint, Intersection, Route
from ...schemas.directions import AlternativeRouteModel, IntersectionAlternatives, IntersectionSummary
from .alternatives import RoutingEngine, synthesize_alternatives
from .cycles import has_cycle
from .delay import classify_delay
from .instructions import Compiler, InstructionCompiler, augment_instructions
from .intersections import harvest_intersections
from .models import SynthesisConfig
from .normalizer import normalize_result
from .osrm_client import OSRMClient
from .translator import parse_waypoints, translate_path

logger = logging.getLogger(__name__)


def _keep_valid(
    candidates: Sequence[AlternativeRoute],
    primary: Route,
    config: SynthesisConfig,
) -> list[AlternativeRoute]:
    kept = []
    for candidate in candidates:
        origin = candidate.intersection.location
        if has_cycle(candidate.route, candidate.waypoints, origin, config.cycle_radius_km):
            logger.debug(
                f"Rejected looping detour at {origin.longitude},{origin.latitude} "
                f"({candidate.adjusted_duration:.1f}s)"
            )
            continue
        candidate.severity = classify_delay(
            candidate.adjusted_duration,
            primary.duration,
            extra_seconds=config.moderate_extra_seconds,
            ratio=config.moderate_ratio,
        )
        kept.append(candidate)
    return kept


def _serialize(intersection: Intersection, candidates: Sequence[AlternativeRoute]) -> dict:
    group = IntersectionAlternatives(
        intersection=IntersectionSummary(
            location=intersection.location.as_lon_lat(),
            duration=intersection.duration,
            bearings=list(intersection.bearings),
        ),
        routes=[
            AlternativeRouteModel(
                duration=candidate.adjusted_duration,
                base_duration=candidate.base_duration,
                severity=candidate.severity.value,
                route=candidate.payload,
            )
            for candidate in candidates
        ],
    )
    return group.model_dump()


async def find_alternatives(
    primary: Route,
    destination: Geopoint,
    engine: RoutingEngine,
    config: SynthesisConfig,
    failure_policy: str = "drop",
) -> list[dict]:
    """Synthesize, validate and label detours for the first intersections of ``primary``."""
    intersections = harvest_intersections(primary, config.intersection_limit)
    outcomes = await asyncio.gather(
        *(synthesize_alternatives(intersection, destination, engine, config) for intersection in intersections),
        return_exceptions=True,
    )

    groups = []
    for intersection, outcome in zip(intersections, outcomes):
        if isinstance(outcome, UpstreamEngineError):
            if failure_policy == "fail":
                raise outcome
            logger.warning(
                f"Dropping detours at {intersection.location.longitude},{intersection.location.latitude}: {outcome}"
            )
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        groups.append(_serialize(intersection, _keep_valid(outcome, primary, config)))

    logger.info(
        f"Found {sum(len(group['routes']) for group in groups)} detours "
        f"across {len(groups)}/{len(intersections)} intersections"
    )
    return groups


async def get_directions(
    path: str,
    *,
    engine: Any = None,
    compiler: Compiler | None = None,
    config: SynthesisConfig | None = None,
    app_settings: Settings | None = None,
) -> dict:
    """Answer a Mapbox-style directions request from the OSRM backend.

    Raises :class:`MalformedRequestError` when the path carries no
    origin/destination and :class:`UpstreamEngineError` when the primary route
    cannot be fetched.
    """
    app_settings = app_settings or default_settings
    config = config or SynthesisConfig.from_settings(app_settings)
    compiler = compiler or InstructionCompiler()

    waypoints = parse_waypoints(path)
    destination = waypoints[-1]
    osrm_path = translate_path(path, account=app_settings.directions_account)

    if engine is None:
        client = OSRMClient(
            base_url=app_settings.osrm_base_url,
            timeout=app_settings.osrm_timeout_seconds,
            max_retries=app_settings.osrm_max_retries,
            backoff_seconds=app_settings.osrm_backoff_seconds,
        )
        async with client:
            return await _run(path, osrm_path, destination, client, compiler, config, app_settings)
    return await _run(path, osrm_path, destination, engine, compiler, config, app_settings)


async def _run(
    path: str,
    osrm_path: str,
    destination: Geopoint,
    engine: Any,
    compiler: Compiler,
    config: SynthesisConfig,
    app_settings: Settings,
) -> dict:
    result = await engine.fetch(osrm_path)
    logger.info(f"Path {path} translated to {osrm_path}")

    routes = result.get("routes") or []
    if not routes:
        raise UpstreamEngineError("OSRM returned no routes.", code=result.get("code"))

    translated = normalize_result(result)
    translated["routes"][0] = augment_instructions(translated["routes"][0], compiler, app_settings.instruction_locale)

    if app_settings.include_alternatives:
        try:
            primary = Route.from_payload(routes[0])
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamEngineError(f"OSRM returned a malformed route: {exc!r}") from exc
        translated["alternatives"] = await find_alternatives(
            primary,
            destination,
            engine,
            config,
            failure_policy=app_settings.alternative_failure_policy,
        )
    return translated
