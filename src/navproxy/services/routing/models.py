"""Routing configuration models."""

from __future__ import annotations

from dataclasses import dataclass

from ...config import Settings


@dataclass(frozen=True, slots=True)
class SynthesisConfig:
    """Constants governing detour synthesis, validation and labelling."""

    via_point_distance_m: float = 100.0
    intersection_limit: int = 5
    cycle_radius_km: float = 0.025
    moderate_extra_seconds: float = 100.0
    moderate_ratio: float = 1.05
    profile: str = "driving"
    strip_alternatives: bool = False

    @classmethod
    def from_settings(cls, config: Settings) -> "SynthesisConfig":
        return cls(
            via_point_distance_m=config.via_point_distance_m,
            intersection_limit=config.intersection_limit,
            cycle_radius_km=config.cycle_radius_km,
            moderate_extra_seconds=config.moderate_extra_seconds,
            moderate_ratio=config.moderate_ratio,
            profile=config.alternatives_profile,
            strip_alternatives=config.strip_alternatives,
        )
