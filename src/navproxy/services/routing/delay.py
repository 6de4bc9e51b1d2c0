"""Delay severity of a detour compared to the primary route."""

from __future__ import annotations

from ...models.domain import Severity


def classify_delay(
    alternative_duration: float,
    original_duration: float,
    extra_seconds: float = 100.0,
    ratio: float = 1.05,
) -> Severity:
    """Label a detour ``moderate`` if it passes either the absolute or the relative threshold."""
    extra_time = alternative_duration - original_duration
    if extra_time < extra_seconds:
        return Severity.MODERATE
    if original_duration > 0 and alternative_duration / original_duration < ratio:
        return Severity.MODERATE
    return Severity.HEAVY
