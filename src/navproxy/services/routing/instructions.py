"""Voice and banner instructions for OSRM steps."""

from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, Protocol

from ...exceptions import InstructionCompilationError
from ...schemas.directions import (
    BannerComponent,
    BannerInstruction,
    BannerPrimary,
    VoiceInstruction,
)

logger = logging.getLogger(__name__)

SSML_TEMPLATE = '<speak><amazon:effect name="drc"><prosody rate="1.08">{text}</prosody></amazon:effect></speak>'

_MOVE_TYPES = ("turn", "new name", "continue", "merge", "on ramp", "off ramp", "fork", "end of road")


class Compiler(Protocol):
    def compile(self, locale: str, step: Mapping[str, Any]) -> str: ...

    def get_way_name(self, locale: str, step: Mapping[str, Any]) -> str: ...


class InstructionCompiler:
    """Compile English instruction text from an OSRM step."""

    supported_locales = ("en",)

    def _check_locale(self, locale: str) -> None:
        if locale.split("-")[0].lower() not in self.supported_locales:
            raise InstructionCompilationError(f"Unsupported locale: {locale}")

    def get_way_name(self, locale: str, step: Mapping[str, Any]) -> str:
        self._check_locale(locale)
        name = (step.get("name") or "").strip()
        ref = (step.get("ref") or "").strip()
        if name and ref and ref not in name:
            return f"{name} ({ref})"
        return name or ref

    def compile(self, locale: str, step: Mapping[str, Any]) -> str:
        self._check_locale(locale)
        maneuver = step.get("maneuver")
        if not isinstance(maneuver, Mapping) or not maneuver.get("type"):
            raise InstructionCompilationError("Step has no maneuver type")

        mtype = maneuver["type"]
        modifier = maneuver.get("modifier")
        road = self.get_way_name(locale, step)

        if mtype == "depart":
            heading = _heading(maneuver.get("bearing_after"))
            return f"Head {heading} on {road}" if road else f"Head {heading}"
        if mtype == "arrive":
            if modifier in ("left", "right"):
                return f"You have arrived at your destination, on the {modifier}"
            return "You have arrived at your destination"
        if mtype in ("roundabout", "rotary", "exit roundabout", "exit rotary"):
            exit_number = maneuver.get("exit")
            if exit_number:
                ordinal = _ordinal(int(exit_number))
                return f"Enter the roundabout and take the {ordinal} exit onto {road}" if road else f"Enter the roundabout and take the {ordinal} exit"
            return f"Enter the roundabout and exit onto {road}" if road else "Enter the roundabout"
        if mtype in _MOVE_TYPES:
            verb = "Go" if modifier == "straight" else mtype.capitalize()
            if modifier and road:
                return f"{verb} {modifier} onto {road}"
            if modifier:
                return f"{verb} {modifier}"
            return f"{verb} onto {road}" if road else verb
        if road:
            return f"{mtype.capitalize()} onto {road}"
        return mtype.capitalize()


def _ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def _heading(bearing: Any) -> str:
    if bearing is None:
        return "straight"
    directions = ("north", "northeast", "east", "southeast", "south", "southwest", "west", "northwest")
    return directions[int(((float(bearing) % 360) + 22.5) // 45) % 8]


def _step_decorations(step: Mapping[str, Any], next_step: Mapping[str, Any], compiler: Compiler, locale: str) -> tuple[dict, dict]:
    announcement = compiler.compile(locale, next_step)
    way_name = compiler.get_way_name(locale, next_step)
    next_maneuver = next_step.get("maneuver") or {}
    distance = step.get("distance", 0.0)

    voice = VoiceInstruction(
        distanceAlongGeometry=distance,
        announcement=announcement,
        ssmlAnnouncement=SSML_TEMPLATE.format(text=announcement),
    )
    banner = BannerInstruction(
        distanceAlongGeometry=distance,
        primary=BannerPrimary(
            text=way_name,
            components=[BannerComponent(text=announcement, type="text")],
            type=next_maneuver.get("type"),
            modifier=next_maneuver.get("modifier"),
            degrees=next_maneuver.get("bearing_after"),
            driving_side=next_step.get("driving_side"),
        ),
        secondary=None,
    )
    return voice.model_dump(), banner.model_dump()


def augment_instructions(route: Mapping[str, Any], compiler: Compiler, locale: str = "en") -> dict:
    """Return a copy of ``route`` whose steps announce the upcoming maneuver.

    Every step but the last of each leg gets voice and banner instructions
    built from the next step. The step's own instruction text is cleared.
    """
    augmented = copy.deepcopy(dict(route))
    for leg in augmented.get("legs") or []:
        steps = leg.get("steps") or []
        for index, step in enumerate(steps):
            maneuver = step.setdefault("maneuver", {})
            maneuver["instruction"] = ""
            if index + 1 >= len(steps):
                break
            try:
                voice, banner = _step_decorations(step, steps[index + 1], compiler, locale)
            except InstructionCompilationError as exc:
                logger.warning(f"Skipping instructions for step {index}: {exc}")
                continue
            step["voiceInstructions"] = [voice]
            step["bannerInstructions"] = [banner]
    return augmented
