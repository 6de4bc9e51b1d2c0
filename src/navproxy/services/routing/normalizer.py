"""Shape OSRM responses into what Mapbox navigation clients expect."""

from __future__ import annotations

import copy
import uuid
from typing import Any, Mapping


def normalize_result(original_result: Mapping[str, Any], request_id: str | None = None) -> dict:
    """Return a copy of the OSRM response with a ``uuid`` and without per-leg annotations.

    The Mapbox SDK crashes on responses without a uuid.
    """
    translated = copy.deepcopy(dict(original_result))
    translated["uuid"] = request_id or uuid.uuid4().hex
    for route in translated.get("routes") or []:
        for leg in route.get("legs") or []:
            leg.pop("annotation", None)
    return translated
