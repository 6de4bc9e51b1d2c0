"""Directions endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from ...config import settings
from ...exceptions import MalformedRequestError, UpstreamEngineError
from ...services.routing.service import get_directions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/directions/v5", tags=["directions"])


@router.get("/{account}/{profile}/{coordinates}", status_code=status.HTTP_200_OK)
async def directions(account: str, profile: str, coordinates: str, request: Request) -> dict:
    """Route between the given ``lon,lat`` coordinates and offer detours at the next intersections."""
    if account != settings.directions_account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown directions account '{account}'")

    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"

    try:
        return await get_directions(path)
    except MalformedRequestError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamEngineError as exc:
        logger.warning(f"Routing engine failure for {path}: {exc}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error computing directions: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute directions: {str(exc)}",
        ) from exc
