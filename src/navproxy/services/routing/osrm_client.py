"""HTTP client for interacting with OSRM services."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping

import httpx

from ...config import settings
from ...exceptions import UpstreamEngineError
from ..geospatial import format_coordinates

logger = logging.getLogger(__name__)


class OSRMClient:
    """Async OSRM client. One instance (and one connection pool) per inbound request."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "OSRMClient":
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, path: str) -> dict:
        """GET an already translated OSRM path (query string included)."""
        return await self._get(f"{self.base_url}{path}")

    async def route(
        self,
        coordinates: Iterable[Any],
        *,
        profile: str = "driving",
        steps: bool = True,
        **params: Any,
    ) -> dict:
        """Call the OSRM /route endpoint through the given waypoints."""
        coordinate_str = format_coordinates(coordinates)
        if ";" not in coordinate_str:
            raise ValueError("At least two coordinates are required for OSRM route.")
        query = {"steps": "true" if steps else "false"}
        query.update({key: _format_param(value) for key, value in params.items()})
        url = f"{self.base_url}/route/v1/{profile}/{coordinate_str}"
        return await self._get(url, params=query)

    async def _get(self, url: str, params: Mapping[str, str] | None = None) -> dict:
        if self._client is None:
            raise RuntimeError("OSRMClient must be used as an async context manager.")

        attempt = 0
        while True:
            try:
                response = await self._client.get(url, params=params)
                if response.status_code >= 500:
                    response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                attempt += 1
                if attempt > self.max_retries:
                    raise UpstreamEngineError(
                        f"OSRM returned HTTP {exc.response.status_code} for {url}",
                        status_code=exc.response.status_code,
                    ) from exc
                await self._backoff(attempt, exc)
                continue
            except httpx.TransportError as exc:
                attempt += 1
                if attempt > self.max_retries:
                    logger.warning(f"OSRM request failed after {self.max_retries} retries: {exc}")
                    raise UpstreamEngineError(
                        f"Failed to connect to OSRM service at {self.base_url}: {exc}"
                    ) from exc
                await self._backoff(attempt, exc)
                continue
            except httpx.HTTPError as exc:
                raise UpstreamEngineError(f"OSRM request to {url} failed: {exc}") from exc
            except ValueError as exc:
                raise UpstreamEngineError(
                    f"OSRM returned a non-JSON body (HTTP {response.status_code})",
                    status_code=response.status_code,
                ) from exc

            code = data.get("code") if isinstance(data, dict) else None
            if code != "Ok":
                message = data.get("message", "Unknown OSRM error") if isinstance(data, dict) else "Unknown OSRM error"
                raise UpstreamEngineError(
                    f"OSRM request failed: {message}",
                    status_code=response.status_code,
                    code=code,
                )
            return data

    async def _backoff(self, attempt: int, error: Exception) -> None:
        wait_time = self.backoff_seconds * (2 ** (attempt - 1))
        logger.debug(f"OSRM request error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {error}")
        await asyncio.sleep(wait_time)


def _format_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


async def check_health(
    base_url: str | None = None,
    profile: str = "driving",
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Check OSRM service health by routing between two fixed points.

    Public OSRM endpoints may not have a /health endpoint, so connectivity is
    tested with a minimal route request.
    """
    base = (base_url or settings.osrm_base_url).rstrip("/")
    if not base:
        return False
    test_coords = "13.388860,52.517037;13.385983,52.496891"
    url = f"{base}/route/v1/{profile}/{test_coords}"
    try:
        async with httpx.AsyncClient(timeout=5.0, transport=transport) as client:
            response = await client.get(url, params={"overview": "false"})
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError):
        return False
    return data.get("code") == "Ok"
