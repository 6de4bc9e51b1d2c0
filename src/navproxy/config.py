"""Application configuration and settings management."""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="NAVPROXY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    app_name: str = "Navigation Directions Proxy"
    host: str = "0.0.0.0"
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("NAVPROXY_PORT", "PORT", "port"),
    )
    osrm_base_url: str = Field(
        default="http://localhost:5000",
        validation_alias=AliasChoices("NAVPROXY_OSRM_BASE_URL", "OSRM_BACKEND", "osrm_base_url"),
        description="Base URL for the OSRM routing service (e.g., http://localhost:5000).",
    )
    osrm_timeout_seconds: float = Field(default=30.0, gt=0.0)
    osrm_max_retries: int = Field(default=2, ge=0)
    osrm_backoff_seconds: float = Field(default=0.5, ge=0.0)
    directions_account: str = Field(
        default="mapbox",
        description="Account segment of the inbound directions path that is rewritten to the OSRM route prefix.",
    )
    alternatives_profile: str = Field(
        default="driving",
        description="OSRM profile used when requesting detour candidates.",
    )
    include_alternatives: bool = True
    alternative_failure_policy: Literal["drop", "fail"] = Field(
        default="drop",
        description="What to do when the engine fails for one intersection: drop its detours or fail the request.",
    )
    strip_alternatives: bool = Field(
        default=False,
        description="Replace detour geometry with the geometry of its first two steps.",
    )
    via_point_distance_m: float = Field(default=100.0, gt=0.0)
    intersection_limit: int = Field(default=5, ge=0)
    cycle_radius_km: float = Field(default=0.025, gt=0.0)
    moderate_extra_seconds: float = Field(default=100.0, ge=0.0)
    moderate_ratio: float = Field(default=1.05, gt=0.0)
    instruction_locale: str = "en"
    log_level: str = "INFO"

    @field_validator("osrm_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return str(value).strip().upper()


settings = Settings()
