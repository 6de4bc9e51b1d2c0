"""Directions response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class VoiceInstruction(BaseModel):
    distanceAlongGeometry: float
    announcement: str
    ssmlAnnouncement: str


class BannerComponent(BaseModel):
    text: str
    type: str = "text"


class BannerPrimary(BaseModel):
    text: str
    components: List[BannerComponent]
    type: Optional[str] = None
    modifier: Optional[str] = None
    degrees: Optional[float] = None
    driving_side: Optional[str] = None


class BannerInstruction(BaseModel):
    distanceAlongGeometry: float
    primary: BannerPrimary
    secondary: Optional[BannerPrimary] = None


class IntersectionSummary(BaseModel):
    location: List[float] = Field(..., description="Intersection coordinate as [lon, lat].")
    duration: float = Field(..., description="Seconds needed to reach the intersection on the primary route.")
    bearings: List[float]


class AlternativeRouteModel(BaseModel):
    duration: float = Field(..., description="Detour duration plus the time needed to reach its intersection.")
    base_duration: float = Field(..., description="Duration of the detour from the intersection onwards.")
    severity: Literal["moderate", "heavy"]
    route: dict


class IntersectionAlternatives(BaseModel):
    intersection: IntersectionSummary
    routes: List[AlternativeRouteModel]
