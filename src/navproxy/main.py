"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI

from .api.routes import directions, health
from .config import settings


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "osrm_base_url": settings.osrm_base_url,
            "health": "/health",
            "docs": "/docs",
        }

    app.include_router(health.router)
    app.include_router(directions.router)
    return app


app = create_app()
