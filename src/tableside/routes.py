"""
Routes registration for the FastAPI application.

Centralizes all router registrations for clean application setup.
"""

from fastapi import FastAPI

from tableside.api.v1.health.router import router as health_router
from tableside.api.v1.tables.router import router as tables_router


def register_routes(app: FastAPI) -> None:
    """
    Register all application routers.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, public)
    app.include_router(health_router)

    # Tables and orders (versioned API, staff identity required)
    app.include_router(tables_router)
