"""
Application setup utilities.

Provides the setup steps main.py applies on top of the application factory.
"""

from fastapi import FastAPI

from tableside import __version__
from tableside.config import get_settings


def add_root_endpoint(app: FastAPI) -> None:
    """
    Add root endpoint to the application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    @app.get("/")
    async def root() -> dict[str, str | None]:
        """Root endpoint with API information."""
        return {
            "message": f"{settings.project_name} API",
            "version": __version__,
            "docs": "/docs" if settings.enable_docs else None,
        }
