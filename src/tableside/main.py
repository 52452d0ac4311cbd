"""
Main FastAPI application entry point.

This module creates the FastAPI application using the application factory
pattern for clean separation of concerns.
"""

from tableside.app_setup import add_root_endpoint
from tableside.application import create_app
from tableside.config import get_settings
from tableside.core.logging import intercept_standard_logging

# Intercept logs from uvicorn and other libraries
intercept_standard_logging()

# Create FastAPI application using factory
app = create_app()

# Add root endpoint
add_root_endpoint(app)


def run() -> None:
    """Run the API with uvicorn using server settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tableside.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if settings.debug else "warning",
    )


if __name__ == "__main__":
    run()
