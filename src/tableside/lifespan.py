"""
Application lifecycle management.

Handles startup and shutdown events for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from tableside.di import get_infrastructure_factory, get_order_ready_dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    On startup the infrastructure factory and the order-ready dispatcher
    are resolved (honouring ``app.dependency_overrides``) so storage
    problems surface before the first request. On shutdown pending
    order-ready deliveries are awaited.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info(" Starting tableside backend...")
    logger.info(f"Application version: {app.version}")

    factory_provider = app.dependency_overrides.get(
        get_infrastructure_factory, get_infrastructure_factory
    )
    factory = factory_provider()
    factory.get_table_repository()
    dispatcher_override = app.dependency_overrides.get(get_order_ready_dispatcher)
    if dispatcher_override is not None:
        dispatcher = dispatcher_override()
    else:
        dispatcher = get_order_ready_dispatcher(factory)

    yield

    # Shutdown
    logger.info(" Shutting down tableside backend...")
    if dispatcher.pending_count:
        logger.info(f"Waiting for {dispatcher.pending_count} order-ready notices")
    await dispatcher.drain()
