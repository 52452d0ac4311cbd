"""Unit tests for application wiring and lifespan."""

import pytest

from tableside.application import create_app
from tableside.di import get_infrastructure_factory, get_order_ready_dispatcher
from tableside.domain.exceptions import TablesideError
from tableside.domain.services.notifier import OrderReadyDispatcher
from tableside.infrastructure import InfrastructureFactory
from tableside.infrastructure.providers.memory import InMemoryNotifier
from tableside.lifespan import lifespan


def test_create_app_registers_routes_and_handlers():
    app = create_app()

    paths = {route.path for route in app.routes}
    assert "/health" in paths
    assert "/api/v1/tables" in paths
    assert "/api/v1/tables/orders" in paths
    assert "/api/v1/tables/{table_number}/orders/{order_id}" in paths
    assert TablesideError in app.exception_handlers


@pytest.mark.asyncio
async def test_lifespan_drains_pending_notices(tmp_path):
    app = create_app()
    factory = InfrastructureFactory(base_dir=str(tmp_path))
    app.dependency_overrides[get_infrastructure_factory] = lambda: factory

    async with lifespan(app):
        get_order_ready_dispatcher(factory).dispatch("C1", "W1", 3)

    assert len(factory.get_notifier().notices) == 1
    assert (tmp_path / "tables").is_dir()


@pytest.mark.asyncio
async def test_lifespan_drains_overridden_dispatcher(tmp_path):
    app = create_app()
    factory = InfrastructureFactory(base_dir=str(tmp_path))
    notifier = InMemoryNotifier()
    dispatcher = OrderReadyDispatcher(notifier)
    app.dependency_overrides[get_infrastructure_factory] = lambda: factory
    app.dependency_overrides[get_order_ready_dispatcher] = lambda: dispatcher

    async with lifespan(app):
        dispatcher.dispatch("C1", "W1", 3)

    assert dispatcher.pending_count == 0
    assert len(notifier.notices) == 1
    assert factory.get_notifier().notices == []
