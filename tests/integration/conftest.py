"""Fixtures for HTTP-level tests."""

import json

import pytest
from fastapi.testclient import TestClient

from tableside.application import create_app
from tableside.di import get_infrastructure_factory, get_table_lock_manager
from tableside.domain.services.table_locks import TableLockManager
from tableside.infrastructure import InfrastructureFactory


@pytest.fixture
def factory(tmp_path):
    """Infrastructure rooted in a per-test directory with a small directory export."""
    (tmp_path / "menu_items.json").write_text(
        json.dumps([{"id": "M1", "name": "Paella", "price": 14.5, "category": "rice"}])
    )
    (tmp_path / "users.json").write_text(
        json.dumps([{"id": "W1", "username": "ana", "role": "waiter", "password": "x"}])
    )
    return InfrastructureFactory(provider="local", base_dir=str(tmp_path))


@pytest.fixture
def app(factory):
    app = create_app()
    app.dependency_overrides[get_infrastructure_factory] = lambda: factory
    locks = TableLockManager()
    app.dependency_overrides[get_table_lock_manager] = lambda: locks
    return app


@pytest.fixture
def client(app):
    """Test client running the app lifespan (shutdown drains notifications)."""
    with TestClient(app) as test_client:
        yield test_client
