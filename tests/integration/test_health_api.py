"""Tests for health check and root endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from tableside import __version__
from tableside.app_setup import add_root_endpoint


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert data["provider"] == "local"
    assert "message" in data


def test_health_check_echoes_trace_id(client):
    response = client.get("/health", headers={"X-Trace-ID": "probe-1"})

    assert response.headers["X-Trace-ID"] == "probe-1"


def test_root_endpoint(app):
    add_root_endpoint(app)

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["version"] == __version__
