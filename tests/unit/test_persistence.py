"""Unit tests for bounded repository calls."""

import asyncio

import pytest

from tableside.domain.exceptions import (
    NotFoundError,
    PersistenceError,
    RevisionConflictError,
)
from tableside.domain.services.persistence import bounded


async def returns(value):
    return value


async def raises(exc: Exception):
    raise exc


@pytest.mark.asyncio
async def test_bounded_returns_value():
    assert await bounded(returns(42), 1.0, "answering") == 42


@pytest.mark.asyncio
async def test_bounded_timeout():
    with pytest.raises(PersistenceError, match="timed out while sleeping"):
        await bounded(asyncio.sleep(1), 0.01, "sleeping")


@pytest.mark.asyncio
async def test_bounded_wraps_storage_errors():
    with pytest.raises(PersistenceError) as exc_info:
        await bounded(raises(OSError("disk full")), 1.0, "saving table 1")

    assert exc_info.value.status_code == 503
    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_bounded_passes_domain_errors_through():
    with pytest.raises(NotFoundError):
        await bounded(raises(NotFoundError("Table 1 not found")), 1.0, "loading")


@pytest.mark.asyncio
async def test_bounded_passes_revision_conflicts_through():
    with pytest.raises(RevisionConflictError):
        await bounded(raises(RevisionConflictError(1, 0, 1)), 1.0, "saving")
