"""Unit tests for table registration and lookup."""

import pytest

from tableside.domain.authorization import RolePolicy
from tableside.domain.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from tableside.domain.services.table_registry import TableRegistry


@pytest.fixture
def registry(repository):
    return TableRegistry(repository, RolePolicy(), timeout_seconds=1.0)


@pytest.mark.asyncio
async def test_create_table(registry, cash_desk):
    table = await registry.create_table(5, cash_desk)

    assert table.number == 5
    assert table.busy is False
    assert table.services == []
    assert (await registry.get_table(5)) == table


@pytest.mark.asyncio
async def test_create_duplicate_table(registry, cash_desk):
    await registry.create_table(5, cash_desk)

    with pytest.raises(InvalidStateError, match="already exists"):
        await registry.create_table(5, cash_desk)


@pytest.mark.asyncio
async def test_create_table_invalid_number(registry, cash_desk):
    with pytest.raises(ValidationError):
        await registry.create_table(0, cash_desk)


@pytest.mark.asyncio
async def test_create_table_requires_cash_desk(registry, waiter):
    with pytest.raises(ForbiddenError):
        await registry.create_table(5, waiter)


@pytest.mark.asyncio
async def test_get_missing_table(registry):
    with pytest.raises(NotFoundError):
        await registry.get_table(5)


@pytest.mark.asyncio
async def test_list_tables(registry, cash_desk):
    await registry.create_table(3, cash_desk)
    await registry.create_table(1, cash_desk)

    assert [table.number for table in await registry.list_tables()] == [1, 3]
