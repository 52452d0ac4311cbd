"""Unit tests for the order query engine."""

from datetime import UTC, datetime

import pytest
import pytest_asyncio

from tableside.domain.exceptions import NotFoundError
from tableside.domain.models import Item, Order, OrderType, Service, Table
from tableside.domain.services.order_query import OrderFilter, OrderQueryEngine

PROCESSED_AT = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


def order(order_id: str, order_type: OrderType, processed: datetime | None = None) -> Order:
    return Order(
        id=order_id,
        type=order_type,
        items=[Item(item="M1", quantity=1)],
        processed=processed,
    )


@pytest_asyncio.fixture
async def engine(repository):
    """
    Two tables:
    - table 1: closed service (W1) with f1 (processed), then open service (W2) with b1, f2
    - table 2: open service (W3) with b2 (processed)
    """
    await repository.create_table(
        Table(
            number=2,
            busy=True,
            services=[
                Service(
                    covers=2,
                    waiter="W3",
                    orders=[order("b2", OrderType.BEVERAGE, PROCESSED_AT)],
                )
            ],
        )
    )
    await repository.create_table(
        Table(
            number=1,
            busy=True,
            services=[
                Service(
                    covers=4,
                    waiter="W1",
                    orders=[order("f1", OrderType.FOOD, PROCESSED_AT)],
                    done=True,
                ),
                Service(
                    covers=2,
                    waiter="W2",
                    orders=[order("b1", OrderType.BEVERAGE), order("f2", OrderType.FOOD)],
                ),
            ],
        )
    )
    return OrderQueryEngine(repository, timeout_seconds=1.0)


@pytest.mark.asyncio
async def test_query_without_filters_walks_tables_services_orders(engine):
    result = await engine.query_orders(OrderFilter())

    assert [o.id for o in result.orders] == ["f1", "b1", "f2", "b2"]
    assert [(i.order.id, i.waiter, i.table_number) for i in result.rich_info] == [
        ("f1", "W1", 1),
        ("b1", "W2", 1),
        ("f2", "W2", 1),
        ("b2", "W3", 2),
    ]
    assert result.is_single is False


@pytest.mark.asyncio
async def test_query_by_type_beverage(engine):
    result = await engine.query_orders(OrderFilter(type=OrderType.BEVERAGE))

    assert [o.id for o in result.orders] == ["b1", "b2"]
    assert all(o.type == OrderType.BEVERAGE for o in result.orders)


@pytest.mark.asyncio
async def test_query_service_done_excludes_open_services(engine):
    result = await engine.query_orders(OrderFilter(service_done=True))

    assert [o.id for o in result.orders] == ["f1"]


@pytest.mark.asyncio
async def test_query_open_services_only(engine):
    result = await engine.query_orders(OrderFilter(service_done=False))

    assert [o.id for o in result.orders] == ["b1", "f2", "b2"]


@pytest.mark.asyncio
async def test_query_pending_orders(engine):
    """Kitchen queue: pending food of open services."""
    result = await engine.query_orders(
        OrderFilter(service_done=False, type=OrderType.FOOD, processed=False)
    )

    assert [o.id for o in result.orders] == ["f2"]
    assert result.rich_info[0].waiter == "W2"


@pytest.mark.asyncio
async def test_query_processed_orders(engine):
    result = await engine.query_orders(OrderFilter(processed=True))

    assert [o.id for o in result.orders] == ["f1", "b2"]


@pytest.mark.asyncio
async def test_query_single_table(engine):
    result = await engine.query_orders(OrderFilter(table_number=2))

    assert [o.id for o in result.orders] == ["b2"]
    assert result.rich_info[0].table_number == 2


@pytest.mark.asyncio
async def test_query_unknown_table_is_empty(engine):
    result = await engine.query_orders(OrderFilter(table_number=42))

    assert result.orders == []
    assert result.rich_info == []


@pytest.mark.asyncio
async def test_query_order_id_narrows_to_match(engine):
    result = await engine.query_orders(OrderFilter(order_id="f2"))

    assert result.is_single is True
    assert result.order.id == "f2"
    assert result.single.waiter == "W2"
    assert result.single.table_number == 1
    assert result.orders == []


@pytest.mark.asyncio
async def test_query_order_id_respects_other_filters(engine):
    """orderId picks among the orders that survived the other filters."""
    with pytest.raises(NotFoundError):
        await engine.query_orders(OrderFilter(order_id="f2", type=OrderType.BEVERAGE))


@pytest.mark.asyncio
async def test_query_unknown_order_id(engine):
    with pytest.raises(NotFoundError):
        await engine.query_orders(OrderFilter(order_id="missing"))


@pytest.mark.asyncio
async def test_populate_does_not_change_matches(engine):
    plain = await engine.query_orders(OrderFilter(type=OrderType.FOOD))
    populated = await engine.query_orders(OrderFilter(type=OrderType.FOOD, populate=True))

    assert [o.id for o in populated.orders] == [o.id for o in plain.orders]
