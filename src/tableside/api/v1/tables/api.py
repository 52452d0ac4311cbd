"""
Tables API endpoints.

Handles table registration, order placement, preparation updates, order
removal and the order queries behind the kitchen, bar and waiter views.
Errors raised by the domain services are rendered by the global
exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from tableside.api.v1.tables.request import (
    CreateOrderRequest,
    CreateTableRequest,
    UpdateOrderRequest,
)
from tableside.api.v1.tables.response import (
    OrdersResponse,
    SingleOrderResponse,
    TableListResponse,
    TableResponse,
)
from tableside.api.v1.tables.services import TableService
from tableside.di import (
    ActorDep,
    DirectoryRepositoryDep,
    OrderLifecycleManagerDep,
    OrderQueryEngineDep,
    SettingsDep,
    TableRegistryDep,
)
from tableside.domain.models import OrderType
from tableside.domain.services.order_query import OrderFilter

router = APIRouter()


def get_table_service(
    registry: TableRegistryDep,
    lifecycle: OrderLifecycleManagerDep,
    query_engine: OrderQueryEngineDep,
    directory: DirectoryRepositoryDep,
    settings: SettingsDep,
) -> TableService:
    """Build the table service from injected domain services."""
    return TableService(
        registry,
        lifecycle,
        query_engine,
        directory,
        timeout_seconds=settings.persistence_timeout_seconds,
    )


TableServiceDep = Annotated[TableService, Depends(get_table_service)]


def get_order_filter(
    service_done: Annotated[
        bool | None,
        Query(alias="serviceDone", description="Only services with this done flag"),
    ] = None,
    order_type: Annotated[
        OrderType | None, Query(alias="type", description="Only orders of this type")
    ] = None,
    processed: Annotated[
        bool | None, Query(description="Only processed (1) or pending (0) orders")
    ] = None,
    populate: Annotated[
        bool, Query(description="Resolve menu items and waiters inline")
    ] = False,
    order_id: Annotated[
        str | None, Query(alias="orderId", description="Return this order only")
    ] = None,
) -> OrderFilter:
    """Collect order query parameters (table number comes from the path)."""
    return OrderFilter(
        service_done=service_done,
        type=order_type,
        processed=processed,
        order_id=order_id,
        populate=populate,
    )


OrderFilterDep = Annotated[OrderFilter, Depends(get_order_filter)]


# ============================================================================
# Orders across all tables (declared before /{table_number} routes)
# ============================================================================


@router.get(
    "/orders",
    response_model=OrdersResponse | SingleOrderResponse,
    summary="Query orders across all tables",
    description="""
    Work queue for kitchen, bar and waiters.

    Filters (all optional):
    - **serviceDone**: 1 for closed services, 0 for open ones
    - **type**: food or beverage
    - **processed**: 1 for processed orders, 0 for pending ones
    - **orderId**: return only that order (404 if it does not match)
    - **populate**: resolve menu items and waiters inline
    """,
)
async def query_all_orders(
    order_filter: OrderFilterDep,
    service: TableServiceDep,
    actor: ActorDep,
) -> OrdersResponse | SingleOrderResponse:
    """
    Query orders of every table.

    Args:
        order_filter: Query parameters
        service: Table service (injected)
        actor: Caller identity (injected; any staff role)

    Returns:
        Matching orders with rich info
    """
    return await service.query_orders(order_filter)


# ============================================================================
# Tables
# ============================================================================


@router.get(
    "",
    response_model=TableListResponse,
    summary="List tables",
)
async def list_tables(service: TableServiceDep, actor: ActorDep) -> TableListResponse:
    """List every table ordered by number."""
    return await service.list_tables()


@router.post(
    "",
    response_model=TableResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a table",
)
async def create_table(
    request: CreateTableRequest,
    service: TableServiceDep,
    actor: ActorDep,
) -> TableResponse:
    """
    Register a new table.

    Args:
        request: Table number
        service: Table service (injected)
        actor: Caller identity (cash desk)

    Returns:
        The new table
    """
    return await service.create_table(request, actor)


@router.get(
    "/{table_number}",
    response_model=TableResponse,
    summary="Get a table",
)
async def get_table(
    table_number: int, service: TableServiceDep, actor: ActorDep
) -> TableResponse:
    """Get a table with its full service history."""
    return await service.get_table(table_number)


# ============================================================================
# Orders of one table
# ============================================================================


@router.get(
    "/{table_number}/orders",
    response_model=OrdersResponse | SingleOrderResponse,
    summary="Query orders of a table",
)
async def query_table_orders(
    table_number: int,
    order_filter: OrderFilterDep,
    service: TableServiceDep,
    actor: ActorDep,
) -> OrdersResponse | SingleOrderResponse:
    """
    Query the orders of a single table.

    An unknown table number returns empty lists.
    """
    return await service.query_orders(
        OrderFilter(
            table_number=table_number,
            service_done=order_filter.service_done,
            type=order_filter.type,
            processed=order_filter.processed,
            order_id=order_filter.order_id,
            populate=order_filter.populate,
        )
    )


@router.post(
    "/{table_number}/orders",
    response_model=TableResponse,
    status_code=status.HTTP_200_OK,
    summary="Place an order",
    description="""
    Place a food or beverage order on a table.

    If the table has no open service a new one is opened, run by the calling
    waiter, seating `coversNumber` guests (one per item when omitted), and
    the table is marked busy. Otherwise the order joins the open service.
    """,
)
async def create_order(
    table_number: int,
    request: CreateOrderRequest,
    service: TableServiceDep,
    actor: ActorDep,
) -> TableResponse:
    """
    Place an order.

    Args:
        table_number: Table number
        request: Covers and order
        service: Table service (injected)
        actor: Caller identity (waiter)

    Returns:
        The saved table
    """
    return await service.create_order(table_number, request, actor)


@router.patch(
    "/{table_number}/orders/{order_id}",
    response_model=TableResponse,
    summary="Update an order",
    description="""
    Log item preparation (`cook`, `start`, `end`) and/or toggle `processed`.

    Only orders of the table's open service can be updated. Marking an
    order processed notifies the waiter of the service.
    """,
)
async def update_order(
    table_number: int,
    order_id: str,
    request: UpdateOrderRequest,
    service: TableServiceDep,
    actor: ActorDep,
) -> TableResponse:
    """
    Update an order of the open service.

    Args:
        table_number: Table number
        order_id: Order id
        request: Item patches and/or processed flag
        service: Table service (injected)
        actor: Caller identity (cook or cash desk)

    Returns:
        The saved table
    """
    return await service.update_order(table_number, order_id, request, actor)


@router.delete(
    "/{table_number}/orders/{order_id}",
    response_model=TableResponse,
    summary="Remove an order",
)
async def remove_order(
    table_number: int,
    order_id: str,
    service: TableServiceDep,
    actor: ActorDep,
) -> TableResponse:
    """
    Remove an order from the open service.

    Removing an order that is not there leaves the table unchanged.
    """
    return await service.remove_order(table_number, order_id, actor)
