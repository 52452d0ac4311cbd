"""
Table service for the tables API.

This service maps HTTP request models onto the domain services:
- Table registration and lookup
- Order placement, preparation updates and removal
- Order queries, with optional inline resolution of item and waiter references
"""

from tableside.api.v1.tables.request import (
    CreateOrderRequest,
    CreateTableRequest,
    UpdateOrderRequest,
)
from tableside.api.v1.tables.response import (
    OrdersResponse,
    OrderView,
    RichInfoView,
    SingleOrderResponse,
    TableListResponse,
    TableResponse,
)
from tableside.core.logging import logger
from tableside.domain.models import Actor
from tableside.domain.services.persistence import bounded
from tableside.domain.services.order_lifecycle import OrderLifecycleManager
from tableside.domain.services.order_query import (
    OrderFilter,
    OrderQueryEngine,
    OrderQueryResult,
)
from tableside.domain.services.table_registry import TableRegistry
from tableside.infrastructure.repositories import (
    DirectoryRepository,
    MenuItemSummary,
    StaffSummary,
)


class TableService:
    """
    Service behind the /tables endpoints.

    Wraps the lifecycle manager, the query engine and the table registry,
    and resolves references when a query asks to be populated.
    """

    def __init__(
        self,
        registry: TableRegistry,
        lifecycle: OrderLifecycleManager,
        query_engine: OrderQueryEngine,
        directory: DirectoryRepository | None = None,
        timeout_seconds: float = 5.0,
    ):
        """
        Initialize table service.

        Args:
            registry: Table registration and lookup
            lifecycle: Order lifecycle manager
            query_engine: Cross-table order queries
            directory: Menu item / staff lookups (populate is a no-op without it)
            timeout_seconds: Upper bound for each directory lookup
        """
        self.registry = registry
        self.lifecycle = lifecycle
        self.query_engine = query_engine
        self.directory = directory
        self.timeout_seconds = timeout_seconds

    async def create_table(self, request: CreateTableRequest, actor: Actor) -> TableResponse:
        table = await self.registry.create_table(request.number, actor)
        return TableResponse(table=table)

    async def get_table(self, table_number: int) -> TableResponse:
        return TableResponse(table=await self.registry.get_table(table_number))

    async def list_tables(self) -> TableListResponse:
        return TableListResponse(tables=await self.registry.list_tables())

    async def create_order(
        self, table_number: int, request: CreateOrderRequest, actor: Actor
    ) -> TableResponse:
        """
        Place an order on a table.

        Args:
            table_number: Table number
            request: Covers and order body
            actor: Waiter placing the order

        Returns:
            The saved table
        """
        table = await self.lifecycle.append_order(
            table_number,
            request.order.to_order(),
            covers=request.covers_number,
            actor=actor,
        )
        return TableResponse(table=table)

    async def update_order(
        self,
        table_number: int,
        order_id: str,
        request: UpdateOrderRequest,
        actor: Actor,
    ) -> TableResponse:
        """
        Update item preparation and/or the processed marker of an order.

        Args:
            table_number: Table number
            order_id: Order in the active service
            request: Item patches and processed flag
            actor: Cook or cash desk

        Returns:
            The saved table
        """
        table = await self.lifecycle.patch_order(
            table_number,
            order_id,
            actor,
            item_patches=request.item_patches,
            processed=request.processed,
        )
        return TableResponse(table=table)

    async def remove_order(
        self, table_number: int, order_id: str, actor: Actor
    ) -> TableResponse:
        table = await self.lifecycle.remove_order(table_number, order_id, actor)
        return TableResponse(table=table)

    async def query_orders(
        self, order_filter: OrderFilter
    ) -> OrdersResponse | SingleOrderResponse:
        """
        Run an order query and shape the response.

        Args:
            order_filter: Query parameters

        Returns:
            SingleOrderResponse when orderId was given, OrdersResponse otherwise
        """
        result = await self.query_engine.query_orders(order_filter)

        menu: dict[str, MenuItemSummary] = {}
        staff: dict[str, StaffSummary] = {}
        if order_filter.populate:
            menu, staff = await self._resolve_references(result)

        if result.single is not None:
            return SingleOrderResponse(
                rich_info=RichInfoView.build(result.single, menu, staff),
                order=OrderView.build(result.single.order, menu),
            )

        return OrdersResponse(
            rich_info=[RichInfoView.build(info, menu, staff) for info in result.rich_info],
            orders=[OrderView.build(order, menu) for order in result.orders],
        )

    async def _resolve_references(
        self, result: OrderQueryResult
    ) -> tuple[dict[str, MenuItemSummary], dict[str, StaffSummary]]:
        if self.directory is None:
            return {}, {}

        infos = [result.single] if result.single is not None else result.rich_info
        item_ids = {item.item for info in infos for item in info.order.items}
        waiter_ids = {info.waiter for info in infos}

        menu = await bounded(
            self.directory.get_menu_items(item_ids),
            self.timeout_seconds,
            "resolving menu items",
        )
        staff = await bounded(
            self.directory.get_users(waiter_ids),
            self.timeout_seconds,
            "resolving staff users",
        )

        unresolved = len(item_ids) - len(menu) + len(waiter_ids) - len(staff)
        if unresolved:
            logger.debug(f"{unresolved} references left unresolved while populating")
        return menu, staff
