"""
Cross-table order queries for kitchen, bar and waiter work queues.

Walks tables, then services, then orders, in stored order, and keeps the
orders that match every filter given. Each surviving order is reported
twice: in the flat ``orders`` list and in ``rich_info`` together with the
waiter of its service and the number of its table.
"""

from dataclasses import dataclass, field

from loguru import logger

from tableside.domain.exceptions import NotFoundError
from tableside.domain.models import Order, OrderType, Service, Table
from tableside.domain.services.persistence import bounded
from tableside.infrastructure.repositories.table_repository import TableRepository


@dataclass(frozen=True)
class OrderFilter:
    """
    Query parameters; None means "do not filter on this".

    ``populate`` does not change which orders match, it only asks the
    caller's presentation layer to resolve references inline.
    """

    table_number: int | None = None
    service_done: bool | None = None
    type: OrderType | None = None
    processed: bool | None = None
    order_id: str | None = None
    populate: bool = False

    def accepts_service(self, service: Service) -> bool:
        return self.service_done is None or self.service_done == service.done

    def accepts_order(self, order: Order) -> bool:
        if self.type is not None and order.type != self.type:
            return False
        if self.processed is not None and self.processed != bool(order.processed):
            return False
        return True


@dataclass(frozen=True)
class RichInfo:
    """An order with the waiter of its service and its table number."""

    order: Order
    waiter: str
    table_number: int


@dataclass
class OrderQueryResult:
    """
    Outcome of a query.

    For an ``order_id`` query, ``order`` and ``single`` hold the match and
    the lists are empty.
    """

    orders: list[Order] = field(default_factory=list)
    rich_info: list[RichInfo] = field(default_factory=list)
    order: Order | None = None
    single: RichInfo | None = None

    @property
    def is_single(self) -> bool:
        return self.single is not None


class OrderQueryEngine:
    """Read-only view over every table's orders."""

    def __init__(self, repository: TableRepository, timeout_seconds: float = 5.0):
        self.repository = repository
        self.timeout_seconds = timeout_seconds

    async def _select_tables(self, table_number: int | None) -> list[Table]:
        if table_number is None:
            return await bounded(
                self.repository.list_tables(), self.timeout_seconds, "listing tables"
            )

        table = await bounded(
            self.repository.get_table(table_number),
            self.timeout_seconds,
            f"loading table {table_number}",
        )
        return [table] if table is not None else []

    async def query_orders(self, order_filter: OrderFilter) -> OrderQueryResult:
        """
        Collect orders matching the filter.

        An unknown table number gives an empty result.

        Args:
            order_filter: Query parameters

        Returns:
            Matching orders and their rich info, or the single match when
            ``order_id`` is set

        Raises:
            NotFoundError: If ``order_id`` is set and no matching order survives
            PersistenceError: If storage fails or times out
        """
        tables = await self._select_tables(order_filter.table_number)

        result = OrderQueryResult()
        for table in tables:
            for service in table.services:
                if not order_filter.accepts_service(service):
                    continue
                for order in service.orders:
                    if not order_filter.accepts_order(order):
                        continue
                    result.orders.append(order)
                    result.rich_info.append(
                        RichInfo(order=order, waiter=service.waiter, table_number=table.number)
                    )

        logger.debug(
            f"Order query over {len(tables)} tables matched {len(result.orders)} orders"
        )

        if order_filter.order_id is None:
            return result

        match = next(
            (info for info in result.rich_info if info.order.id == order_filter.order_id),
            None,
        )
        if match is None:
            raise NotFoundError(f"Order {order_filter.order_id} not found")
        return OrderQueryResult(order=match.order, single=match)
