"""Table and Order Response Models."""

from datetime import datetime

from pydantic import Field

from tableside.domain.models import DomainModel, Item, Order, OrderType, Table
from tableside.domain.services.order_query import RichInfo
from tableside.infrastructure.repositories import MenuItemSummary, StaffSummary


class TableResponse(DomainModel):
    """
    Response after a table change or lookup.

    Attributes:
        table: The table as stored
    """

    table: Table


class TableListResponse(DomainModel):
    """All tables ordered by number."""

    tables: list[Table]


class ItemView(DomainModel):
    """Order line; ``item`` is a summary when the query was populated."""

    id: str
    item: str | MenuItemSummary
    quantity: int
    cook: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def build(
        cls, item: Item, menu: dict[str, MenuItemSummary] | None = None
    ) -> "ItemView":
        reference = (menu or {}).get(item.item, item.item)
        return cls(**item.model_dump(exclude={"item"}), item=reference)


class OrderView(DomainModel):
    """Order as shown in staff work queues."""

    id: str
    type: OrderType
    items: list[ItemView]
    processed: datetime | None = None

    @classmethod
    def build(
        cls, order: Order, menu: dict[str, MenuItemSummary] | None = None
    ) -> "OrderView":
        return cls(
            id=order.id,
            type=order.type,
            items=[ItemView.build(item, menu) for item in order.items],
            processed=order.processed,
        )


class RichInfoView(DomainModel):
    """
    Order correlated with its service's waiter and its table.

    Attributes:
        order: The order
        waiter: Waiter id, or a staff summary when populated
        table_number: Table the order belongs to
    """

    order: OrderView
    waiter: str | StaffSummary
    table_number: int

    @classmethod
    def build(
        cls,
        info: RichInfo,
        menu: dict[str, MenuItemSummary] | None = None,
        staff: dict[str, StaffSummary] | None = None,
    ) -> "RichInfoView":
        return cls(
            order=OrderView.build(info.order, menu),
            waiter=(staff or {}).get(info.waiter, info.waiter),
            table_number=info.table_number,
        )


class OrdersResponse(DomainModel):
    """Result of an order query."""

    rich_info: list[RichInfoView] = Field(default_factory=list)
    orders: list[OrderView] = Field(default_factory=list)


class SingleOrderResponse(DomainModel):
    """Result of an order query narrowed with orderId."""

    rich_info: RichInfoView
    order: OrderView
