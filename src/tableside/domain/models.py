"""
Table aggregate: tables, services, orders and items.

A Table owns an append-only sequence of Services. Only the last Service
may be open (``done=False``) and it is the only one that accepts changes.
Wire names are camelCase, Python attributes snake_case.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Generate an identifier for orders and items."""
    return uuid4().hex


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class DomainModel(BaseModel):
    """Base model with camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderType(str, Enum):
    """Kind of order, routes it to the kitchen or the bar."""

    FOOD = "food"
    BEVERAGE = "beverage"


class Role(str, Enum):
    """Staff roles issued by the upstream identity provider."""

    WAITER = "waiter"
    COOK = "cook"
    BARTENDER = "bartender"
    CASH_DESK = "cash_desk"


class Actor(DomainModel):
    """Authenticated staff member performing a request."""

    user_id: str = Field(..., min_length=1)
    role: Role


# Item fields that may change after the order has been placed
ITEM_MUTABLE_FIELDS: frozenset[str] = frozenset({"cook", "start", "end"})


class Item(DomainModel):
    """
    One menu-item line within an order.

    ``item`` and ``quantity`` are fixed once the order is placed; only the
    preparation fields (cook, start, end) change afterwards.
    """

    id: str = Field(default_factory=new_id)
    item: str = Field(..., min_length=1, description="Menu item reference")
    quantity: int = Field(..., gt=0)
    cook: str | None = Field(None, description="User who prepared the item")
    start: datetime | None = Field(None, description="Preparation start")
    end: datetime | None = Field(None, description="Preparation end")


class ItemPatch(DomainModel):
    """
    Preparation update for a single item.

    Unknown keys are rejected. Only keys actually present in the payload are
    applied, so ``{"id": "...", "end": null}`` clears ``end`` while leaving
    ``cook`` and ``start`` untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    id: str = Field(..., min_length=1)
    cook: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def changes(self) -> dict[str, object]:
        """Return the whitelisted fields supplied in this patch."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name in ITEM_MUTABLE_FIELDS
        }


class Order(DomainModel):
    """A food or beverage submission within a service."""

    id: str = Field(default_factory=new_id)
    type: OrderType
    items: list[Item] = Field(default_factory=list)
    processed: datetime | None = None

    def find_item(self, item_id: str) -> Item | None:
        return next((item for item in self.items if item.id == item_id), None)


class Service(DomainModel):
    """One customer visit at a table."""

    covers: int = Field(..., gt=0)
    waiter: str
    orders: list[Order] = Field(default_factory=list)
    done: bool = False

    def find_order(self, order_id: str) -> Order | None:
        return next((order for order in self.orders if order.id == order_id), None)


class Table(DomainModel):
    """
    Physical table and the history of services it hosted.

    ``revision`` is bumped by the repository on every successful save and is
    used to detect concurrent writers.
    """

    number: int
    busy: bool = False
    services: list[Service] = Field(default_factory=list)
    revision: int = Field(default=0, ge=0)

    @property
    def last_service(self) -> Service | None:
        return self.services[-1] if self.services else None

    @property
    def active_service(self) -> Service | None:
        """The last service if it is still open, otherwise None."""
        last = self.last_service
        if last is None or last.done:
            return None
        return last
