"""Table and Order Request Models."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from tableside.domain.models import Item, ItemPatch, Order, OrderType


class RequestModel(BaseModel):
    """Request body base: camelCase on the wire, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class OrderItemInput(RequestModel):
    """
    One line of a new order.

    Attributes:
        item: Menu item reference
        quantity: Number of portions
    """

    item: str = Field(..., min_length=1, description="Menu item reference")
    quantity: int = Field(..., gt=0, description="Number of portions")


class OrderInput(RequestModel):
    """
    Order submitted by a waiter.

    Attributes:
        items: Ordered lines (at least one)
        type: food or beverage
    """

    items: list[OrderItemInput] = Field(..., min_length=1)
    type: OrderType

    def to_order(self) -> Order:
        """Build a fresh, unprocessed order with new ids."""
        return Order(
            type=self.type,
            items=[Item(item=line.item, quantity=line.quantity) for line in self.items],
        )


class CreateOrderRequest(RequestModel):
    """
    Request to place an order on a table.

    Attributes:
        covers_number: Guests seated (0 or omitted: one per item). Only used
            when the order opens a new service.
        order: The order itself
    """

    covers_number: int = Field(0, ge=0, description="Guests seated at the table")
    order: OrderInput


class UpdatedInfo(RequestModel):
    """Item preparation updates."""

    items: list[ItemPatch] = Field(default_factory=list)


class UpdateOrderRequest(RequestModel):
    """
    Request to update an order of the active service.

    Attributes:
        updated_info: Item preparation updates; legacy clients send it as a
            JSON-encoded string
        processed: true marks the order processed now, false clears it
    """

    updated_info: UpdatedInfo | None = None
    processed: bool | None = None

    @field_validator("updated_info", mode="before")
    @classmethod
    def decode_updated_info(cls, v: Any) -> Any:
        """Accept updatedInfo as an object or as a JSON string."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError("updatedInfo must be valid JSON") from e
        return v

    @model_validator(mode="after")
    def require_change(self) -> "UpdateOrderRequest":
        """Reject requests that would not change anything."""
        has_items = self.updated_info is not None and bool(self.updated_info.items)
        if not has_items and self.processed is None:
            raise ValueError("Nothing to update: send updatedInfo.items or processed")
        return self

    @property
    def item_patches(self) -> list[ItemPatch]:
        return list(self.updated_info.items) if self.updated_info else []


class CreateTableRequest(RequestModel):
    """
    Request to register a table.

    Attributes:
        number: Table number, unique across the restaurant
    """

    number: int = Field(..., gt=0, description="Table number")
