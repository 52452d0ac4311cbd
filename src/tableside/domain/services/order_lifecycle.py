"""
Order lifecycle on the table aggregate.

Every operation is a read-modify-write of one table document:
1. Check the actor's role
2. Take the table's lock
3. Load the table, apply the change to a copy, save it with the loaded revision
4. On a revision conflict reload and reapply, up to the retry budget
5. After the commit, hand follow-up notifications to the dispatcher

Only the active service (last one, still open) is ever changed. A change
either commits as a whole or leaves the stored table as it was.
"""

from collections.abc import Callable, Sequence

from loguru import logger

from tableside.domain.authorization import Operation, RolePolicy
from tableside.domain.exceptions import (
    InvalidStateError,
    NotFoundError,
    PersistenceError,
    RevisionConflictError,
    ValidationError,
)
from tableside.domain.models import Actor, ItemPatch, Order, Service, Table, utc_now
from tableside.domain.services.notifier import OrderReadyDispatcher
from tableside.domain.services.persistence import bounded
from tableside.domain.services.table_locks import TableLockManager
from tableside.infrastructure.repositories.table_repository import TableRepository

# Applies a change to a table copy; returns False when there is nothing to save
Mutation = Callable[[Table], bool]


class OrderLifecycleManager:
    """Places, updates and removes orders on a table's active service."""

    def __init__(
        self,
        repository: TableRepository,
        locks: TableLockManager,
        policy: RolePolicy,
        dispatcher: OrderReadyDispatcher | None = None,
        timeout_seconds: float = 5.0,
        max_conflict_retries: int = 3,
    ):
        """
        Initialize the lifecycle manager.

        Args:
            repository: Table storage
            locks: Per-table lock registry shared by every writer in the process
            policy: Role policy checked before each operation
            dispatcher: Order-ready dispatcher (no notifications when None)
            timeout_seconds: Upper bound for each persistence call
            max_conflict_retries: Extra attempts after a lost revision race
        """
        self.repository = repository
        self.locks = locks
        self.policy = policy
        self.dispatcher = dispatcher
        self.timeout_seconds = timeout_seconds
        self.max_conflict_retries = max_conflict_retries

    async def append_order(
        self, table_number: int, order: Order, covers: int, actor: Actor
    ) -> Table:
        """
        Add an order to the table's open service, opening one if needed.

        A new service is opened when the table has no services or its last
        service is closed. The new service is run by the actor, seats
        ``covers`` guests (or one per item when covers is 0) and marks the
        table busy.

        Args:
            table_number: Table number
            order: Order to place
            covers: Guests seated, 0 when unknown
            actor: Waiter placing the order

        Returns:
            The saved table

        Raises:
            ForbiddenError: If the actor may not place orders
            ValidationError: If the order has no items or covers is negative
            NotFoundError: If the table does not exist
            PersistenceError: If storage fails or the retry budget runs out
        """
        self.policy.require(actor, Operation.CREATE_ORDER)

        if not order.items:
            raise ValidationError("An order needs at least one item")
        if covers < 0:
            raise ValidationError("coversNumber cannot be negative")

        def apply(table: Table) -> bool:
            new_order = order.model_copy(deep=True)
            if table.active_service is None:
                table.services.append(
                    Service(
                        covers=covers if covers > 0 else len(new_order.items),
                        waiter=actor.user_id,
                        orders=[new_order],
                        done=False,
                    )
                )
                table.busy = True
                logger.info(
                    f"Opened service #{len(table.services)} on table {table.number} "
                    f"for waiter {actor.user_id}"
                )
            else:
                table.active_service.orders.append(new_order)
            return True

        table = await self._mutate(table_number, apply)
        logger.info(
            f"Order {order.id} ({order.type.value}, {len(order.items)} items) "
            f"placed on table {table_number}"
        )
        return table

    async def patch_order(
        self,
        table_number: int,
        order_id: str,
        actor: Actor,
        item_patches: Sequence[ItemPatch] | None = None,
        processed: bool | None = None,
    ) -> Table:
        """
        Update preparation fields of items and/or the processed marker.

        Item patches only touch cook, start and end of existing items.
        ``processed=True`` stamps the current time, ``processed=False``
        clears it. When an order is marked processed the waiter of the
        service is notified after the save.

        Args:
            table_number: Table number
            order_id: Order in the active service
            actor: Cook or cash desk making the change
            item_patches: Preparation updates keyed by item id
            processed: New processed state, None to leave it unchanged

        Returns:
            The saved table

        Raises:
            ForbiddenError: If the actor may not update orders
            ValidationError: If nothing is to be changed
            NotFoundError: If the table, its services, the order or an item is missing
            InvalidStateError: If the table has no open service
            PersistenceError: If storage fails or the retry budget runs out
        """
        self.policy.require(actor, Operation.UPDATE_ORDER)

        patches = list(item_patches or [])
        if not patches and processed is None:
            raise ValidationError("Nothing to update: send item updates or processed")

        def apply(table: Table) -> bool:
            service = self._require_active_service(table)
            order = service.find_order(order_id)
            if order is None:
                raise NotFoundError(
                    f"Order {order_id} not found in the active service of table {table.number}"
                )

            for patch in patches:
                item = order.find_item(patch.id)
                if item is None:
                    raise NotFoundError(f"Item {patch.id} not found in order {order_id}")
                for field_name, value in patch.changes().items():
                    setattr(item, field_name, value)

            if processed is not None:
                order.processed = utc_now() if processed else None
            return True

        table = await self._mutate(table_number, apply)
        logger.info(
            f"Order {order_id} on table {table_number} updated "
            f"({len(patches)} item patches, processed={processed})"
        )

        if processed and self.dispatcher is not None:
            self.dispatcher.dispatch(actor.user_id, table.services[-1].waiter, table.number)

        return table

    async def remove_order(self, table_number: int, order_id: str, actor: Actor) -> Table:
        """
        Remove an order from the active service.

        The remaining orders keep their relative order. An unknown order id
        leaves the table untouched.

        Args:
            table_number: Table number
            order_id: Order to remove
            actor: Staff member removing the order

        Returns:
            The table after the removal

        Raises:
            ForbiddenError: If the actor may not remove orders
            NotFoundError: If the table or its services are missing
            InvalidStateError: If the last service is closed
            PersistenceError: If storage fails or the retry budget runs out
        """
        self.policy.require(actor, Operation.REMOVE_ORDER)

        def apply(table: Table) -> bool:
            service = self._require_active_service(table)
            remaining = [order for order in service.orders if order.id != order_id]
            if len(remaining) == len(service.orders):
                logger.info(f"Order {order_id} not on table {table.number}, nothing removed")
                return False
            service.orders = remaining
            return True

        table = await self._mutate(table_number, apply)
        logger.info(f"Order {order_id} removed from table {table_number}")
        return table

    def _require_active_service(self, table: Table) -> Service:
        if not table.services:
            raise NotFoundError(f"Table {table.number} has no services")
        service = table.active_service
        if service is None:
            raise InvalidStateError(
                f"There is no updatable service for table {table.number}"
            )
        return service

    async def _load(self, table_number: int) -> Table:
        table = await bounded(
            self.repository.get_table(table_number),
            self.timeout_seconds,
            f"loading table {table_number}",
        )
        if table is None:
            raise NotFoundError(f"Table {table_number} not found")
        return table

    async def _mutate(self, table_number: int, apply: Mutation) -> Table:
        """Run one read-modify-write cycle under the table's lock."""
        async with self.locks.hold(table_number):
            for attempt in range(self.max_conflict_retries + 1):
                stored = await self._load(table_number)
                draft = stored.model_copy(deep=True)
                if not apply(draft):
                    return stored

                try:
                    return await bounded(
                        self.repository.save_table(draft, expected_revision=stored.revision),
                        self.timeout_seconds,
                        f"saving table {table_number}",
                    )
                except RevisionConflictError as e:
                    logger.warning(f"{e} (attempt {attempt + 1})")

        raise PersistenceError(
            f"DB error: table {table_number} kept changing, gave up after "
            f"{self.max_conflict_retries + 1} attempts"
        )
