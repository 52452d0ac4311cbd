"""
Order-ready notifications.

When a cook or the cash desk marks an order processed, the waiter who runs
the service gets a notice and a live ``orderProcessed`` event. Delivery is
best effort and happens after the table has been saved: it runs as a
background task, is never retried and its failures only reach the logs.
"""

import asyncio
from abc import ABC, abstractmethod

from loguru import logger

ORDER_PROCESSED_EVENT = "orderProcessed"


def ready_message(table_number: int) -> str:
    """Text of the notice sent to the waiter."""
    return f"One order for table number {table_number} is ready to be served"


class Notifier(ABC):
    """Outbound channel towards staff devices."""

    @abstractmethod
    async def notify(self, from_user_id: str, to_user_id: str, message: str) -> None:
        """
        Store and push a notice to a user.

        Args:
            from_user_id: User who triggered the notice
            to_user_id: Recipient
            message: Human-readable text
        """
        pass

    @abstractmethod
    async def emit_to_user(self, user_id: str, event_name: str) -> None:
        """
        Send a live event to every connected device of a user.

        Args:
            user_id: Recipient
            event_name: Event name understood by staff clients
        """
        pass


class OrderReadyDispatcher:
    """Schedules order-ready deliveries without blocking the request."""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def dispatch(self, actor_id: str, waiter_id: str, table_number: int) -> asyncio.Task:
        """
        Schedule the notice and live event for a processed order.

        Must be called from a running event loop, after the commit.

        Args:
            actor_id: User who marked the order processed
            waiter_id: Waiter of the service that owns the order
            table_number: Table the order belongs to

        Returns:
            The background task (callers normally ignore it)
        """
        task = asyncio.create_task(self._deliver(actor_id, waiter_id, table_number))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, actor_id: str, waiter_id: str, table_number: int) -> None:
        try:
            await self.notifier.notify(actor_id, waiter_id, ready_message(table_number))
            await self.notifier.emit_to_user(waiter_id, ORDER_PROCESSED_EVENT)
            logger.debug(f"Order-ready notice for table {table_number} sent to {waiter_id}")
        except Exception as e:
            logger.warning(
                f"Order-ready notice for table {table_number} to {waiter_id} failed: {e}"
            )

    async def drain(self) -> None:
        """Wait for every scheduled delivery to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
