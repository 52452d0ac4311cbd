"""
In-process notifier for local development and tests.

Keeps every notice and live event in memory and logs it, so a developer
running the API locally can see what would reach the waiters' devices.
"""

from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from tableside.domain.models import utc_now
from tableside.domain.services.notifier import Notifier


@dataclass(frozen=True)
class Notice:
    from_user_id: str
    to_user_id: str
    message: str
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class LiveEvent:
    user_id: str
    event_name: str


class InMemoryNotifier(Notifier):
    """Records notices and events instead of delivering them."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []
        self.events: list[LiveEvent] = []

    async def notify(self, from_user_id: str, to_user_id: str, message: str) -> None:
        self.notices.append(Notice(from_user_id, to_user_id, message))
        logger.info(f"Notice from {from_user_id} to {to_user_id}: {message}")

    async def emit_to_user(self, user_id: str, event_name: str) -> None:
        self.events.append(LiveEvent(user_id, event_name))
        logger.info(f"Event {event_name} emitted to {user_id}")

    def notices_for(self, user_id: str) -> list[Notice]:
        return [notice for notice in self.notices if notice.to_user_id == user_id]
