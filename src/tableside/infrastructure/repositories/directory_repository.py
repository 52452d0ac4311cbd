"""
Abstract interface for reference lookups (menu items and staff users).

Orders only hold references: menu item ids on items and a user id for the
waiter. Staff views can ask for those references to be resolved inline.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from pydantic import BaseModel, Field


class MenuItemSummary(BaseModel):
    """Menu item fields shown next to an order line."""

    id: str
    name: str
    price: float | None = None
    category: str | None = None


class StaffSummary(BaseModel):
    """Public fields of a staff user (never credentials or sessions)."""

    id: str
    username: str
    role: str | None = Field(None, description="Staff role")


class DirectoryRepository(ABC):
    """Resolves menu item and user references in bulk."""

    @abstractmethod
    async def get_menu_items(self, item_ids: Iterable[str]) -> dict[str, MenuItemSummary]:
        """
        Resolve menu item references.

        Args:
            item_ids: Menu item ids to resolve

        Returns:
            Mapping of id to summary; unknown ids are left out
        """
        pass

    @abstractmethod
    async def get_users(self, user_ids: Iterable[str]) -> dict[str, StaffSummary]:
        """
        Resolve staff user references.

        Args:
            user_ids: User ids to resolve

        Returns:
            Mapping of id to summary; unknown ids are left out
        """
        pass
