"""
Local file-based directory of menu items and staff users.

Reads two optional JSON arrays from the base directory:
    {base_dir}/
        menu_items.json   [{"id": ..., "name": ..., "price": ..., "category": ...}]
        users.json        [{"id": ..., "username": ..., "role": ...}]

Missing files behave as empty directories. Extra keys (password hashes,
sessions) are ignored.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from tableside.infrastructure.repositories.directory_repository import (
    DirectoryRepository,
    MenuItemSummary,
    StaffSummary,
)


class LocalDirectoryRepository(DirectoryRepository):
    """JSON-file backed reference directory."""

    def __init__(self, base_dir: str = "./.tableside"):
        """
        Initialize local directory repository.

        Args:
            base_dir: Directory holding menu_items.json and users.json
        """
        self.base_dir = Path(base_dir)
        self.menu_items_path = self.base_dir / "menu_items.json"
        self.users_path = self.base_dir / "users.json"

        logger.info(f"Initialized LocalDirectoryRepository at {self.base_dir}")

    def _load(self, path: Path) -> list[dict[str, Any]]:
        if not path.exists():
            return []
        return json.loads(path.read_text(encoding="utf-8"))

    async def get_menu_items(self, item_ids: Iterable[str]) -> dict[str, MenuItemSummary]:
        """Resolve menu items from menu_items.json."""
        wanted = set(item_ids)
        return {
            str(entry["id"]): MenuItemSummary.model_validate({**entry, "id": str(entry["id"])})
            for entry in self._load(self.menu_items_path)
            if str(entry.get("id")) in wanted
        }

    async def get_users(self, user_ids: Iterable[str]) -> dict[str, StaffSummary]:
        """Resolve staff users from users.json."""
        wanted = set(user_ids)
        return {
            str(entry["id"]): StaffSummary(
                id=str(entry["id"]),
                username=entry["username"],
                role=entry.get("role"),
            )
            for entry in self._load(self.users_path)
            if str(entry.get("id")) in wanted
        }
