"""Abstract repository interfaces for infrastructure operations."""

from tableside.infrastructure.repositories.directory_repository import (
    DirectoryRepository,
    MenuItemSummary,
    StaffSummary,
)
from tableside.infrastructure.repositories.table_repository import TableRepository

__all__ = [
    "DirectoryRepository",
    "MenuItemSummary",
    "StaffSummary",
    "TableRepository",
]
