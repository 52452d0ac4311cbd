"""Local file-based infrastructure implementations for development."""

from tableside.infrastructure.implementations.local.directory_repository import (
    LocalDirectoryRepository,
)
from tableside.infrastructure.implementations.local.table_repository import (
    LocalTableRepository,
)

__all__ = [
    "LocalDirectoryRepository",
    "LocalTableRepository",
]
