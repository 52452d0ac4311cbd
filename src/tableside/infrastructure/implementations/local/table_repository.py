"""
Local file-based table repository implementation.

Stores each table aggregate as a JSON document:
    {base_dir}/
        tables/
            {number}.json

Writes go to a temporary file first and replace the document atomically,
so readers never see a half-written table.
"""

import json
import os
from pathlib import Path

from loguru import logger

from tableside.domain.exceptions import RevisionConflictError
from tableside.domain.models import Table
from tableside.infrastructure.repositories.table_repository import TableRepository


class LocalTableRepository(TableRepository):
    """
    File-based table storage for local development and single-node setups.

    Revision checks happen between the read of the stored document and the
    replace, with no await in between, so they hold for a single process.
    """

    def __init__(self, base_dir: str = "./.tableside"):
        """
        Initialize local table repository.

        Args:
            base_dir: Base directory for table storage
        """
        self.base_dir = Path(base_dir)
        self.tables_dir = self.base_dir / "tables"

        self.tables_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Initialized LocalTableRepository at {self.base_dir}")

    def _table_path(self, table_number: int) -> Path:
        """Get path to table document."""
        return self.tables_dir / f"{table_number}.json"

    def _read(self, path: Path) -> Table:
        return Table.model_validate_json(path.read_text(encoding="utf-8"))

    def _write(self, table: Table) -> None:
        path = self._table_path(table.number)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(
            json.dumps(table.model_dump(mode="json"), indent=2), encoding="utf-8"
        )
        os.replace(tmp_path, path)

    def _stored_revision(self, table_number: int) -> int | None:
        path = self._table_path(table_number)
        if not path.exists():
            return None
        return self._read(path).revision

    async def get_table(self, table_number: int) -> Table | None:
        """Load table document."""
        path = self._table_path(table_number)

        if not path.exists():
            return None

        return self._read(path)

    async def list_tables(self) -> list[Table]:
        """Load all table documents ordered by number."""
        tables = [self._read(path) for path in self.tables_dir.glob("*.json")]
        return sorted(tables, key=lambda table: table.number)

    async def create_table(self, table: Table) -> Table:
        """Store a new table document."""
        current = self._stored_revision(table.number)
        if current is not None:
            raise RevisionConflictError(table.number, expected=0, actual=current)

        stored = table.model_copy(update={"revision": 0})
        self._write(stored)

        logger.info(f"Created table {table.number}")
        return stored

    async def save_table(self, table: Table, expected_revision: int) -> Table:
        """Replace table document if its revision is unchanged."""
        current = self._stored_revision(table.number)
        if current != expected_revision:
            raise RevisionConflictError(
                table.number, expected=expected_revision, actual=current
            )

        stored = table.model_copy(update={"revision": expected_revision + 1})
        self._write(stored)

        logger.debug(f"Saved table {table.number} at revision {stored.revision}")
        return stored
