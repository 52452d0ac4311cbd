"""
Abstract interface for table aggregate persistence.

A table is stored as one document: its number, busy flag, the full
sequence of services (with orders and items) and a revision counter.
Writers pass the revision they loaded; the store rejects the write if the
revision moved in between.
"""

from abc import ABC, abstractmethod

from tableside.domain.models import Table


class TableRepository(ABC):
    """
    Abstract interface for table storage operations.

    Implementations must provide:
    - Whole-document load and save
    - Revision-checked writes (optimistic concurrency)
    - Listing in ascending table number order
    """

    @abstractmethod
    async def get_table(self, table_number: int) -> Table | None:
        """
        Load a table aggregate.

        Args:
            table_number: Table number

        Returns:
            The stored table if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_tables(self) -> list[Table]:
        """
        Load every table, ordered by table number.

        Returns:
            All stored tables
        """
        pass

    @abstractmethod
    async def create_table(self, table: Table) -> Table:
        """
        Store a new table.

        Args:
            table: Table to store (its revision is reset to 0)

        Returns:
            The stored table

        Raises:
            RevisionConflictError: If a table with that number already exists
        """
        pass

    @abstractmethod
    async def save_table(self, table: Table, expected_revision: int) -> Table:
        """
        Replace a stored table if nobody wrote it since it was loaded.

        Args:
            table: Updated aggregate
            expected_revision: Revision the caller loaded

        Returns:
            The stored table, with its revision incremented

        Raises:
            RevisionConflictError: If the stored revision differs or the
                table no longer exists
        """
        pass
