"""Creation and lookup of tables."""

from loguru import logger

from tableside.domain.authorization import Operation, RolePolicy
from tableside.domain.exceptions import (
    InvalidStateError,
    NotFoundError,
    RevisionConflictError,
    ValidationError,
)
from tableside.domain.models import Actor, Table
from tableside.domain.services.persistence import bounded
from tableside.infrastructure.repositories.table_repository import TableRepository


class TableRegistry:
    """Registers tables once and reads them back."""

    def __init__(
        self,
        repository: TableRepository,
        policy: RolePolicy,
        timeout_seconds: float = 5.0,
    ):
        self.repository = repository
        self.policy = policy
        self.timeout_seconds = timeout_seconds

    async def create_table(self, number: int, actor: Actor) -> Table:
        """
        Register a new, idle table with no services.

        Raises:
            ForbiddenError: If the actor may not create tables
            ValidationError: If the number is not positive
            InvalidStateError: If the number is already taken
            PersistenceError: If storage fails or times out
        """
        self.policy.require(actor, Operation.CREATE_TABLE)
        if number <= 0:
            raise ValidationError("Table number must be positive")

        try:
            table = await bounded(
                self.repository.create_table(Table(number=number)),
                self.timeout_seconds,
                f"creating table {number}",
            )
        except RevisionConflictError as e:
            raise InvalidStateError(f"Table {number} already exists") from e

        logger.info(f"Table {number} registered by {actor.user_id}")
        return table

    async def get_table(self, number: int) -> Table:
        """
        Raises:
            NotFoundError: If the table does not exist
        """
        table = await bounded(
            self.repository.get_table(number),
            self.timeout_seconds,
            f"loading table {number}",
        )
        if table is None:
            raise NotFoundError(f"Table {number} not found")
        return table

    async def list_tables(self) -> list[Table]:
        return await bounded(
            self.repository.list_tables(), self.timeout_seconds, "listing tables"
        )
