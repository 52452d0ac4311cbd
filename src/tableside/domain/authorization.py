"""
Role checks for order lifecycle operations.

The lifecycle manager receives the acting staff member with every call and
asks the policy before touching storage, so authorization can be tested
without HTTP.
"""

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from tableside.domain.exceptions import ForbiddenError
from tableside.domain.models import Actor, Role

if TYPE_CHECKING:
    from tableside.config import Settings


class Operation(str, Enum):
    """Mutating operations subject to role restrictions."""

    CREATE_ORDER = "create_order"
    UPDATE_ORDER = "update_order"
    REMOVE_ORDER = "remove_order"
    CREATE_TABLE = "create_table"


DEFAULT_PERMISSIONS: dict[Operation, frozenset[Role]] = {
    Operation.CREATE_ORDER: frozenset({Role.WAITER}),
    Operation.UPDATE_ORDER: frozenset({Role.COOK, Role.CASH_DESK}),
    Operation.REMOVE_ORDER: frozenset({Role.WAITER, Role.CASH_DESK}),
    Operation.CREATE_TABLE: frozenset({Role.CASH_DESK}),
}


class RolePolicy:
    """Maps operations to the roles allowed to perform them."""

    def __init__(
        self,
        permissions: dict[Operation, Iterable[Role]] | None = None,
        enforce: bool = True,
    ):
        """
        Initialize the policy.

        Args:
            permissions: Allowed roles per operation (defaults apply to
                operations left out)
            enforce: When False every check passes
        """
        merged = dict(DEFAULT_PERMISSIONS)
        for operation, roles in (permissions or {}).items():
            merged[operation] = frozenset(roles)
        self.permissions = merged
        self.enforce = enforce

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RolePolicy":
        """
        Build the policy from comma-separated role settings.

        Raises:
            ValueError: If a configured role is unknown
        """
        raw = {
            Operation.CREATE_ORDER: settings.order_create_roles,
            Operation.UPDATE_ORDER: settings.order_update_roles,
            Operation.REMOVE_ORDER: settings.order_remove_roles,
        }
        permissions = {
            operation: [Role(role) for role in settings.get_role_list(value)]
            for operation, value in raw.items()
        }
        return cls(permissions=permissions, enforce=settings.enforce_roles)

    def is_allowed(self, actor: Actor, operation: Operation) -> bool:
        if not self.enforce:
            return True
        return actor.role in self.permissions.get(operation, frozenset())

    def require(self, actor: Actor, operation: Operation) -> None:
        """
        Ensure the actor may perform the operation.

        Raises:
            ForbiddenError: If the actor's role is not allowed
        """
        if self.is_allowed(actor, operation):
            return

        logger.warning(
            f"Denied {operation.value} for user {actor.user_id} "
            f"with role {actor.role.value}"
        )
        raise ForbiddenError(
            f"Role {actor.role.value} is not allowed to {operation.value.replace('_', ' ')}",
            operation=operation.value,
            role=actor.role.value,
        )
