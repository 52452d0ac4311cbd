"""Unit tests for the role policy."""

import pytest

from tableside.config import Settings
from tableside.domain.authorization import Operation, RolePolicy
from tableside.domain.exceptions import ForbiddenError
from tableside.domain.models import Actor, Role


def actor(role: Role) -> Actor:
    return Actor(user_id=f"{role.value}-1", role=role)


@pytest.mark.parametrize(
    ("operation", "allowed"),
    [
        (Operation.CREATE_ORDER, {Role.WAITER}),
        (Operation.UPDATE_ORDER, {Role.COOK, Role.CASH_DESK}),
        (Operation.REMOVE_ORDER, {Role.WAITER, Role.CASH_DESK}),
        (Operation.CREATE_TABLE, {Role.CASH_DESK}),
    ],
)
def test_default_permissions(operation, allowed):
    policy = RolePolicy()

    for role in Role:
        assert policy.is_allowed(actor(role), operation) is (role in allowed)


def test_require_raises_forbidden():
    policy = RolePolicy()

    with pytest.raises(ForbiddenError) as exc_info:
        policy.require(actor(Role.BARTENDER), Operation.CREATE_ORDER)

    assert exc_info.value.status_code == 403
    assert exc_info.value.context == {"operation": "create_order", "role": "bartender"}


def test_disabled_policy_allows_everything():
    policy = RolePolicy(enforce=False)

    policy.require(actor(Role.BARTENDER), Operation.UPDATE_ORDER)


def test_policy_from_settings():
    settings = Settings(
        order_create_roles="waiter, cash_desk",
        order_update_roles="cook,bartender",
        order_remove_roles="cash_desk",
    )

    policy = RolePolicy.from_settings(settings)

    assert policy.is_allowed(actor(Role.CASH_DESK), Operation.CREATE_ORDER)
    assert policy.is_allowed(actor(Role.BARTENDER), Operation.UPDATE_ORDER)
    assert not policy.is_allowed(actor(Role.WAITER), Operation.REMOVE_ORDER)
    # Table creation is not configurable
    assert policy.permissions[Operation.CREATE_TABLE] == frozenset({Role.CASH_DESK})


def test_policy_from_settings_unknown_role():
    settings = Settings(order_update_roles="cook,chef")

    with pytest.raises(ValueError):
        RolePolicy.from_settings(settings)
