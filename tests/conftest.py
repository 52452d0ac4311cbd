"""Global pytest configuration and fixtures for all tests."""

import os

import pytest
import pytest_asyncio

from tableside.domain.authorization import RolePolicy
from tableside.domain.models import Actor, Item, Order, OrderType, Role, Table
from tableside.domain.services.notifier import OrderReadyDispatcher
from tableside.domain.services.order_lifecycle import OrderLifecycleManager
from tableside.domain.services.table_locks import TableLockManager
from tableside.infrastructure.implementations.local import LocalTableRepository
from tableside.infrastructure.providers import InMemoryNotifier


@pytest.fixture(scope="session", autouse=True)
def set_test_env_vars(tmp_path_factory):
    """
    Set environment variables for testing.

    This fixture runs automatically before any tests so that nothing writes
    into the working directory or calls a real notification gateway.
    """
    # Store original values to restore after tests
    original_env = {}

    test_env_vars = {
        # Server configuration
        "ENABLE_DOCS": "false",  # Keep docs disabled in tests
        # Infrastructure (use local for tests)
        "INFRASTRUCTURE_PROVIDER": "local",
        "INFRASTRUCTURE_BASE_DIR": str(tmp_path_factory.mktemp("tableside")),
        "NOTIFIER_PROVIDER": "memory",
    }

    # Set test environment variables
    for key, value in test_env_vars.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original environment after all tests
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


# ===========================
# Domain fixtures
# ===========================


@pytest.fixture
def waiter():
    return Actor(user_id="W1", role=Role.WAITER)


@pytest.fixture
def cook():
    return Actor(user_id="C1", role=Role.COOK)


@pytest.fixture
def cash_desk():
    return Actor(user_id="D1", role=Role.CASH_DESK)


@pytest.fixture
def repository(tmp_path):
    """Local table repository in a per-test directory."""
    return LocalTableRepository(base_dir=str(tmp_path))


@pytest.fixture
def notifier():
    return InMemoryNotifier()


@pytest.fixture
def dispatcher(notifier):
    return OrderReadyDispatcher(notifier)


@pytest.fixture
def lifecycle(repository, dispatcher):
    """Lifecycle manager over the local repository with default roles."""
    return OrderLifecycleManager(
        repository=repository,
        locks=TableLockManager(),
        policy=RolePolicy(),
        dispatcher=dispatcher,
        timeout_seconds=1.0,
        max_conflict_retries=3,
    )


@pytest.fixture
def make_order():
    """Factory for orders built from (menu item, quantity) pairs."""

    def _make(order_type: OrderType = OrderType.FOOD, *items: tuple[str, int]) -> Order:
        lines = items or (("M1", 2),)
        return Order(
            type=order_type,
            items=[Item(item=item, quantity=quantity) for item, quantity in lines],
        )

    return _make


@pytest_asyncio.fixture
async def table_five(repository):
    """Table 5, idle and without services."""
    return await repository.create_table(Table(number=5))
