"""
Dependency injection container for the tableside backend.

This module provides centralized dependency injection using FastAPI's Depends
with typing.Annotated for clean type hints throughout the application.

Process-wide singletons (infrastructure factory, table locks, dispatcher)
are cached so that every request shares the same repositories, the same
per-table locks and the same queue of pending notifications. Tests swap
them through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from tableside.config import Settings, get_settings
from tableside.core.trace_context import actor_id_context
from tableside.domain.authorization import RolePolicy
from tableside.domain.exceptions import AuthenticationError
from tableside.domain.models import Actor, Role
from tableside.domain.services.notifier import Notifier, OrderReadyDispatcher
from tableside.domain.services.order_lifecycle import OrderLifecycleManager
from tableside.domain.services.order_query import OrderQueryEngine
from tableside.domain.services.table_locks import TableLockManager
from tableside.domain.services.table_registry import TableRegistry
from tableside.infrastructure import InfrastructureFactory
from tableside.infrastructure.repositories import DirectoryRepository

# ============================================================================
# Settings Dependencies
# ============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings)]
"""Injected Settings instance (cached via lru_cache)."""


# ============================================================================
# Infrastructure Dependencies
# ============================================================================


@lru_cache
def get_infrastructure_factory() -> InfrastructureFactory:
    """
    Get the process-wide infrastructure factory built from settings.

    Returns:
        Configured infrastructure factory
    """
    return InfrastructureFactory.from_settings(get_settings())


InfrastructureFactoryDep = Annotated[
    InfrastructureFactory, Depends(get_infrastructure_factory)
]
"""Injected InfrastructureFactory instance."""


def get_directory_repository(factory: InfrastructureFactoryDep) -> DirectoryRepository:
    """
    Get the menu item / staff directory.

    Args:
        factory: Infrastructure factory (injected)

    Returns:
        Directory repository
    """
    return factory.get_directory_repository()


DirectoryRepositoryDep = Annotated[
    DirectoryRepository, Depends(get_directory_repository)
]
"""Injected DirectoryRepository."""


# ============================================================================
# Concurrency and Notification Dependencies
# ============================================================================


@lru_cache
def get_table_lock_manager() -> TableLockManager:
    """Get the process-wide per-table lock registry."""
    return TableLockManager()


TableLockManagerDep = Annotated[TableLockManager, Depends(get_table_lock_manager)]
"""Injected TableLockManager."""


@lru_cache
def _dispatcher_for(notifier: Notifier) -> OrderReadyDispatcher:
    return OrderReadyDispatcher(notifier)


def get_order_ready_dispatcher(factory: InfrastructureFactoryDep) -> OrderReadyDispatcher:
    """
    Get the dispatcher bound to the factory's notifier.

    Args:
        factory: Infrastructure factory (injected)

    Returns:
        One dispatcher per notifier instance
    """
    return _dispatcher_for(factory.get_notifier())


OrderReadyDispatcherDep = Annotated[
    OrderReadyDispatcher, Depends(get_order_ready_dispatcher)
]
"""Injected OrderReadyDispatcher."""


# ============================================================================
# Authorization Dependencies
# ============================================================================


def get_role_policy(settings: SettingsDep) -> RolePolicy:
    """
    Get the role policy for lifecycle operations.

    Args:
        settings: Application settings (injected)

    Returns:
        Role policy built from the *_roles settings
    """
    return RolePolicy.from_settings(settings)


RolePolicyDep = Annotated[RolePolicy, Depends(get_role_policy)]
"""Injected RolePolicy."""


async def get_actor(request: Request, settings: SettingsDep) -> Actor:
    """
    Build the acting staff member from upstream identity headers.

    The identity provider in front of this service authenticates the
    session and forwards the user id and role as headers.

    Args:
        request: Incoming request
        settings: Application settings (injected)

    Returns:
        The authenticated actor

    Raises:
        AuthenticationError: If a header is missing or the role is unknown
    """
    user_id = request.headers.get(settings.user_id_header, "").strip()
    raw_role = request.headers.get(settings.user_role_header, "").strip().lower()

    if not user_id or not raw_role:
        raise AuthenticationError("Unauthorized")

    try:
        role = Role(raw_role)
    except ValueError as e:
        raise AuthenticationError(f"Unauthorized: unknown role {raw_role}") from e

    actor_id_context.set(user_id)
    return Actor(user_id=user_id, role=role)


ActorDep = Annotated[Actor, Depends(get_actor)]
"""Injected Actor (caller identity)."""


# ============================================================================
# Domain Service Dependencies
# ============================================================================


def get_order_lifecycle_manager(
    factory: InfrastructureFactoryDep,
    locks: TableLockManagerDep,
    policy: RolePolicyDep,
    dispatcher: OrderReadyDispatcherDep,
    settings: SettingsDep,
) -> OrderLifecycleManager:
    """
    Get the order lifecycle manager.

    Returns:
        Lifecycle manager wired to the shared repository, locks and dispatcher
    """
    return OrderLifecycleManager(
        repository=factory.get_table_repository(),
        locks=locks,
        policy=policy,
        dispatcher=dispatcher,
        timeout_seconds=settings.persistence_timeout_seconds,
        max_conflict_retries=settings.max_conflict_retries,
    )


OrderLifecycleManagerDep = Annotated[
    OrderLifecycleManager, Depends(get_order_lifecycle_manager)
]
"""Injected OrderLifecycleManager."""


def get_order_query_engine(
    factory: InfrastructureFactoryDep, settings: SettingsDep
) -> OrderQueryEngine:
    """Get the cross-table order query engine."""
    return OrderQueryEngine(
        repository=factory.get_table_repository(),
        timeout_seconds=settings.persistence_timeout_seconds,
    )


OrderQueryEngineDep = Annotated[OrderQueryEngine, Depends(get_order_query_engine)]
"""Injected OrderQueryEngine."""


def get_table_registry(
    factory: InfrastructureFactoryDep, policy: RolePolicyDep, settings: SettingsDep
) -> TableRegistry:
    """Get the table registry."""
    return TableRegistry(
        repository=factory.get_table_repository(),
        policy=policy,
        timeout_seconds=settings.persistence_timeout_seconds,
    )


TableRegistryDep = Annotated[TableRegistry, Depends(get_table_registry)]
"""Injected TableRegistry."""
