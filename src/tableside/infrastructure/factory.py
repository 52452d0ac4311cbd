"""
Infrastructure factory for provider selection.

Selects appropriate implementations based on configuration:
- local: JSON documents on disk for development and single-node setups
- aws: DynamoDB with conditional writes
- azure: CosmosDB (future)

and the notifier used for order-ready signals:
- memory: in-process recorder (development, tests)
- webhook: HTTP calls to the notification gateway

Usage:
    from tableside.infrastructure import InfrastructureFactory
    from tableside.config import get_settings

    # Option 1: From settings
    factory = InfrastructureFactory.from_settings(get_settings())

    # Option 2: Manual configuration
    factory = InfrastructureFactory(provider="local", base_dir="/tmp/tableside")

    tables = factory.get_table_repository()
    directory = factory.get_directory_repository()
    notifier = factory.get_notifier()
"""

from typing import TYPE_CHECKING, Literal

from loguru import logger

from tableside.domain.services.notifier import Notifier
from tableside.infrastructure.repositories import DirectoryRepository, TableRepository

if TYPE_CHECKING:
    from tableside.config import Settings

InfrastructureProvider = Literal["local", "aws", "azure"]
NotifierProvider = Literal["memory", "webhook"]

# Error messages
AZURE_NOT_IMPLEMENTED_ERROR = "Azure provider not yet implemented"


class InfrastructureFactory:
    """
    Factory for creating infrastructure instances.

    Instances are created on first use and reused afterwards, so every
    request served by one factory shares the same repositories and notifier.
    """

    def __init__(
        self,
        provider: InfrastructureProvider | None = None,
        notifier_provider: NotifierProvider = "memory",
        **config,
    ):
        """
        Initialize infrastructure factory.

        Args:
            provider: Infrastructure provider ("local", "aws", "azure").
                     If None, uses "local" as default.
            notifier_provider: Notifier implementation ("memory", "webhook")
            **config: Provider-specific configuration options
                     (base_dir, aws_region, dynamodb_table, auto_create_resources,
                     webhook_url, notifier_timeout_seconds)
        """
        if provider is None:
            provider = "local"

        self.provider = provider
        self.notifier_provider = notifier_provider
        self.config = config

        self._table_repository: TableRepository | None = None
        self._directory_repository: DirectoryRepository | None = None
        self._notifier: Notifier | None = None

        logger.info(
            f"Initialized InfrastructureFactory with provider: {provider}, "
            f"notifier: {notifier_provider}"
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "InfrastructureFactory":
        """
        Create factory from Settings object.

        Args:
            settings: Application settings from config.py

        Returns:
            InfrastructureFactory configured from settings
        """
        config = {
            "base_dir": settings.infrastructure_base_dir,
            "aws_region": settings.aws_region,
            "dynamodb_table": settings.aws_dynamodb_table,
            "auto_create_resources": settings.auto_create_resources,
            "webhook_url": settings.notifier_webhook_url,
            "notifier_timeout_seconds": settings.notifier_timeout_seconds,
        }

        return cls(
            provider=settings.infrastructure_provider,
            notifier_provider=settings.notifier_provider,
            **config,
        )

    def get_table_repository(self) -> TableRepository:
        """
        Get table repository for configured provider.

        Returns:
            TableRepository implementation

        Raises:
            ValueError: If provider is not supported
        """
        if self._table_repository is not None:
            return self._table_repository

        if self.provider == "local":
            from tableside.infrastructure.implementations.local import (
                LocalTableRepository,
            )

            base_dir = self.config.get("base_dir", "./.tableside")
            self._table_repository = LocalTableRepository(base_dir=base_dir)

        elif self.provider == "aws":
            from tableside.infrastructure.implementations.aws import (
                AWSTableRepository,
            )

            self._table_repository = AWSTableRepository(
                table_name=self.config.get("dynamodb_table", "tableside-tables"),
                region_name=self.config.get("aws_region", "eu-west-1"),
                auto_create_table=self.config.get("auto_create_resources", False),
            )

        elif self.provider == "azure":
            raise NotImplementedError(AZURE_NOT_IMPLEMENTED_ERROR)

        else:
            raise ValueError(f"Unsupported provider: {self.provider}")

        return self._table_repository

    def get_directory_repository(self) -> DirectoryRepository:
        """
        Get menu item / staff directory.

        Menu and staff documents are owned by other services; every provider
        reads the local JSON export for now.

        Returns:
            DirectoryRepository implementation

        Raises:
            ValueError: If provider is not supported
        """
        if self._directory_repository is not None:
            return self._directory_repository

        if self.provider in ("local", "aws"):
            from tableside.infrastructure.implementations.local import (
                LocalDirectoryRepository,
            )

            base_dir = self.config.get("base_dir", "./.tableside")
            self._directory_repository = LocalDirectoryRepository(base_dir=base_dir)

        elif self.provider == "azure":
            raise NotImplementedError(AZURE_NOT_IMPLEMENTED_ERROR)

        else:
            raise ValueError(f"Unsupported provider: {self.provider}")

        return self._directory_repository

    def get_notifier(self) -> Notifier:
        """
        Get notifier for configured notifier provider.

        Returns:
            Notifier implementation

        Raises:
            ValueError: If notifier provider is not supported
        """
        if self._notifier is not None:
            return self._notifier

        if self.notifier_provider == "memory":
            from tableside.infrastructure.providers import InMemoryNotifier

            self._notifier = InMemoryNotifier()

        elif self.notifier_provider == "webhook":
            from tableside.infrastructure.providers import WebhookNotifier

            self._notifier = WebhookNotifier(
                base_url=self.config.get("webhook_url", "http://localhost:5001"),
                timeout_seconds=self.config.get("notifier_timeout_seconds", 2.0),
            )

        else:
            raise ValueError(f"Unsupported notifier provider: {self.notifier_provider}")

        return self._notifier
