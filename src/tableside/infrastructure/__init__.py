"""
Infrastructure layer for table persistence and outbound notifications.

This module provides repository interfaces and implementations for:
- Table aggregate storage (revision-checked writes)
- Menu item and staff lookups for populated views
- Order-ready notifiers

Supports multiple providers via factory pattern:
- local: JSON documents on disk
- aws: DynamoDB
- azure: (future) CosmosDB
"""

from tableside.infrastructure.factory import InfrastructureFactory

__all__ = ["InfrastructureFactory"]
