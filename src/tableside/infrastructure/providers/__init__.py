"""Notifier implementations (in-memory and webhook)."""

from tableside.infrastructure.providers.memory import InMemoryNotifier
from tableside.infrastructure.providers.webhook import WebhookNotifier

__all__ = ["InMemoryNotifier", "WebhookNotifier"]
