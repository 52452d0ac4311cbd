"""
Webhook notifier for the staff notification gateway.

Posts notices and live events as JSON to the gateway that owns staff
sessions and sockets:
    POST {base_url}/notices   {"from": ..., "to": ..., "message": ...}
    POST {base_url}/events    {"userId": ..., "event": ...}
"""

import httpx

from tableside.domain.services.notifier import Notifier


class WebhookNotifier(Notifier):
    """Delivers notices through HTTP calls to the notification gateway."""

    NOTICES_PATH = "/notices"
    EVENTS_PATH = "/events"

    def __init__(self, base_url: str, timeout_seconds: float = 2.0):
        """
        Initialize webhook notifier.

        Args:
            base_url: Gateway base URL (no trailing slash needed)
            timeout_seconds: Timeout for each delivery request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    async def _post(self, path: str, payload: dict[str, str]) -> None:
        async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
            response = await client.post(f"{self.base_url}{path}", json=payload)
            response.raise_for_status()

    async def notify(self, from_user_id: str, to_user_id: str, message: str) -> None:
        """
        Push a notice through the gateway.

        Raises:
            httpx.HTTPError: If the gateway is unreachable or answers an error
        """
        await self._post(
            self.NOTICES_PATH,
            {"from": from_user_id, "to": to_user_id, "message": message},
        )

    async def emit_to_user(self, user_id: str, event_name: str) -> None:
        """
        Ask the gateway to emit a live event to a user.

        Raises:
            httpx.HTTPError: If the gateway is unreachable or answers an error
        """
        await self._post(self.EVENTS_PATH, {"userId": user_id, "event": event_name})
