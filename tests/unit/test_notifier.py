"""Unit tests for order-ready dispatch and the notifier implementations."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx

from tableside.domain.services.notifier import (
    ORDER_PROCESSED_EVENT,
    OrderReadyDispatcher,
    ready_message,
)
from tableside.infrastructure.providers import InMemoryNotifier, WebhookNotifier

GATEWAY = "http://gateway.test"


def test_ready_message():
    assert ready_message(12) == "One order for table number 12 is ready to be served"


# ===========================
# OrderReadyDispatcher
# ===========================


class TestOrderReadyDispatcher:
    """Tests for background delivery of ready notices."""

    @pytest.mark.asyncio
    async def test_dispatch_sends_notice_then_event(self):
        notifier = InMemoryNotifier()
        dispatcher = OrderReadyDispatcher(notifier)

        dispatcher.dispatch("C1", "W1", 5)
        await dispatcher.drain()

        assert len(notifier.notices_for("W1")) == 1
        assert notifier.notices[0].from_user_id == "C1"
        assert notifier.events[0].event_name == ORDER_PROCESSED_EVENT
        assert dispatcher.pending_count == 0

    @pytest.mark.asyncio
    async def test_dispatch_does_not_wait_for_delivery(self):
        notifier = InMemoryNotifier()
        dispatcher = OrderReadyDispatcher(notifier)

        dispatcher.dispatch("C1", "W1", 5)

        # Nothing delivered until the event loop gets a chance to run the task
        assert notifier.notices == []
        assert dispatcher.pending_count == 1
        await dispatcher.drain()
        assert len(notifier.notices) == 1

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self):
        notifier = MagicMock()
        notifier.notify = AsyncMock()
        notifier.emit_to_user = AsyncMock(side_effect=RuntimeError("socket closed"))
        dispatcher = OrderReadyDispatcher(notifier)

        task = dispatcher.dispatch("C1", "W1", 5)
        await dispatcher.drain()

        assert task.done()
        assert task.exception() is None
        notifier.notify.assert_awaited_once_with("C1", "W1", ready_message(5))

    @pytest.mark.asyncio
    async def test_drain_without_pending(self):
        await OrderReadyDispatcher(InMemoryNotifier()).drain()


# ===========================
# WebhookNotifier
# ===========================


class TestWebhookNotifier:
    """Tests for the HTTP notification gateway client."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_notify_posts_notice(self):
        route = respx.post(f"{GATEWAY}/notices").mock(return_value=httpx.Response(201))
        notifier = WebhookNotifier(base_url=f"{GATEWAY}/")

        await notifier.notify("C1", "W1", "ready")

        assert route.called
        assert json.loads(route.calls.last.request.content) == {
            "from": "C1",
            "to": "W1",
            "message": "ready",
        }

    @respx.mock
    @pytest.mark.asyncio
    async def test_emit_to_user_posts_event(self):
        route = respx.post(f"{GATEWAY}/events").mock(return_value=httpx.Response(204))
        notifier = WebhookNotifier(base_url=GATEWAY)

        await notifier.emit_to_user("W1", ORDER_PROCESSED_EVENT)

        assert json.loads(route.calls.last.request.content) == {
            "userId": "W1",
            "event": "orderProcessed",
        }

    @respx.mock
    @pytest.mark.asyncio
    async def test_gateway_error_raises(self):
        respx.post(f"{GATEWAY}/notices").mock(return_value=httpx.Response(502))
        notifier = WebhookNotifier(base_url=GATEWAY)

        with pytest.raises(httpx.HTTPStatusError):
            await notifier.notify("C1", "W1", "ready")

    @respx.mock
    @pytest.mark.asyncio
    async def test_gateway_error_only_logged_by_dispatcher(self):
        respx.post(f"{GATEWAY}/notices").mock(side_effect=httpx.ConnectError("refused"))
        dispatcher = OrderReadyDispatcher(WebhookNotifier(base_url=GATEWAY))

        task = dispatcher.dispatch("C1", "W1", 5)
        await dispatcher.drain()

        assert task.exception() is None
