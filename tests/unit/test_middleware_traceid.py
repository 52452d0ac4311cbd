"""
Unit tests for TraceIDMiddleware.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import Request, Response

from tableside.core.trace_context import actor_id_context, trace_id_context
from tableside.middleware import TRACE_ID_HEADER, TraceIDMiddleware


@pytest.fixture
def middleware():
    """Create middleware instance."""
    return TraceIDMiddleware(app=AsyncMock())


def make_request(headers: dict[str, str] | None = None) -> Request:
    request = MagicMock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/tables/orders"
    request.headers = headers or {}
    return request


@pytest.mark.asyncio
async def test_trace_id_middleware_adds_header(middleware):
    # Arrange
    call_next = AsyncMock(return_value=Response(content="ok", status_code=200))

    # Act
    result = await middleware.dispatch(make_request(), call_next)

    # Assert
    assert len(result.headers[TRACE_ID_HEADER]) > 0


@pytest.mark.asyncio
async def test_trace_id_middleware_reuses_incoming_id(middleware):
    call_next = AsyncMock(return_value=Response())

    result = await middleware.dispatch(make_request({TRACE_ID_HEADER: "abc-123"}), call_next)

    assert result.headers[TRACE_ID_HEADER] == "abc-123"


@pytest.mark.asyncio
async def test_trace_id_middleware_sets_and_clears_context(middleware):
    seen = {}

    async def call_next(request):  # noqa: ASYNC100
        seen["trace_id"] = trace_id_context.get()
        actor_id_context.set("W1")
        return Response()

    await middleware.dispatch(make_request({TRACE_ID_HEADER: "abc-123"}), call_next)

    assert seen["trace_id"] == "abc-123"
    assert trace_id_context.get() is None
    assert actor_id_context.get() is None


@pytest.mark.asyncio
async def test_trace_id_middleware_reraises(middleware):
    call_next = AsyncMock(side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        await middleware.dispatch(make_request(), call_next)

    assert trace_id_context.get() is None
