"""
Middleware to add trace_id to each request.

The trace_id allows tracking logs from the same HTTP request throughout
the entire application, facilitating debugging and observability. A
trace id sent by an upstream proxy in ``X-Trace-ID`` is reused.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from tableside.core.logging import logger
from tableside.core.trace_context import actor_id_context, trace_id_context

TRACE_ID_HEADER = "X-Trace-ID"


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that attaches a trace_id to each request.

    Flow:
    1. Request arrives → reuses X-Trace-ID or generates a UUID
    2. Stores trace_id in contextvars
    3. All logs automatically include the trace_id
    4. Response includes X-Trace-ID header
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Processes the request by adding trace_id.

        Args:
            request: HTTP request
            call_next: Next middleware/handler

        Returns:
            Response with X-Trace-ID header
        """
        trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
        trace_id_context.set(trace_id)
        started = time.perf_counter()

        logger.info(f"Request started: {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            response.headers[TRACE_ID_HEADER] = trace_id

            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"Request completed: {request.method} {request.url.path} - "
                f"Status: {response.status_code} ({elapsed_ms:.1f} ms)"
            )

            return response

        except Exception:
            logger.exception(f"Request failed: {request.method} {request.url.path}")
            raise

        finally:
            # Clean up context (important to avoid mixing trace_ids)
            trace_id_context.set(None)
            actor_id_context.set(None)


__all__ = ["TraceIDMiddleware", "TRACE_ID_HEADER"]
