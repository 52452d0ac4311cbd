"""Unit tests for logging helpers."""

import logging

from tableside.core.logging import InterceptHandler, add_trace_id, intercept_standard_logging
from tableside.core.trace_context import actor_id_context, trace_id_context
from tableside.core.uvicorn_filters import HealthCheckFilter


def access_record(path: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='%s - "%s %s HTTP/%s" %d',
        args=("127.0.0.1:5000", "GET", path, "1.1", 200),
        exc_info=None,
    )


def test_add_trace_id_defaults():
    record = {"extra": {}}

    assert add_trace_id(record) is True
    assert record["extra"] == {"trace_id": "N/A", "actor_id": "anonymous"}


def test_add_trace_id_from_context():
    trace_token = trace_id_context.set("trace-1")
    actor_token = actor_id_context.set("W1")
    try:
        record = {"extra": {}}
        add_trace_id(record)
    finally:
        trace_id_context.reset(trace_token)
        actor_id_context.reset(actor_token)

    assert record["extra"] == {"trace_id": "trace-1", "actor_id": "W1"}


def test_health_check_filter_drops_probes():
    health_filter = HealthCheckFilter()

    assert health_filter.filter(access_record("/health")) is False
    assert health_filter.filter(access_record("/health?full=1")) is False
    assert health_filter.filter(access_record("/api/v1/tables/orders")) is True


def test_health_check_filter_message_fallback():
    record = logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='127.0.0.1 - "GET /health HTTP/1.1" 200',
        args=None,
        exc_info=None,
    )

    assert HealthCheckFilter().filter(record) is False


def test_intercept_standard_logging_installs_handlers():
    intercept_standard_logging()

    uvicorn_access = logging.getLogger("uvicorn.access")
    assert any(isinstance(h, InterceptHandler) for h in uvicorn_access.handlers)
    assert any(isinstance(f, HealthCheckFilter) for f in uvicorn_access.filters)
    assert uvicorn_access.propagate is False
