"""
Loguru configuration for the application.

This module configures loguru with:
- Automatic Trace ID and actor id in each log
- Configurable format from settings
- Redirection of standard library logs to loguru
- Health-probe noise removed from uvicorn access logs
"""

import logging
import sys
from typing import Any

from loguru import logger

from tableside.config import settings
from tableside.core.trace_context import actor_id_context, trace_id_context
from tableside.core.uvicorn_filters import HealthCheckFilter


def add_trace_id(record: dict[str, Any]) -> bool:
    """
    Adds the trace_id and actor_id to the log record.

    Both values come from the current request context, allowing tracking
    of logs from the same request and the same staff member.

    Args:
        record: Loguru record

    Returns:
        True to indicate that the filter passed
    """
    trace_id = trace_id_context.get()
    record["extra"]["trace_id"] = trace_id if trace_id else "N/A"
    actor_id = actor_id_context.get()
    record["extra"]["actor_id"] = actor_id if actor_id else "anonymous"
    return True


def configure_logger() -> None:
    """
    Configures loguru with application settings.

    This function:
    1. Removes default loguru handlers
    2. Adds handler to stderr with custom configuration
    3. Configures level, format, colorization, etc.
    """
    logger.remove()

    logger.add(
        sink=sys.stderr,
        level=settings.log_level.upper(),
        format=settings.log_format,
        filter=add_trace_id,
        colorize=True,
        serialize=False,
        backtrace=True,
        diagnose=settings.debug,
        enqueue=settings.logger_enqueue,
    )


# Configure logger when importing the module
configure_logger()


__all__ = ["logger", "InterceptHandler", "intercept_standard_logging"]


class InterceptHandler(logging.Handler):
    """
    Handler to redirect standard logging logs to loguru.

    This allows capturing logs from libraries that use standard logging
    (like uvicorn, httpx, boto3) and process them with loguru.

    Usage:
        import logging
        from tableside.core.logging import InterceptHandler

        logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)
    """

    def emit(self, record: logging.LogRecord) -> None:
        """
        Redirects a standard logging record to loguru.

        Args:
            record: logging.LogRecord record
        """
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging() -> None:
    """
    Configures redirection of standard logging to loguru.

    Intercepts logs from uvicorn (server, access, errors), httpx (used by the
    webhook notifier), fastapi and botocore. Health probes are filtered out of
    the access log.

    Call this function in main.py when initializing the app.
    """
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO)

    for logger_name in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "fastapi",
        "botocore",
    ]:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())
