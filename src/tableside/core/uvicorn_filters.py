"""
Logging filter that keeps health probes out of the uvicorn access log.

Load balancers poll /health every few seconds; staff traffic is what we
want to see in the access log.
"""

import logging


class HealthCheckFilter(logging.Filter):
    """Drop access-log records for probe and favicon requests."""

    EXCLUDED_PATHS = frozenset({"/health", "/healthz", "/favicon.ico"})

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Decide whether a uvicorn access record is kept.

        Uvicorn access records carry the request line in ``record.args``
        (client, method, path, http version, status); fall back to the
        rendered message for other shapes.

        Args:
            record: Log record from uvicorn

        Returns:
            False if the request path is a probe, True otherwise
        """
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            return path not in self.EXCLUDED_PATHS

        message = record.getMessage()
        return not any(
            f'"GET {path} ' in message for path in self.EXCLUDED_PATHS
        )
