"""
API v1 endpoints.

Route prefix constants for consistent API versioning.
"""

# Base API prefix
API_V1_PREFIX: str = "/api/v1"

# Module-specific prefixes
TABLES_PREFIX: str = f"{API_V1_PREFIX}/tables"

__all__ = [
    "API_V1_PREFIX",
    "TABLES_PREFIX",
]
