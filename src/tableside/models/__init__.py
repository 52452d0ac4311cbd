"""
Models package.

Contains shared Pydantic models used across multiple modules.
Module-specific models are located in their respective module directories.
"""

from tableside.models.errors import ErrorResult
from tableside.models.shared import HealthResponse

__all__ = [
    "ErrorResult",
    "HealthResponse",
]
