"""AWS infrastructure implementations package."""

from tableside.infrastructure.implementations.aws.table_repository import (
    AWSTableRepository,
)

__all__ = [
    "AWSTableRepository",
]
