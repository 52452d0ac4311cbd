"""Timeout and error translation around repository calls."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from loguru import logger

from tableside.domain.exceptions import (
    PersistenceError,
    RevisionConflictError,
    TablesideError,
)

T = TypeVar("T")


async def bounded(call: Awaitable[T], timeout_seconds: float, action: str) -> T:
    """
    Await a repository call with an upper time bound.

    Revision conflicts and domain errors pass through untouched; a timeout
    or any other storage failure becomes PersistenceError.

    Args:
        call: Pending repository coroutine
        timeout_seconds: Upper bound for the call
        action: What the call does, for log and error messages
            (e.g. "loading table 5")

    Returns:
        Whatever the repository call returns

    Raises:
        PersistenceError: On timeout or storage failure
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout_seconds)
    except (RevisionConflictError, TablesideError):
        raise
    except TimeoutError as e:
        logger.error(f"Timed out after {timeout_seconds}s while {action}")
        raise PersistenceError(f"DB error: timed out while {action}") from e
    except Exception as e:
        logger.exception(f"Storage failure while {action}: {e}")
        raise PersistenceError(f"DB error: failed while {action}") from e
