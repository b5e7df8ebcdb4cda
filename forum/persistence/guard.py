"""Deadlines and failure mapping for record store calls.

Every store call made by a PostgreSQL repository goes through ``guarded``:
it is bounded by the tighter of the configured default timeout and the
caller's deadline (set with ``store_deadline``), and driver failures are
translated into domain ``StoreError`` subclasses.
"""

import asyncio
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Awaitable, Iterator, TypeVar

import logfire
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    OperationalError,
)

from forum.domain.error import StoreTimeout, StoreUnavailable

T = TypeVar("T")

# Absolute monotonic time by which the current request must be done
_deadline: ContextVar[float | None] = ContextVar("store_deadline", default=None)


@contextmanager
def store_deadline(seconds: float | None) -> Iterator[None]:
    """Bound all store calls made inside the block.

    Nested deadlines can only tighten the outer one.

    Args:
        seconds: Time budget from now (None leaves the current deadline)
    """
    if seconds is None:
        yield
        return

    requested = time.monotonic() + seconds
    current = _deadline.get()
    token = _deadline.set(requested if current is None else min(current, requested))
    try:
        yield
    finally:
        _deadline.reset(token)


def remaining_time(default_timeout: float) -> float:
    """Seconds left for the next store call.

    Args:
        default_timeout: Per-call timeout when no tighter deadline is set

    Returns:
        Time budget in seconds (may be zero or negative once expired)
    """
    deadline = _deadline.get()
    if deadline is None:
        return default_timeout
    return min(default_timeout, deadline - time.monotonic())


async def guarded(awaitable: Awaitable[T], operation: str, default_timeout: float) -> T:
    """Await a store call under the active deadline.

    Args:
        awaitable: Pending store call
        operation: Name of the operation, for errors and logs
        default_timeout: Per-call timeout in seconds

    Returns:
        Result of the store call

    Raises:
        StoreTimeout: If the deadline expires first
        StoreUnavailable: If the store cannot be reached or fails
        IntegrityError: If the statement violates a constraint (unchanged)
    """
    timeout = remaining_time(default_timeout)
    if timeout <= 0:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        logfire.warn("Store deadline already expired", operation=operation)
        raise StoreTimeout(operation, 0.0)

    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logfire.error("Store operation timed out", operation=operation, timeout=timeout)
        raise StoreTimeout(operation, timeout)
    except (OperationalError, DisconnectionError, OSError) as e:
        logfire.error("Store unavailable", operation=operation, error=str(e))
        raise StoreUnavailable(operation, str(e))
    except IntegrityError:
        # Translated by the caller, e.g. a parent removed before the insert
        raise
    except DBAPIError as e:
        if e.connection_invalidated:
            logfire.error("Store connection lost", operation=operation, error=str(e))
        else:
            logfire.error("Store rejected operation", operation=operation, error=str(e))
        raise StoreUnavailable(operation, str(e))
