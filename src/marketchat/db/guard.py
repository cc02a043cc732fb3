"""Bounded store calls.

Every awaited database round trip goes through :func:`store_call` so that a
slow or unreachable store surfaces as :class:`TransientError` instead of
blocking the caller indefinitely. Nothing here retries; callers decide.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.core.errors import TransientError
from marketchat.core.settings import settings

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def _is_transient(exc: DBAPIError) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    return bool(exc.connection_invalidated)


async def run_bounded(awaitable: Awaitable[T], *, label: str) -> T:
    """Await ``awaitable`` under the configured store timeout."""
    timeout = settings.store_timeout_seconds
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except TimeoutError as exc:
        logger.warning("Store call %s timed out after %.1fs", label, timeout)
        raise TransientError(f"store did not answer within {timeout:g}s") from exc
    except DBAPIError as exc:
        if not _is_transient(exc):
            raise
        logger.warning("Store call %s failed: %s", label, exc.orig)
        raise TransientError("store is unavailable, retry later") from exc


def store_call(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Decorate an async store method with the bounded-timeout policy."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return await run_bounded(func(*args, **kwargs), label=func.__qualname__)

    return wrapper


async def commit(session: AsyncSession) -> None:
    """Commit the session's transaction under the store timeout."""
    await run_bounded(session.commit(), label="commit")
