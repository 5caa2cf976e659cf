"""
Optimistic-concurrency retry loop for read-modify-write sequences.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from backend.src.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3
INITIAL_BACKOFF = 0.05  # seconds


async def run_optimistic(
    operation: Callable[[], Awaitable[T]],
    description: str,
    max_attempts: int = MAX_ATTEMPTS,
    initial_backoff: float = INITIAL_BACKOFF,
) -> T:
    """Run ``operation`` until it commits without a write conflict.

    ``operation`` must re-read everything it depends on, since each attempt
    starts from scratch. After ``max_attempts`` conflicts the last
    :class:`ConflictError` is re-raised with a summary message.
    """
    last_exc: ConflictError | None = None
    for attempt in range(max_attempts):
        try:
            return await operation()
        except ConflictError as exc:
            last_exc = exc
            if attempt + 1 >= max_attempts:
                break
            backoff = initial_backoff * (2 ** attempt)
            logger.warning(
                "%s attempt %d/%d conflicted (%s), retrying in %.3fs",
                description, attempt + 1, max_attempts, exc, backoff,
            )
            await asyncio.sleep(backoff)
    logger.error("%s gave up after %d conflicting attempts", description, max_attempts)
    raise ConflictError(
        f"{description} failed after {max_attempts} concurrent-update conflicts"
    ) from last_exc
