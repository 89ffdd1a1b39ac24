from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from interview_prep.core.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    attempts: int = 3,
    base_delay: float = 0.4,
) -> T:
    """Await ``operation`` up to ``attempts`` times.

    Any exception is retried after ``base_delay * attempt`` seconds. The
    exception from the last attempt is re-raised as is.
    """
    attempts = max(1, int(attempts))
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == attempts:
                raise
            delay = base_delay * attempt
            logger.warning(
                "Attempt %d/%d failed (%s); retrying in %.2fs",
                attempt,
                attempts,
                e,
                delay,
            )
            await asyncio.sleep(delay)
