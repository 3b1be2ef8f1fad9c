"""Race helpers for waits whose outcome is not known in advance."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger(__name__)


async def first_of(signals: dict[str, Awaitable[object]]) -> str | None:
    """Wait until the first of several bounded signals fires.

    Each awaitable carries its own timeout (e.g. ``wait_for_selector(...,
    timeout=3000)``). A branch that times out is an absent signal, not an
    error: the race keeps waiting on the others. Returns the name of the
    first signal that fired, or ``None`` when every branch timed out. Any
    other exception from a branch propagates. Losing branches are cancelled.
    """
    tasks = {asyncio.ensure_future(aw): name for name, aw in signals.items()}
    pending = set(tasks)
    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                exc = task.exception()
                if exc is None:
                    logger.debug("Signal fired first: %s", tasks[task])
                    return tasks[task]
                if not isinstance(exc, PlaywrightTimeoutError):
                    raise exc
                logger.debug("Signal timed out: %s", tasks[task])
        return None
    finally:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
