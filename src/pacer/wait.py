"""Awaitable delay measured in milliseconds."""

import asyncio


async def wait(ms: float) -> None:
    """Suspend the current task for at least *ms* milliseconds.

    Zero, negative and NaN values still yield control to the event loop once.
    """
    await asyncio.sleep(ms / 1000 if ms > 0 else 0)
