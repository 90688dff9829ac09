"""
asyncio helpers for Course Sync.
"""

import asyncio
from typing import Awaitable, List, TypeVar

T = TypeVar("T")


async def gather_or_cancel(*aws: Awaitable[T]) -> List[T]:
    """
    Run awaitables concurrently and return their results in argument order.

    If any of them fails, or the caller is cancelled, the ones still pending
    are cancelled before the exception propagates, so no orphaned requests
    keep running in the background.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let the cancelled tasks unwind before propagating
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
