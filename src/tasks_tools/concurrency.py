"""Running blocking Google client calls off the event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any) -> T:
    """Run func in a worker thread and return its result.

    An exception raised by func is re-raised here as the same object.
    asyncio.to_thread on its own rebuilds TimeoutError when it crosses the
    future boundary, dropping the original traceback.
    """

    def call() -> tuple[T | None, Exception | None]:
        try:
            return func(*args), None
        except Exception as e:
            return None, e

    result, error = await asyncio.to_thread(call)
    if error is not None:
        raise error
    return result
