"""timing.py – sleeping and stopwatches

    await delay(50)                        # yields to other tasks for 50 ms
    elapsed = await time(fetch, url)       # whole milliseconds, rounded up

    with timeme("load") as t:              # logs "load took 12.345 ms"
        load()
    t.ms

All measurements use the monotonic clock, the same one asyncio schedules on.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from time import monotonic
from typing import Callable, Iterator, Optional

__all__ = ["Timer", "delay", "time", "timeme"]

logger = logging.getLogger(__name__)


async def delay(ms: float) -> None:
    """Suspend the calling task for at least ``ms`` milliseconds."""
    if ms < 0:
        raise ValueError(f"delay must be non-negative; got {ms}")
    await asyncio.sleep(ms / 1000)


async def time(fn: Callable, *args, **kwargs) -> int:
    """Run ``fn`` to completion and return how long it took in milliseconds.

    ``fn`` may be a plain function or return an awaitable. Whatever it
    raises propagates untouched.
    """
    start = monotonic()
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        await result
    return math.ceil((monotonic() - start) * 1000)


@dataclass
class Timer:
    """Elapsed time of a ``timeme`` block; ``ms`` is set when the block exits."""
    label: str
    start: float
    ms: Optional[float] = None


@contextmanager
def timeme(label: str, level: int = logging.INFO) -> Iterator[Timer]:
    """Context manager that logs how long the wrapped block takes."""
    timer = Timer(label, monotonic())
    try:
        yield timer
    finally:
        timer.ms = (monotonic() - timer.start) * 1000
        logger.log(level, "%s took %.3f ms", label, timer.ms)
