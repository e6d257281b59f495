"""memoize.py – result caching keyed by the canonical argument encoding

``memo`` wraps a coroutine function so each distinct argument list is
computed once.  While a computation is running its task sits in the cache
and later callers await that same task instead of starting another one.
Once it finishes the task is swapped for its result, or dropped if it
failed, so failures are always retried.

``memoize`` is the synchronous counterpart.

Both attach the cache as ``wrapper.cache`` and a ``wrapper.cache_clear()``.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, TypeVar

from .keys import make_key

__all__ = ["memo", "memoize"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _InFlight:
    """Cache slot for a computation that has started but not finished."""

    __slots__ = ("task",)

    def __init__(self, task: asyncio.Future):
        self.task = task

    def __repr__(self) -> str:
        return f"_InFlight({self.task!r})"


def memo(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Memoize an asynchronous function.

    Parameters:
        fn: Coroutine function (or any callable returning an awaitable, or a
            plain value).

    Returns:
        An async wrapper with the same signature as ``fn``.

    Raises:
        SerializationError: If the arguments cannot be encoded as a key. The
            wrapped function is not called in that case.
    """
    cache: Dict[str, Any] = {}
    name = getattr(fn, "__qualname__", repr(fn))

    def settle(key: str, task: asyncio.Future) -> None:
        # Runs before any awaiting caller resumes.
        entry = cache.get(key)
        if not (isinstance(entry, _InFlight) and entry.task is task):
            return  # cleared while running
        if task.cancelled() or task.exception() is not None:
            del cache[key]
            logger.debug("memo %s: evicted %s after failure", name, key)
        else:
            cache[key] = task.result()

    @wraps(fn)
    async def wrapper(*args, **kwargs):
        key = make_key(args, kwargs)
        if key in cache:
            entry = cache[key]
            if not isinstance(entry, _InFlight):
                return entry
            logger.debug("memo %s: joining in-flight call %s", name, key)
            return await asyncio.shield(entry.task)

        logger.debug("memo %s: miss %s", name, key)
        result = fn(*args, **kwargs)
        if not inspect.isawaitable(result):
            cache[key] = result
            return result

        task = asyncio.ensure_future(result)
        cache[key] = _InFlight(task)
        task.add_done_callback(lambda t: settle(key, t))
        return await asyncio.shield(task)

    def cache_clear() -> None:
        cache.clear()

    wrapper.cache = cache
    wrapper.cache_clear = cache_clear
    return wrapper


def memoize(func: Callable[..., T]) -> Callable[..., T]:
    """Simple memoization decorator.

    It stores results keyed by the full argument list (positional + keyword)
    and returns cached values on repeats. An exception leaves no entry behind.
    """
    cache: Dict[str, Any] = {}
    name = getattr(func, "__qualname__", repr(func))

    @wraps(func)
    def wrapper(*args, **kwargs):
        key = make_key(args, kwargs)
        if key not in cache:
            logger.debug("memoize %s: miss %s", name, key)
            cache[key] = func(*args, **kwargs)
        return cache[key]

    def cache_clear() -> None:
        cache.clear()

    wrapper.cache = cache
    wrapper.cache_clear = cache_clear
    return wrapper
