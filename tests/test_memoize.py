import asyncio

import pytest

from omnos import SerializationError, memo, memoize


def test_memo_calls_underlying_once():
    calls = []

    @memo
    async def double(x):
        calls.append(x)
        return x * 2

    async def run():
        return await double(2), await double(2)

    assert asyncio.run(run()) == (4, 4)
    assert calls == [2]
    assert double.cache == {"[2]": 4}


def test_memo_distinct_arguments_get_distinct_entries():
    @memo
    async def ident(*args, **kwargs):
        return args, kwargs

    async def run():
        await ident(1)
        await ident(2)
        await ident(a=1)
        await ident(1)

    asyncio.run(run())
    assert len(ident.cache) == 3


def test_memo_failure_is_not_cached():
    attempts = 0

    @memo
    async def flaky(x):
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("boom")
        return x

    async def run():
        with pytest.raises(RuntimeError, match="boom"):
            await flaky(1)
        assert flaky.cache == {}
        return await flaky(1)

    assert asyncio.run(run()) == 1
    assert attempts == 2


def test_memo_concurrent_callers_share_one_call():
    counter = 0

    @memo
    async def incr():
        nonlocal counter
        await asyncio.sleep(0.01)
        counter += 1
        return counter

    async def run():
        return await asyncio.gather(incr(), incr(), incr())

    assert asyncio.run(run()) == [1, 1, 1]
    assert counter == 1
    assert incr.cache == {"[]": 1}


def test_memo_concurrent_callers_all_see_failure():
    calls = 0

    @memo
    async def fail(x):
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        raise ValueError(x)

    async def run():
        return await asyncio.gather(fail("a"), fail("a"), return_exceptions=True)

    results = asyncio.run(run())
    assert calls == 1
    assert all(isinstance(r, ValueError) for r in results)
    assert fail.cache == {}


def test_memo_in_flight_entry_is_visible():
    @memo
    async def slow():
        await asyncio.sleep(0.01)
        return "done"

    async def run():
        task = asyncio.ensure_future(slow())
        await asyncio.sleep(0)
        pending = slow.cache["[]"]
        assert pending != "done"
        return await task

    assert asyncio.run(run()) == "done"
    assert slow.cache == {"[]": "done"}


def test_memo_unserializable_arguments_raise_before_call():
    calls = []

    @memo
    async def f(x):
        calls.append(x)

    cyclic = []
    cyclic.append(cyclic)

    with pytest.raises(SerializationError):
        asyncio.run(f(cyclic))
    with pytest.raises(SerializationError):
        asyncio.run(f(object()))
    assert calls == []


def test_memo_accepts_plain_functions():
    calls = []

    def square(x):
        calls.append(x)
        return x * x

    cached = memo(square)

    async def run():
        return [await cached(3), await cached(3)]

    assert asyncio.run(run()) == [9, 9]
    assert calls == [3]


def test_memo_cache_clear():
    calls = []

    @memo
    async def f(x):
        calls.append(x)
        return x

    async def run():
        await f(1)
        f.cache_clear()
        await f(1)

    asyncio.run(run())
    assert calls == [1, 1]


def test_memo_preserves_metadata():
    @memo
    async def documented():
        """Docs."""

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docs."


def test_memoize_fib():
    @memoize
    def fib(n: int) -> int:
        if n < 2:
            return n
        return fib(n - 1) + fib(n - 2)

    n = 36
    assert fib(n) == 14930352
    assert len(fib.cache) == n + 1


def test_memoize_does_not_cache_exceptions():
    attempts = []

    @memoize
    def once_broken(x):
        attempts.append(x)
        if len(attempts) == 1:
            raise KeyError(x)
        return x

    with pytest.raises(KeyError):
        once_broken("k")
    assert once_broken.cache == {}
    assert once_broken("k") == "k"
    assert once_broken("k") == "k"
    assert attempts == ["k", "k"]


def test_memo_keeps_lookalike_arguments_apart():
    @memo
    async def kind(x):
        return type(x).__name__

    async def run():
        return (
            await kind({1, 2}),
            await kind({"set": ["1", "2"]}),
            await kind({1: "a", "b": 2}),
        )

    assert asyncio.run(run()) == ("set", "dict", "dict")
    assert len(kind.cache) == 3


def test_memo_cancelled_waiter_leaves_shared_call_running():
    calls = 0

    @memo
    async def slow():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.02)
        return "done"

    async def run():
        first = asyncio.ensure_future(slow())
        second = asyncio.ensure_future(slow())
        await asyncio.sleep(0)
        first.cancel()
        result = await second
        assert first.cancelled()
        return result

    assert asyncio.run(run()) == "done"
    assert calls == 1
    assert slow.cache == {"[]": "done"}


def test_memo_cancelled_computation_is_evicted():
    @memo
    async def hang():
        await asyncio.sleep(10)

    async def run():
        waiter = asyncio.ensure_future(hang())
        await asyncio.sleep(0)
        hang.cache["[]"].task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        return dict(hang.cache)

    assert asyncio.run(run()) == {}
