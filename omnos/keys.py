"""keys.py – canonical cache keys for memoized calls

Two calls share a cache entry iff their keys are textually identical, so the
encoding has to be deterministic across runs and independent of dict
insertion order.  Arguments are first rewritten into plain JSON data, then
dumped compactly:

    make_key((1, "a"))            -> '[1,"a"]'
    make_key((1,), {"b": 2})      -> '{"args":[1],"kwargs":{"b":2}}'
    make_key(({1: "x"},))         -> '[{"dict":[["1","x"]]}]'

Every JSON object inside an argument is a tag naming what it came from
("dict", "set", "ndarray", "dataclass"), so no two kinds of value can meet
on the same text.  Mapping keys are stored by their own encoding, which
keeps ``1`` and ``"1"`` apart and lets mixed key types sort.  Tuples
encode like lists and numpy scalars are unwrapped.  Cycles and values with
no encoding raise SerializationError.
"""
from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping as MappingABC
from typing import Any, Mapping, Optional, Set

import numpy as np

from .errors import SerializationError

__all__ = ["make_key", "encode"]


def _dumps(data: Any) -> str:
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _enter(obj: Any, active: Set[int]) -> None:
    if id(obj) in active:
        raise SerializationError("Cannot build cache key: circular reference detected")
    active.add(id(obj))


def _canon(obj: Any, active: Set[int]) -> Any:
    """Rewrite ``obj`` into JSON data with every non-list container tagged."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, np.generic):
        return _canon(obj.item(), active)
    if isinstance(obj, np.ndarray):
        return {"ndarray": obj.tolist(), "dtype": str(obj.dtype), "shape": list(obj.shape)}

    _enter(obj, active)
    try:
        if isinstance(obj, (list, tuple)):
            return [_canon(item, active) for item in obj]
        if isinstance(obj, MappingABC):
            items = [[_dumps(_canon(k, active)), _canon(v, active)] for k, v in obj.items()]
            return {"dict": sorted(items, key=lambda kv: kv[0])}
        if isinstance(obj, (set, frozenset)):
            return {"set": sorted(_dumps(_canon(item, active)) for item in obj)}
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            fields = [[f.name, _canon(getattr(obj, f.name), active)] for f in dataclasses.fields(obj)]
            return {"dataclass": type(obj).__qualname__, "fields": fields}
    finally:
        active.discard(id(obj))
    raise SerializationError(
        f"Cannot build cache key: object of type {type(obj).__name__} is not serializable"
    )


def encode(value: Any) -> str:
    """Return the canonical text for a single value."""
    try:
        return _dumps(_canon(value, set()))
    except RecursionError as exc:
        raise SerializationError(f"Cannot build cache key: {exc}") from exc


def make_key(args: tuple, kwargs: Optional[Mapping[str, Any]] = None) -> str:
    """Encode a call's arguments as a cache key.

    Without keyword arguments the key is a JSON array; with them it is an
    object holding both, so a keyword call never collides with a positional
    one. Keyword names are always strings and are stored as plain keys.
    """
    try:
        if kwargs:
            return _dumps({
                "args": _canon(list(args), set()),
                "kwargs": {name: _canon(v, set()) for name, v in kwargs.items()},
            })
        return _dumps(_canon(list(args), set()))
    except RecursionError as exc:
        raise SerializationError(f"Cannot build cache key: {exc}") from exc
