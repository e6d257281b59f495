"""merge.py – shallow merge of sequences or of mappings

``merge`` looks at the first input to decide which kind of merge to run.
Callers that already know what they hold can call ``merge_sequences`` or
``merge_mappings`` directly.

    merge([1, 2], (3, 4))                 -> [1, 2, 3, 4]
    merge({"a": 1, "b": 2}, {"b": 3})     -> {"a": 1, "b": 3}
    merge([1], {"a": 1})                  -> MergeTypeError
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import MergeTypeError

__all__ = ["Kind", "kind_of", "merge", "merge_mappings", "merge_sequences"]


class Kind(Enum):
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Any) -> Optional[Kind]:
    """Classify a value for merging; text and bytes are not sequences here."""
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return Kind.SEQUENCE
    return None


def _check(inputs: tuple, kind: Kind) -> None:
    for position, item in enumerate(inputs):
        if kind_of(item) is not kind:
            raise MergeTypeError(
                f"Cannot merge mixed types: argument {position} is "
                f"{type(item).__name__}, expected a {kind.value}"
            )


def merge_sequences(*seqs: Sequence) -> List:
    """Concatenate sequences, in argument order, into a new list."""
    _check(seqs, Kind.SEQUENCE)
    out: List = []
    for seq in seqs:
        out.extend(seq)
    return out


def merge_mappings(*maps: Mapping) -> Dict:
    """Overlay mappings left to right into a new dict (later keys win)."""
    _check(maps, Kind.MAPPING)
    out: Dict = {}
    for m in maps:
        out.update(m)
    return out


_MERGERS = {
    Kind.SEQUENCE: merge_sequences,
    Kind.MAPPING: merge_mappings,
}


def merge(*inputs):
    """Merge inputs of one kind, chosen by the first input.

    Raises:
        MergeTypeError: If there are no inputs, the first one is neither a
            sequence nor a mapping, or a later one is of the other kind.
    """
    if not inputs:
        raise MergeTypeError("Cannot merge nothing: at least one input is required.")
    kind = kind_of(inputs[0])
    if kind is None:
        raise MergeTypeError("Cannot merge non-sequence, non-mapping values.")
    return _MERGERS[kind](*inputs)
