"""omnos – small general-purpose helpers

Memoization for coroutine functions, ANSI colours, shuffling, sleeping,
shallow merging, capitalization and timing.
"""
import logging

from .colors import color_codes, colors, strip_ansi, style
from .errors import MergeTypeError, OmnosError, SerializationError
from .keys import make_key
from .memoize import memo, memoize
from .merge import Kind, kind_of, merge, merge_mappings, merge_sequences
from .shuffle import shuffle
from .strings import capitalize
from .timing import Timer, delay, time, timeme

__version__ = "1.0.0"

__all__ = [
    "Kind",
    "MergeTypeError",
    "OmnosError",
    "SerializationError",
    "Timer",
    "capitalize",
    "color_codes",
    "colors",
    "delay",
    "kind_of",
    "make_key",
    "memo",
    "memoize",
    "merge",
    "merge_mappings",
    "merge_sequences",
    "shuffle",
    "strip_ansi",
    "style",
    "time",
    "timeme",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
