# errors.py

from dataclasses import dataclass


# ----------------------------------------------------------------
# Package exceptions
# ----------------------------------------------------------------
@dataclass(eq=False)  # keep exceptions hashable
class OmnosError(Exception):
    """Base class for errors raised by omnos itself."""
    msg: str

    def __init__(self, _msg: str):
        super().__init__(_msg)
        self.msg = _msg


class MergeTypeError(OmnosError, TypeError):
    """Inputs to merge are not all sequences or all mappings."""


class SerializationError(OmnosError, ValueError):
    """Arguments could not be turned into a canonical cache key."""
