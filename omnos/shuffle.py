# shuffle.py
import random
from typing import MutableSequence, Optional, TypeVar

T = TypeVar("T")


def shuffle(seq: MutableSequence[T], rng: Optional[random.Random] = None) -> MutableSequence[T]:
    """Fisher–Yates shuffle, in place. Returns the same object.

    Pass ``rng`` (a ``random.Random``) for a reproducible order; otherwise
    the module-level generator is used. Not suitable for anything security
    related.
    """
    randrange = (rng or random).randrange
    for i in range(len(seq) - 1, 0, -1):
        j = randrange(i + 1)
        seq[i], seq[j] = seq[j], seq[i]
    return seq
