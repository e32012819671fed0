from __future__ import annotations

import uuid
from typing import Callable


def new_random_id() -> int:
    """Return a random positive 62-bit integer derived from a UUID4.

    The 128 random-ish bits of a version 4 UUID are shifted down to 62 bits so
    the result fits comfortably in a signed 64-bit identifier space.

    Returns:
        A positive integer below ``2**62``.
    """
    return (uuid.uuid4().int >> 66) or 1


def allocate_id(is_taken: Callable[[int], bool]) -> int:
    """Draw random ids until one is not taken.

    Args:
        is_taken: Predicate reporting whether an id is already in use.

    Returns:
        An id for which ``is_taken`` returned False.
    """
    while True:
        candidate = new_random_id()
        if not is_taken(candidate):
            return candidate
