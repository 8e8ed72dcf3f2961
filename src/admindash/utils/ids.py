"""Identifier generation for store entities."""

import random
from datetime import datetime
from typing import Iterable, Optional

from admindash.utils.timestamps import timestamp_millis


def next_sequential_id(existing: Iterable[int]) -> int:
    """Return max(existing ids) + 1, starting at 1 for an empty collection."""
    return max(existing, default=0) + 1


def timestamp_id(now: datetime, rng: Optional[random.Random] = None) -> int:
    """Return a timestamp-based id with a random tiebreak.

    Two ids created in the same millisecond differ in their last three
    digits with high probability.
    """
    rng = rng or random
    return timestamp_millis(now) * 1000 + rng.randrange(1000)
