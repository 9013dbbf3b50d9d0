"""
Seed sources: where a generator gets its seed when none is given.

The default, tick_count_seed, is deliberately non-deterministic. Record
``generator.seed`` if you need to reproduce a run that used it, or inject
a different SeedSource.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from seedline.state import to_int32


@runtime_checkable
class SeedSource(Protocol):
    """
    Protocol for seed providers.

    Any zero-argument callable returning an int qualifies. Values outside
    the int32 range are wrapped by the generator.

    Example:
        def from_save_slot() -> int:
            return slot.seed

        rng = DeterministicSequenceGenerator(seed_source=from_save_slot)
    """

    def __call__(self) -> int: ...


def tick_count_seed() -> int:
    """
    Return a coarse, time-based seed.

    Milliseconds on the monotonic clock, wrapped to int32. Two calls in the
    same millisecond return the same seed. Not reproducible across runs.
    """
    return to_int32(time.monotonic_ns() // 1_000_000)


def fixed_seed(value: int) -> SeedSource:
    """
    Return a SeedSource that always yields *value*.

    Args:
        value: The seed to return.

    Returns:
        A zero-argument callable.
    """

    def _source() -> int:
        return value

    return _source
