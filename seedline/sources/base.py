"""
RawSource: the underlying PRNG a generator delegates to.

A source produces one 53-bit unsigned integer per unit of sequence
position. Every typed draw is derived from exactly one unit, so the
position after n draws is the same no matter which draw methods were
called. That is what makes replay-based restoration exact.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from seedline.state import INT32_MAX

BITS = 53
_SCALE = 1.0 / (1 << BITS)


class RawSource(ABC):
    """
    Abstract base class for underlying PRNG algorithms.

    Subclasses must define:

    - name: ClassVar[str] -- registry name (e.g., "stdlib")
    - _next_bits() -> int -- one 53-bit unsigned integer, one unit of position

    Subclasses may override :meth:`skip` with a faster jump as long as it
    lands on the same position as the replay loop.
    """

    name: ClassVar[str] = ""

    def __init__(self, seed: int) -> None:
        """
        Seed the source.

        Args:
            seed: Signed 32-bit seed. Backends seed from its unsigned
                32-bit image so that negative seeds stay distinct.
        """
        self._seed = seed

    @property
    def seed(self) -> int:
        """The signed seed this source was created with."""
        return self._seed

    @staticmethod
    def unsigned(seed: int) -> int:
        """Return the unsigned 32-bit image of a signed seed."""
        return seed & 0xFFFFFFFF

    @abstractmethod
    def _next_bits(self) -> int:
        """Return the next 53-bit unsigned integer and advance one unit."""

    def draw_raw_int(self) -> int:
        """Draw an int in [0, INT32_MAX)."""
        return (self._next_bits() * INT32_MAX) >> BITS

    def draw_raw_float(self) -> float:
        """Draw a float in [0.0, 1.0)."""
        return self._next_bits() * _SCALE

    def draw_raw_int_bounded(self, low: int, high: int) -> int:
        """
        Draw an int in [low, high), or *low* when the range is empty.

        Callers validate that high >= low.
        """
        bits = self._next_bits()
        return low + ((bits * (high - low)) >> BITS)

    def skip(self, count: int) -> None:
        """Fast-forward *count* units by drawing and discarding them."""
        for _ in range(count):
            self._next_bits()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed})"
