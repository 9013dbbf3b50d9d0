"""
Source backed by NumPy's PCG64 bit generator.

Requires numpy (optional dependency): pip install seedline[numpy]
"""

from __future__ import annotations

from typing import Any

from seedline.sources.base import BITS, RawSource


class NumpySource(RawSource):
    """
    Source backed by ``numpy.random.PCG64``.

    One unit of position is one 64-bit raw output, shifted down to 53 bits
    (the same reduction numpy uses for doubles). PCG64 supports jumping
    ahead, so :meth:`skip` runs in O(log n) instead of replaying.
    """

    name = "numpy"

    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        try:
            import numpy as np
        except ImportError as e:
            raise ImportError(
                "numpy is required for the 'numpy' source. "
                "Install it with: pip install seedline[numpy]"
            ) from e

        self._bit_generator: Any = np.random.PCG64(self.unsigned(seed))

    def _next_bits(self) -> int:
        return int(self._bit_generator.random_raw()) >> (64 - BITS)

    def skip(self, count: int) -> None:
        if count:
            self._bit_generator.advance(count)
