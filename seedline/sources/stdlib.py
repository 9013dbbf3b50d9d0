"""Source backed by the standard library Mersenne Twister."""

from __future__ import annotations

import random as stdlib_random

from seedline.sources.base import BITS, RawSource


class StdlibSource(RawSource):
    """
    Source backed by ``random.Random``.

    One unit of position is one ``getrandbits(53)`` call. CPython's
    Mersenne Twister is stable across platforms and versions for integer
    seeds, so saved states stay valid between machines.
    """

    name = "stdlib"

    def __init__(self, seed: int) -> None:
        super().__init__(seed)
        self._random = stdlib_random.Random(self.unsigned(seed))

    def _next_bits(self) -> int:
        return self._random.getrandbits(BITS)
