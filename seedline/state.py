"""
GeneratorState: the persisted snapshot of a generator.

A state is just (seed, draw_count). Together with the source algorithm it
fully determines the position of a generator in its output sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from seedline.errors import InvalidStateError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Wire field names, shared by the text codec and to_dict()
SEED_FIELD = "Seed"
COUNT_FIELD = "CallCount"


def to_int32(value: int) -> int:
    """Wrap an arbitrary int into the signed 32-bit range (two's complement)."""
    value &= 0xFFFFFFFF
    return value - 2**32 if value > INT32_MAX else value


def is_int32(value: Any) -> bool:
    """Return True if *value* is a real int (not bool) inside the int32 range."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and INT32_MIN <= value <= INT32_MAX
    )


@dataclass(frozen=True)
class GeneratorState:
    """
    Snapshot of a generator's position.

    Snapshots are plain values: taking one never affects the generator, and
    two snapshots of the same position compare equal.

    Attributes:
        seed: Signed 32-bit seed the generator was created with.
        draw_count: Number of draws consumed since seeding.

    Raises:
        InvalidStateError: If seed is outside int32 or draw_count is
            negative or larger than INT32_MAX.
    """

    seed: int
    draw_count: int = 0

    def __post_init__(self) -> None:
        if not is_int32(self.seed):
            raise InvalidStateError(
                f"seed must be a signed 32-bit integer, got {self.seed!r}"
            )
        if isinstance(self.draw_count, bool) or not isinstance(self.draw_count, int):
            raise InvalidStateError(
                f"draw_count must be an integer, got {self.draw_count!r}"
            )
        if self.draw_count < 0:
            raise InvalidStateError(
                f"draw_count must be non-negative, got {self.draw_count}"
            )
        if self.draw_count > INT32_MAX:
            raise InvalidStateError(
                f"draw_count {self.draw_count} exceeds the int32 maximum"
            )

    def advanced(self, count: int = 1) -> GeneratorState:
        """Return the state *count* draws later."""
        return GeneratorState(seed=self.seed, draw_count=self.draw_count + count)

    def to_dict(self) -> dict[str, int]:
        """
        Serialize to a dict keyed by the wire field names.

        Returns:
            ``{"Seed": seed, "CallCount": draw_count}`` in that key order.
        """
        return {SEED_FIELD: self.seed, COUNT_FIELD: self.draw_count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GeneratorState:
        """Create a state from a dict produced by :meth:`to_dict`."""
        return cls(seed=data[SEED_FIELD], draw_count=data[COUNT_FIELD])
