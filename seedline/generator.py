"""
DeterministicSequenceGenerator: a PRNG whose position can be saved and resumed.

A generator owns a seed, a draw counter, and a live source seeded from that
seed. The invariant is simple: the live source is always exactly
``draw_count`` units past a freshly seeded source. Every draw goes through
one private primitive that moves both together.

Restoration does not snapshot the source's internal state. It seeds a
fresh source and replays ``draw_count`` units, which costs O(draw_count)
(O(log n) for sources that can jump ahead) but works for any source and
any platform.

Not thread-safe. Use one generator per thread or guard it with a lock.

Example:
    rng = DeterministicSequenceGenerator(seed=12345)
    roll = rng.next_int(1, 7)
    save_file.write_text(rng.to_json())

    # later, possibly in another process
    rng = DeterministicSequenceGenerator.from_json(save_file.read_text())
    next_roll = rng.next_int(1, 7)  # continues the original sequence
"""

from __future__ import annotations

import logging
from typing import IO, Any

from seedline import _canonical
from seedline.config import SeedlineConfig
from seedline.errors import InvalidArgumentError, InvalidStateError
from seedline.seeding import SeedSource, tick_count_seed
from seedline.sources.base import RawSource
from seedline.sources.registry import SourceRegistry
from seedline.state import INT32_MAX, GeneratorState, is_int32, to_int32

logger = logging.getLogger(__name__)

SourceSpec = str | type[RawSource] | None


def _resolve_source(source: SourceSpec, config: SeedlineConfig) -> type[RawSource]:
    if source is None:
        return SourceRegistry.get(config.source)
    if isinstance(source, str):
        return SourceRegistry.get(source)
    return source


def _check_int32_arg(name: str, value: Any) -> None:
    if not is_int32(value):
        raise InvalidArgumentError(
            f"{name} must be a signed 32-bit integer, got {value!r}"
        )


class DeterministicSequenceGenerator:
    """
    Seeded random generator with exact save/restore.

    All four draw methods share one counter: any mix of k draws leaves the
    generator at draw_count == k, and a restored generator continues with
    the same values provided the same methods are called with the same
    arguments.

    Attributes:
        seed: The signed 32-bit seed.
        draw_count: Draws consumed since seeding.
        source_name: Registry name of the underlying source.
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        source: SourceSpec = None,
        seed_source: SeedSource | None = None,
        config: SeedlineConfig | None = None,
    ) -> None:
        """
        Create a generator at draw count zero.

        Args:
            seed: Seed for the sequence. Any int is accepted and wrapped to
                int32. If omitted, *seed_source* is called.
            source: Source name or RawSource subclass. Defaults to
                ``config.source``.
            seed_source: Seed provider used when *seed* is None. Defaults
                to :func:`tick_count_seed`, which is not reproducible.
            config: Generator defaults. Defaults to ``SeedlineConfig()``.
        """
        self._config = config or SeedlineConfig()
        if seed is None:
            seed = (seed_source or tick_count_seed)()
        self._source_class = _resolve_source(source, self._config)
        self._seed = to_int32(seed)
        self._draw_count = 0
        self._source = self._source_class(self._seed)
        logger.debug(
            f"Created generator seed={self._seed} source={self._source_class.name!r}"
        )

    # ------------------------------------------------------------------
    # Restoration
    # ------------------------------------------------------------------

    @classmethod
    def restore(
        cls,
        seed: int,
        draw_count: int,
        *,
        source: SourceSpec = None,
        config: SeedlineConfig | None = None,
    ) -> DeterministicSequenceGenerator:
        """
        Rebuild a generator at an exact sequence position.

        Seeds a fresh source from *seed* and fast-forwards it by
        *draw_count* units. Cost is proportional to *draw_count* unless the
        source can jump ahead.

        Raises:
            InvalidStateError: If draw_count is negative or the pair is
                otherwise not a valid state.
        """
        return cls.from_state(
            GeneratorState(seed=seed, draw_count=draw_count),
            source=source,
            config=config,
        )

    @classmethod
    def from_state(
        cls,
        state: GeneratorState,
        *,
        source: SourceSpec = None,
        config: SeedlineConfig | None = None,
    ) -> DeterministicSequenceGenerator:
        """Rebuild a generator from a :class:`GeneratorState` snapshot."""
        generator = cls(state.seed, source=source, config=config)
        threshold = generator._config.replay_warning_threshold
        if state.draw_count > threshold:
            logger.warning(
                f"Restoring seed={state.seed} replays {state.draw_count} draws "
                f"(threshold {threshold}); consider reseeding between saves"
            )
        logger.debug(
            f"Restoring seed={state.seed} draw_count={state.draw_count} "
            f"source={generator.source_name!r}"
        )
        generator._source.skip(state.draw_count)
        generator._draw_count = state.draw_count
        return generator

    @classmethod
    def from_json(
        cls,
        text: str | bytes | None,
        *,
        source: SourceSpec = None,
        config: SeedlineConfig | None = None,
    ) -> DeterministicSequenceGenerator:
        """
        Restore a generator from :meth:`to_json` output.

        Raises:
            NullInputError: If text is None.
            FormatError: If text lacks integer Seed and CallCount fields.
            InvalidStateError: If CallCount is negative.
        """
        return cls.from_state(_canonical.decode_text(text), source=source, config=config)

    @classmethod
    def from_bytes(
        cls,
        data: bytes | bytearray | memoryview | None,
        *,
        source: SourceSpec = None,
        config: SeedlineConfig | None = None,
    ) -> DeterministicSequenceGenerator:
        """
        Restore a generator from :meth:`to_bytes` output.

        Only the first 8 bytes are read.

        Raises:
            NullInputError: If data is None.
            TruncatedDataError: If fewer than 8 bytes are given.
            InvalidStateError: If the encoded draw count is negative.
        """
        return cls.from_state(_canonical.decode_binary(data), source=source, config=config)

    @classmethod
    def read_from(
        cls,
        stream: IO[bytes] | None,
        *,
        source: SourceSpec = None,
        config: SeedlineConfig | None = None,
    ) -> DeterministicSequenceGenerator:
        """
        Restore a generator from a binary stream written by :meth:`write_to`.

        Reads exactly 8 bytes and leaves the stream open, so a save file
        can hold other data before and after the state.

        Raises:
            NullInputError: If stream is None.
            TruncatedDataError: If the stream ends early.
        """
        return cls.from_state(_canonical.read_state(stream), source=source, config=config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def seed(self) -> int:
        """The signed 32-bit seed."""
        return self._seed

    @property
    def draw_count(self) -> int:
        """Number of draws consumed since seeding."""
        return self._draw_count

    @property
    def source_name(self) -> str:
        """Registry name of the underlying source."""
        return self._source_class.name

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------

    def _advance(self) -> RawSource:
        """Count one draw and return the source to draw it from."""
        if self._draw_count >= INT32_MAX:
            raise InvalidStateError(
                f"draw_count cannot exceed {INT32_MAX}; reseed to continue"
            )
        self._draw_count += 1
        return self._source

    def next_int(self, a: int | None = None, b: int | None = None) -> int:
        """
        Draw an integer.

        - ``next_int()`` returns a value in [0, 2**31 - 1).
        - ``next_int(bound)`` returns a value in [0, bound); 0 if bound is 0.
        - ``next_int(low, high)`` returns a value in [low, high); low if
          they are equal.

        Raises:
            InvalidArgumentError: If bound < 0, high < low, or an argument
                is not a 32-bit integer. The draw is not counted.
        """
        if a is None:
            if b is not None:
                raise InvalidArgumentError("next_int() got high without low")
            return self._advance().draw_raw_int()

        if b is None:
            _check_int32_arg("bound", a)
            if a < 0:
                raise InvalidArgumentError(f"bound must be non-negative, got {a}")
            return self._advance().draw_raw_int_bounded(0, a)

        _check_int32_arg("low", a)
        _check_int32_arg("high", b)
        if b < a:
            raise InvalidArgumentError(
                f"high must be greater than or equal to low, got low={a}, high={b}"
            )
        return self._advance().draw_raw_int_bounded(a, b)

    def next_float(self) -> float:
        """Draw a float in [0.0, 1.0)."""
        return self._advance().draw_raw_float()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_state(self) -> GeneratorState:
        """Return a snapshot of (seed, draw_count). Does not advance."""
        return GeneratorState(seed=self._seed, draw_count=self._draw_count)

    def to_json(self) -> str:
        """
        Serialize the state as canonical JSON.

        Example:
            >>> DeterministicSequenceGenerator(seed=7).to_json()
            '{"Seed":7,"CallCount":0}'
        """
        return _canonical.encode_text(self.export_state())

    def to_bytes(self) -> bytes:
        """Serialize the state as 8 little-endian bytes (int32 seed, int32 count)."""
        return _canonical.encode_binary(self.export_state())

    def write_to(self, stream: IO[bytes] | None) -> None:
        """
        Write :meth:`to_bytes` output to a caller-owned stream.

        Performs one write and leaves the stream open.

        Raises:
            NullInputError: If stream is None.
        """
        _canonical.write_state(stream, self.export_state())

    def clone(self) -> DeterministicSequenceGenerator:
        """Return an independent generator at the same position."""
        return type(self).from_state(
            self.export_state(), source=self._source_class, config=self._config
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeterministicSequenceGenerator):
            return NotImplemented
        return (
            self.export_state() == other.export_state()
            and self.source_name == other.source_name
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(seed={self._seed}, "
            f"draw_count={self._draw_count}, source={self.source_name!r})"
        )
