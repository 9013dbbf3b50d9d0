"""
Error taxonomy for seedline.

Every failure raised by the library derives from SeedlineError, so callers
can catch all of them at once. The concrete classes also derive from the
closest builtin exception, which keeps ``except ValueError`` style handlers
working.

Distinguishes:

- bad input value: InvalidArgumentError, InvalidStateError
- bad input shape: FormatError
- missing or incomplete input: NullInputError, TruncatedDataError
"""

from __future__ import annotations


class SeedlineError(Exception):
    """Base class for all seedline errors."""

    pass


class InvalidArgumentError(SeedlineError, ValueError):
    """Raised when a bounded draw receives a negative bound or an inverted range."""

    pass


class InvalidStateError(SeedlineError, ValueError):
    """Raised when a generator state cannot exist (e.g. a negative draw count)."""

    pass


class NullInputError(SeedlineError, TypeError):
    """Raised when a payload or stream is required but None was given."""

    pass


class FormatError(SeedlineError, ValueError):
    """Raised when a text payload does not have the expected shape."""

    pass


class TruncatedDataError(SeedlineError, EOFError):
    """Raised when a binary payload holds fewer bytes than a full state."""

    pass
