"""
Low-level state codecs (internal).

This module provides the two wire formats for GeneratorState and a
fingerprint helper.

Key design decisions:
- Text is compact JSON with a fixed key order: {"Seed":<int>,"CallCount":<int>}
- Binary is exactly 8 bytes, little-endian: int32 seed then int32 draw count
- Bad shape raises FormatError, bad values raise InvalidStateError
- Streams belong to the caller and are never closed here
"""

from __future__ import annotations

import hashlib
import json
import struct
from typing import IO, Any

from seedline.errors import FormatError, NullInputError, TruncatedDataError
from seedline.state import COUNT_FIELD, SEED_FIELD, GeneratorState, is_int32

_BINARY = struct.Struct("<ii")

STATE_SIZE = _BINARY.size


def encode_text(state: GeneratorState) -> str:
    """
    Encode a state as canonical JSON text.

    The output is byte-identical for equal states: keys are emitted in the
    fixed order Seed, CallCount with no whitespace.

    Example:
        >>> encode_text(GeneratorState(seed=7, draw_count=3))
        '{"Seed":7,"CallCount":3}'
    """
    return json.dumps(state.to_dict(), separators=(",", ":"))


def decode_text(text: str | bytes | None) -> GeneratorState:
    """
    Decode canonical JSON text into a state.

    Extra keys are ignored. Key order and whitespace are not checked.

    Raises:
        NullInputError: If text is None.
        FormatError: If text is not str or bytes, or is not a JSON object
            with integer Seed and CallCount fields in the int32 range.
        InvalidStateError: If CallCount is negative.
    """
    if text is None:
        raise NullInputError("text payload is required, got None")
    if not isinstance(text, (str, bytes, bytearray)):
        raise FormatError(
            f"State text must be str or bytes, got {type(text).__name__}"
        )

    try:
        data: Any = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FormatError(f"State text is not valid JSON: {e}") from e
    except RecursionError as e:
        raise FormatError("State text is nested too deeply to be a state") from e

    if not isinstance(data, dict):
        raise FormatError(
            f"State text must be a JSON object, got {type(data).__name__}"
        )

    for key in (SEED_FIELD, COUNT_FIELD):
        if key not in data:
            raise FormatError(f"State text is missing required field {key!r}")
        if not is_int32(data[key]):
            raise FormatError(
                f"Field {key!r} must be a 32-bit integer, got {data[key]!r}"
            )

    return GeneratorState.from_dict(data)


def encode_binary(state: GeneratorState) -> bytes:
    """Encode a state as 8 little-endian bytes: int32 seed, int32 draw count."""
    return _BINARY.pack(state.seed, state.draw_count)


def decode_binary(data: bytes | bytearray | memoryview | None) -> GeneratorState:
    """
    Decode the first 8 bytes of *data* into a state.

    Raises:
        NullInputError: If data is None.
        TruncatedDataError: If fewer than 8 bytes are available.
        InvalidStateError: If the encoded draw count is negative.
    """
    if data is None:
        raise NullInputError("binary payload is required, got None")
    if len(data) < STATE_SIZE:
        raise TruncatedDataError(
            f"Binary state needs {STATE_SIZE} bytes, got {len(data)}"
        )
    seed, draw_count = _BINARY.unpack_from(data, 0)
    return GeneratorState(seed=seed, draw_count=draw_count)


def write_state(stream: IO[bytes] | None, state: GeneratorState) -> None:
    """
    Write the binary form of *state* to a caller-owned stream.

    Performs exactly one write. The stream is left open.
    """
    if stream is None:
        raise NullInputError("stream is required, got None")
    stream.write(encode_binary(state))


def read_state(stream: IO[bytes] | None) -> GeneratorState:
    """
    Read one binary state from a caller-owned stream.

    Reads at most 8 bytes, retrying short reads from raw streams until the
    state is complete or the stream ends. The stream is left open,
    positioned after the bytes that were read.

    Raises:
        NullInputError: If stream is None.
        TruncatedDataError: If the stream ends before 8 bytes.
    """
    if stream is None:
        raise NullInputError("stream is required, got None")
    data = b""
    while len(data) < STATE_SIZE:
        chunk = stream.read(STATE_SIZE - len(data))
        if not chunk:
            # EOF, or a non-blocking stream with nothing available
            break
        data += chunk
    return decode_binary(data)


def fingerprint(state: GeneratorState) -> str:
    """
    Compute a stable fingerprint of a state.

    Uses SHA-256 of the canonical text, truncated to 16 hex characters.
    """
    hash_bytes = hashlib.sha256(encode_text(state).encode("utf-8")).digest()
    return hash_bytes.hex()[:16]
