"""Tests for the text and binary state codecs."""

from __future__ import annotations

import io
import struct

import pytest

from seedline._canonical import (
    STATE_SIZE,
    decode_binary,
    decode_text,
    encode_binary,
    encode_text,
    fingerprint,
    read_state,
    write_state,
)
from seedline.errors import (
    FormatError,
    InvalidStateError,
    NullInputError,
    TruncatedDataError,
)
from seedline.state import INT32_MAX, INT32_MIN, GeneratorState


class TestEncodeText:
    """Tests for encode_text()."""

    def test_exact_format(self):
        """Text should be compact with a fixed key order."""
        state = GeneratorState(seed=12345, draw_count=3)
        assert encode_text(state) == '{"Seed":12345,"CallCount":3}'

    def test_negative_seed(self):
        """Negative seeds should encode as plain JSON integers."""
        state = GeneratorState(seed=-42, draw_count=0)
        assert encode_text(state) == '{"Seed":-42,"CallCount":0}'

    def test_idempotent(self):
        """Equal states should give byte-identical text."""
        assert encode_text(GeneratorState(9, 1)) == encode_text(GeneratorState(9, 1))


class TestDecodeText:
    """Tests for decode_text()."""

    def test_decodes_canonical_text(self):
        """Canonical text should decode to the state it came from."""
        state = decode_text('{"Seed":7,"CallCount":11}')
        assert state == GeneratorState(seed=7, draw_count=11)

    def test_tolerates_whitespace_and_key_order(self):
        """Hand-edited text with other formatting should still load."""
        state = decode_text('{ "CallCount": 2,\n  "Seed": -1 }')
        assert state == GeneratorState(seed=-1, draw_count=2)

    def test_ignores_extra_keys(self):
        """Unknown keys should be ignored."""
        state = decode_text('{"Seed":1,"CallCount":0,"Comment":"slot 2"}')
        assert state == GeneratorState(seed=1, draw_count=0)

    def test_accepts_bytes(self):
        """UTF-8 bytes should decode like text."""
        assert decode_text(b'{"Seed":3,"CallCount":4}') == GeneratorState(3, 4)

    def test_deeply_nested_raises_format_error(self):
        """Pathological nesting is a bad shape, not a crash."""
        with pytest.raises(FormatError, match="nested too deeply"):
            decode_text("[" * 100_000)
        with pytest.raises(FormatError):
            decode_text('{"Seed":' * 100_000)

    def test_invalid_utf8_bytes_raise_format_error(self):
        """Undecodable bytes are a bad shape."""
        with pytest.raises(FormatError):
            decode_text(b"\x80\x81\x82")

    @pytest.mark.parametrize("payload", [123, 1.5, ["Seed", 1], {"Seed": 1}, object()])
    def test_non_text_payload_raises_format_error(self, payload):
        """Only str and bytes are accepted as text."""
        with pytest.raises(FormatError, match="str or bytes"):
            decode_text(payload)

    def test_none_raises_null_input(self):
        """None should raise NullInputError."""
        with pytest.raises(NullInputError):
            decode_text(None)

    def test_invalid_json_raises_format_error(self):
        """Garbage text should raise FormatError."""
        with pytest.raises(FormatError, match="not valid JSON"):
            decode_text("invalid json")

    def test_empty_string_raises_format_error(self):
        """Empty text should raise FormatError, not NullInputError."""
        with pytest.raises(FormatError):
            decode_text("")

    def test_non_object_raises_format_error(self):
        """A JSON array is the wrong shape."""
        with pytest.raises(FormatError, match="object"):
            decode_text("[1, 2]")

    def test_missing_field_raises_format_error(self):
        """Both fields are required."""
        with pytest.raises(FormatError, match="CallCount"):
            decode_text('{"Seed":1}')
        with pytest.raises(FormatError, match="Seed"):
            decode_text('{"CallCount":1}')

    @pytest.mark.parametrize(
        "text",
        [
            '{"Seed":true,"CallCount":0}',
            '{"Seed":1.5,"CallCount":0}',
            '{"Seed":"1","CallCount":0}',
            '{"Seed":1,"CallCount":null}',
            '{"Seed":2147483648,"CallCount":0}',
            '{"Seed":1,"CallCount":2147483648}',
        ],
    )
    def test_non_int32_field_raises_format_error(self, text):
        """Fields must be int32 integers."""
        with pytest.raises(FormatError, match="32-bit integer"):
            decode_text(text)

    def test_negative_count_raises_invalid_state(self):
        """A negative count is a bad value, not a bad shape."""
        with pytest.raises(InvalidStateError):
            decode_text('{"Seed":1,"CallCount":-1}')


class TestBinaryCodec:
    """Tests for encode_binary() and decode_binary()."""

    def test_size_is_eight_bytes(self):
        """Binary states are exactly 8 bytes."""
        assert STATE_SIZE == 8
        assert len(encode_binary(GeneratorState(seed=7, draw_count=0))) == 8

    def test_little_endian_layout(self):
        """Seed comes first, then draw count, both little-endian int32."""
        assert encode_binary(GeneratorState(seed=7, draw_count=0)) == (
            b"\x07\x00\x00\x00\x00\x00\x00\x00"
        )
        assert encode_binary(GeneratorState(seed=-1, draw_count=258)) == (
            b"\xff\xff\xff\xff\x02\x01\x00\x00"
        )

    def test_decode_extremes(self):
        """int32 limits should survive decoding."""
        data = struct.pack("<ii", INT32_MIN, INT32_MAX)
        assert decode_binary(data) == GeneratorState(INT32_MIN, INT32_MAX)

    def test_decode_reads_only_first_eight_bytes(self):
        """Trailing bytes are ignored."""
        data = encode_binary(GeneratorState(5, 6)) + b"trailing"
        assert decode_binary(data) == GeneratorState(5, 6)

    def test_decode_accepts_bytearray_and_memoryview(self):
        """Any bytes-like object should decode."""
        data = encode_binary(GeneratorState(5, 6))
        assert decode_binary(bytearray(data)) == GeneratorState(5, 6)
        assert decode_binary(memoryview(data)) == GeneratorState(5, 6)

    def test_none_raises_null_input(self):
        """None should raise NullInputError."""
        with pytest.raises(NullInputError):
            decode_binary(None)

    @pytest.mark.parametrize("size", [0, 1, 4, 7])
    def test_short_data_raises_truncated(self, size):
        """Fewer than 8 bytes should raise TruncatedDataError."""
        with pytest.raises(TruncatedDataError, match=f"got {size}"):
            decode_binary(b"\x01" * size)

    def test_truncated_is_an_eof_error(self):
        """TruncatedDataError should be catchable as EOFError."""
        with pytest.raises(EOFError):
            decode_binary(b"\x01")

    def test_negative_count_raises_invalid_state(self):
        """A negative encoded count is rejected."""
        with pytest.raises(InvalidStateError):
            decode_binary(struct.pack("<ii", 1, -1))


class TestStreams:
    """Tests for write_state() and read_state()."""

    def test_write_then_read_leaves_stream_open(self):
        """Streams should stay open and positioned after the state."""
        stream = io.BytesIO()
        stream.write(b"HDR")
        write_state(stream, GeneratorState(seed=42, draw_count=3))
        stream.write(b"END")

        assert not stream.closed
        stream.seek(3)
        assert read_state(stream) == GeneratorState(seed=42, draw_count=3)
        assert not stream.closed
        assert stream.tell() == 3 + STATE_SIZE
        assert stream.read() == b"END"

    def test_write_none_stream_raises(self):
        """A None stream should raise NullInputError."""
        with pytest.raises(NullInputError):
            write_state(None, GeneratorState(1))

    def test_read_none_stream_raises(self):
        """A None stream should raise NullInputError."""
        with pytest.raises(NullInputError):
            read_state(None)

    def test_read_short_stream_raises(self):
        """A stream ending early should raise TruncatedDataError."""
        with pytest.raises(TruncatedDataError):
            read_state(io.BytesIO(b"\x01"))

    def test_read_retries_short_raw_reads(self):
        """A raw stream delivering the state in pieces is read in full."""

        class ChunkedStream(io.RawIOBase):
            def __init__(self, chunks: list[bytes]) -> None:
                self._chunks = list(chunks)

            def readable(self) -> bool:
                return True

            def readinto(self, buffer) -> int:
                if not self._chunks:
                    return 0
                chunk = self._chunks.pop(0)
                buffer[: len(chunk)] = chunk
                return len(chunk)

        data = encode_binary(GeneratorState(seed=-9, draw_count=300))
        stream = ChunkedStream([data[:3], data[3:], b"after"])
        assert read_state(stream) == GeneratorState(seed=-9, draw_count=300)
        assert not stream.closed
        assert stream.read(5) == b"after"

    def test_read_chunked_then_eof_raises(self):
        """Pieces that end before 8 bytes are still truncated."""
        stream = io.BufferedReader(io.BytesIO(b"\x01\x02\x03"))
        with pytest.raises(TruncatedDataError, match="got 3"):
            read_state(stream)


class TestFingerprint:
    """Tests for fingerprint()."""

    def test_length_and_stability(self):
        """Fingerprints are 16 hex chars and stable for equal states."""
        fp = fingerprint(GeneratorState(1, 2))
        assert len(fp) == 16
        int(fp, 16)
        assert fp == fingerprint(GeneratorState(1, 2))

    def test_differs_by_position(self):
        """Different positions should fingerprint differently."""
        assert fingerprint(GeneratorState(1, 2)) != fingerprint(GeneratorState(1, 3))
