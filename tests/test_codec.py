"""
Integer codec tests: ASCII decimal <-> signed 32-bit.

Covers the grammar ('-')? digit+, the 32-bit range edges, the
"0" never "-0" rule and the wrapping negation used for I32_MIN.
"""

import pytest

from divarema.codec import (
    DecodeError, I32_MAX, I32_MIN, decode_int, encode_int, wrap_i32,
)


# ─── encode ─────────────────────

class TestEncode:
    def test_single_digit(self):
        assert encode_int(3) == b"3"

    def test_multi_digit(self):
        assert encode_int(567) == b"567"

    def test_negative(self):
        assert encode_int(-91) == b"-91"

    def test_zero_is_not_negative(self):
        assert encode_int(0) == b"0"
        assert encode_int(-0) == b"0"

    def test_no_trailing_newline(self):
        assert not encode_int(42).endswith(b"\n")

    def test_max(self):
        assert encode_int(I32_MAX) == b"2147483647"

    def test_min_uses_wrapping_negation(self):
        """-(I32_MIN) overflows i32; the wrapped magnitude read as unsigned is 2^31."""
        assert encode_int(I32_MIN) == b"-2147483648"

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            encode_int(I32_MAX + 1)
        with pytest.raises(ValueError):
            encode_int(I32_MIN - 1)


# ─── decode ─────────────────────

class TestDecode:
    def test_positive(self):
        assert decode_int(b"3") == 3
        assert decode_int(b"78129") == 78129

    def test_negative(self):
        assert decode_int(b"-11") == -11

    def test_leading_zeros_accepted(self):
        assert decode_int(b"007") == 7

    def test_negative_zero(self):
        assert decode_int(b"-0") == 0

    def test_range_edges(self):
        assert decode_int(b"2147483647") == I32_MAX
        assert decode_int(b"-2147483648") == I32_MIN

    @pytest.mark.parametrize("data", [
        b"",
        b"-",
        b"abc",
        b"12a",
        b"+5",
        b" 5",
        b"5 ",
        b"1.5",
        b"--3",
        b"5\n",
    ])
    def test_malformed(self, data):
        with pytest.raises(DecodeError):
            decode_int(data)

    def test_overflow(self):
        with pytest.raises(DecodeError):
            decode_int(b"2147483648")
        with pytest.raises(DecodeError):
            decode_int(b"-2147483649")

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_int(b"x")

    def test_error_keeps_input(self):
        with pytest.raises(DecodeError) as exc:
            decode_int(b"oops")
        assert exc.value.data == b"oops"


# ─── round trip ─────────────────────

class TestRoundTrip:
    def test_edges_round_trip(self):
        for x in (0, 1, -1, 9, 10, -10, 99999, -99999, I32_MAX, I32_MIN, I32_MIN + 1):
            assert decode_int(encode_int(x)) == x

    def test_small_range_round_trip(self):
        for x in range(-9999, 10000):
            assert encode_int(x) == str(x).encode("ascii")
            assert decode_int(encode_int(x)) == x, x

    def test_full_range_stride_round_trip(self):
        for x in range(I32_MIN, I32_MAX, 7919 * 65537):
            assert decode_int(encode_int(x)) == x, x


# ─── wrapping ─────────────────────

class TestWrap:
    def test_in_range_unchanged(self):
        assert wrap_i32(0) == 0
        assert wrap_i32(-5) == -5
        assert wrap_i32(I32_MAX) == I32_MAX

    def test_overflow_wraps_negative(self):
        assert wrap_i32(I32_MAX + 1) == I32_MIN

    def test_underflow_wraps_positive(self):
        assert wrap_i32(I32_MIN - 1) == I32_MAX

    def test_large_values(self):
        assert wrap_i32(2 ** 32 + 7) == 7
