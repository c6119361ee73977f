"""
Integer Codec: ASCII-decimal encoding for READ / PRINT

Because the machine is didactic, every number it reads or prints is a
plain ASCII decimal string, one per line, so a human can type the input
and read the output directly.

Grammar (newline handled by the I/O port, not here):

    int    : ('-')? digit+
    digit  : '0' | '1' | '2' | '3' | '4' | '5' | '6' | '7' | '8' | '9'

Values are signed 32-bit, the register width of the machine. Arithmetic
elsewhere wraps at that width, so wrap_i32() lives here next to the range
constants.
"""

from __future__ import annotations
import re

__all__ = ['DecodeError', 'I32_MIN', 'I32_MAX', 'wrap_i32', 'encode_int', 'decode_int']


I32_MIN = -0x80000000
I32_MAX = 0x7FFFFFFF

_MASK32 = 0xFFFFFFFF
_INT_RE = re.compile(rb'-?[0-9]+')


class DecodeError(ValueError):
    """Raised when a byte string does not match the integer grammar."""
    def __init__(self, message: str, data: bytes = b""):
        self.data = data
        super().__init__(message)


def wrap_i32(value: int) -> int:
    """Reduce any int to the signed 32-bit range (two's complement wrap)."""
    value &= _MASK32
    if value & 0x80000000:
        return value - 0x100000000
    return value


def encode_int(x: int) -> bytes:
    """Encode a signed 32-bit int as ASCII decimal, without newline.

    Zero is b"0", never b"-0". The magnitude of a negative value is the
    wrapping negation read back as unsigned, so I32_MIN encodes to
    b"-2147483648" instead of overflowing.
    """
    if not I32_MIN <= x <= I32_MAX:
        raise ValueError(f"{x} is outside the signed 32-bit range")
    if x < 0:
        magnitude = (-x) & _MASK32
        return b'-' + str(magnitude).encode('ascii')
    return str(x).encode('ascii')


def decode_int(data: bytes) -> int:
    """Decode ('-')? digit+ into a signed 32-bit int.

    The caller strips the line terminator first. Leading zeros are
    allowed; b"-0" decodes to 0.
    """
    if not data:
        raise DecodeError("empty input", data)
    if _INT_RE.fullmatch(data) is None:
        raise DecodeError(f"not an integer: {data!r}", data)
    value = int(data)
    if not I32_MIN <= value <= I32_MAX:
        raise DecodeError(f"integer out of 32-bit range: {data!r}", data)
    return value
