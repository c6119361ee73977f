"""
DiVaReMa I/O Port: formatted integer input/output

The port is the only way the engine talks to the outside world, and
only READ and PRINT use it. It owns two byte streams:

  source  anything with readline() -> bytes   (sys.stdin.buffer, a file,
                                               a socket makefile, io.BytesIO)
  sink    anything with write(bytes), flush()  (sys.stdout.buffer, ...)

Wire format, one integer per line:

  READ   consumes one line, strips "\\n" (and a "\\r" before it), decodes
  PRINT  writes encode(x) + "\\n" and flushes straight away so a
         downstream reader sees every value without buffering delay

A final input line without a terminator is accepted.
"""

from __future__ import annotations
import io
from typing import Optional, Protocol

from .codec import DecodeError, decode_int, encode_int
from .errors import EndOfInput, InputDecodeError, ReadError, WriteError


class LineSource(Protocol):
    def readline(self) -> bytes: ...


class ByteSink(Protocol):
    def write(self, data: bytes): ...

    def flush(self): ...


class IOPort:
    """Line-buffered integer reader + flushing integer writer.

    The engine holds the only reference; nothing else should read from
    the source or write to the sink while a program runs.
    """

    def __init__(self, source: Optional[LineSource] = None,
                 sink: Optional[ByteSink] = None):
        self.source = source if source is not None else io.BytesIO()
        self.sink = sink if sink is not None else io.BytesIO()
        self.lines_read = 0
        self.lines_written = 0

    def read_int(self) -> int:
        """Read one line and decode it.

        Raises EndOfInput when the source is exhausted, InputDecodeError
        when the line is not an integer, ReadError on transport failure.
        """
        try:
            line = self.source.readline()
        except (OSError, ValueError) as e:
            raise ReadError(f"read failed: {e}") from e

        if not line:
            raise EndOfInput()
        if not isinstance(line, (bytes, bytearray)):
            raise ReadError(f"source returned {type(line).__name__}, expected bytes")

        data = line
        if data.endswith(b'\n'):
            data = data[:-1]
            if data.endswith(b'\r'):
                data = data[:-1]

        try:
            value = decode_int(data)
        except DecodeError as e:
            raise InputDecodeError(line, str(e)) from e

        self.lines_read += 1
        return value

    def write_int(self, x: int):
        """Write x as a decimal line and flush. Raises WriteError on failure."""
        payload = encode_int(x) + b'\n'
        try:
            self.sink.write(payload)
            self.sink.flush()
        except (OSError, ValueError, TypeError) as e:
            raise WriteError(f"write failed: {e}") from e
        self.lines_written += 1
