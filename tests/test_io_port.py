"""
I/O port tests: line-oriented integer reads and flushed writes over
in-memory byte streams.
"""

import io

import pytest

from divarema.errors import (
    EndOfInput, InputDecodeError, IoFailure, MalformedInput, ReadError, WriteError,
)
from divarema.io_port import IOPort


class _BrokenSink:
    def write(self, data):
        raise BrokenPipeError("broken pipe")

    def flush(self):
        pass


class _BrokenSource:
    def readline(self):
        raise OSError("device gone")


class _FlushCountingSink(io.BytesIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class TestReadInt:
    def test_reads_lines_in_order(self):
        port = IOPort(io.BytesIO(b"123\n-456\n"), io.BytesIO())
        assert port.read_int() == 123
        assert port.read_int() == -456
        assert port.lines_read == 2

    def test_end_of_input(self):
        port = IOPort(io.BytesIO(b"1\n"), io.BytesIO())
        port.read_int()
        with pytest.raises(EndOfInput):
            port.read_int()

    def test_end_of_input_is_malformed_input(self):
        port = IOPort(io.BytesIO(b""), io.BytesIO())
        with pytest.raises(MalformedInput):
            port.read_int()

    def test_bad_line(self):
        port = IOPort(io.BytesIO(b"abc\n"), io.BytesIO())
        with pytest.raises(InputDecodeError) as exc:
            port.read_int()
        assert exc.value.line == b"abc\n"

    def test_blank_line_is_malformed(self):
        port = IOPort(io.BytesIO(b"\n"), io.BytesIO())
        with pytest.raises(InputDecodeError):
            port.read_int()

    def test_crlf_terminator(self):
        port = IOPort(io.BytesIO(b"42\r\n"), io.BytesIO())
        assert port.read_int() == 42

    def test_unterminated_last_line(self):
        port = IOPort(io.BytesIO(b"7\n89"), io.BytesIO())
        assert port.read_int() == 7
        assert port.read_int() == 89

    def test_transport_failure(self):
        port = IOPort(_BrokenSource(), io.BytesIO())
        with pytest.raises(ReadError):
            port.read_int()


    def test_text_source_rejected(self):
        port = IOPort(io.StringIO("5\n"), io.BytesIO())
        with pytest.raises(ReadError):
            port.read_int()
        assert port.lines_read == 0


class TestWriteInt:
    def test_sequence(self):
        out = io.BytesIO()
        port = IOPort(io.BytesIO(), out)
        port.write_int(789)
        assert out.getvalue() == b"789\n"
        port.write_int(-30)
        assert out.getvalue() == b"789\n-30\n"
        assert port.lines_written == 2

    def test_zero(self):
        out = io.BytesIO()
        IOPort(io.BytesIO(), out).write_int(0)
        assert out.getvalue() == b"0\n"

    def test_flushes_every_write(self):
        out = _FlushCountingSink()
        port = IOPort(io.BytesIO(), out)
        port.write_int(1)
        port.write_int(2)
        assert out.flushes == 2

    def test_broken_pipe(self):
        port = IOPort(io.BytesIO(), _BrokenSink())
        with pytest.raises(WriteError) as exc:
            port.write_int(1)
        assert isinstance(exc.value, IoFailure)
        assert "broken pipe" in str(exc.value)

    def test_closed_sink(self):
        out = io.BytesIO()
        out.close()
        with pytest.raises(WriteError):
            IOPort(io.BytesIO(), out).write_int(1)


    def test_text_sink_rejected(self):
        port = IOPort(io.BytesIO(), io.StringIO())
        with pytest.raises(WriteError):
            port.write_int(3)
        assert port.lines_written == 0


class TestMixed:
    def test_interleaved_read_write(self):
        out = io.BytesIO()
        port = IOPort(io.BytesIO(b"123\n-456\n"), out)
        assert port.read_int() == 123
        port.write_int(789)
        assert port.read_int() == -456
        port.write_int(-30)
        assert out.getvalue() == b"789\n-30\n"
