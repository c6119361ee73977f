"""
Runtime error taxonomy for the DiVaReMa engine.

Every failure that stops a run derives from MachineError so the front
end can catch one type. Loader (syntax) errors are separate: they abort
before an engine exists, see loader.LoaderError.

  MachineError
    AddressOutOfBounds     operand outside memory / program
    MalformedInput         READ could not produce an int
      EndOfInput           no line left
      InputDecodeError     line is not ('-')? digit+
    IoFailure              transport error (broken pipe, closed file...)
      ReadError
      WriteError
"""

from __future__ import annotations
from typing import Optional


class MachineError(Exception):
    """Base class for errors that terminate a run."""


class AddressOutOfBounds(MachineError):
    """An operand referenced a memory cell or jump target out of range."""
    def __init__(self, address: int, limit: int, ip: Optional[int] = None,
                 opcode=None):
        self.address = address
        self.limit = limit
        self.ip = ip
        self.opcode = opcode
        where = f" at ip={ip}" if ip is not None else ""
        what = f"{opcode} " if opcode is not None else ""
        super().__init__(
            f"{what}address {address} out of bounds (limit {limit}){where}"
        )


class MalformedInput(MachineError):
    """READ received something that is not a valid integer line."""


class EndOfInput(MalformedInput):
    def __init__(self, message: str = "end of input before READ completed"):
        super().__init__(message)


class InputDecodeError(MalformedInput):
    def __init__(self, line: bytes, reason: str = ""):
        self.line = line
        super().__init__(f"malformed input line {line!r}" + (f": {reason}" if reason else ""))


class IoFailure(MachineError):
    """The underlying input/output transport reported an error."""


class ReadError(IoFailure):
    pass


class WriteError(IoFailure):
    pass
