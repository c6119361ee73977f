"""
DiVaReMa: the Didactic Vanity Register Machine
==============================================
A tiny accumulator machine for teaching: eight instructions, a handful
of signed 32-bit memory cells, and decimal integers in and out, one per
line.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌──────────┐
    │  Source  │───>│  Loader  │───>│  Engine  │<──>│ I/O Port │<──> stdin/stdout
    │ (.drm)   │    │ (Program)│    │ (step)   │    │ (codec)  │
    └──────────┘    └──────────┘    └──────────┘    └──────────┘

    - isa.py:      OpCode enum + immutable (opcode, operand) Instruction
    - loader.py:   line tokenizer with line-numbered syntax errors
    - codec.py:    ASCII-decimal <-> signed 32-bit int
    - memory.py:   fixed-size zeroed cell array
    - io_port.py:  READ / PRINT transport over any byte streams
    - engine.py:   accumulator, ip, dispatch table, RUNNING/HALTED/FAILED
"""

__version__ = "0.1.0"

from .codec import DecodeError, decode_int, encode_int
from .isa import Instruction, OpCode, Program
from .errors import (
    MachineError, AddressOutOfBounds, MalformedInput, EndOfInput,
    InputDecodeError, IoFailure, ReadError, WriteError,
)
from .memory import Memory
from .io_port import IOPort
from .engine import DEFAULT_MEMORY_SIZE, Engine, MachineState
from .loader import LoaderError, load_program, tokenize


def run_source(source: str, *, memory_size: int = DEFAULT_MEMORY_SIZE,
               input_stream=None, output_stream=None, trace: bool = False) -> Engine:
    """Tokenize and run a program, returning the halted engine.

    Full pipeline: tokenize -> Engine -> run. LoaderError and
    MachineError propagate to the caller.
    """
    program = tokenize(source)
    engine = Engine(program, memory_size, input_stream, output_stream)
    engine.enable_trace(trace)
    engine.run()
    return engine
