"""
DiVaReMa Engine: instruction dispatch state machine

The engine owns all mutable machine state:
  - accumulator (signed 32-bit)
  - memory (memory.py, fixed size, zeroed)
  - instruction pointer (index into the program)
  - the I/O port (io_port.py), used by READ / PRINT only

Execution model, one step():
  1. If ip is past the last instruction -> HALTED (implicit halt)
  2. Fetch the instruction at ip
  3. Check its operand (memory cell or jump target) -> AddressOutOfBounds
  4. Dispatch to the handler -> update acc, memory, port
  5. Advance ip (+1, or the JGZ target)

States:
  RUNNING  initial
  HALTED   HALT executed, or ip ran off the end       (absorbing)
  FAILED   an error escaped a handler                 (absorbing)

Arithmetic wraps at 32 bits, there is no overflow trap.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from .codec import wrap_i32
from .errors import AddressOutOfBounds, MachineError
from .io_port import ByteSink, IOPort, LineSource
from .isa import JUMP_OPS, MEMORY_OPS, Instruction, OpCode, Program, as_program
from .memory import Memory

log = logging.getLogger('divarema.engine')

DEFAULT_MEMORY_SIZE = 8


class MachineState(Enum):
    RUNNING = 'RUNNING'
    HALTED = 'HALTED'
    FAILED = 'FAILED'


class Engine:
    """DiVaReMa register machine.

    Usage:
        engine = Engine(program, memory_size=8,
                        input_stream=sys.stdin.buffer,
                        output_stream=sys.stdout.buffer)
        engine.run()          # -> MachineState.HALTED, or raises MachineError
        engine.memory.snapshot()
    """

    def __init__(self, program: Sequence, memory_size: int = DEFAULT_MEMORY_SIZE,
                 input_stream: Optional[LineSource] = None,
                 output_stream: Optional[ByteSink] = None):
        self.program: Program = as_program(program)
        self.memory = Memory(memory_size)
        self.port = IOPort(input_stream, output_stream)

        self.acc: int = 0
        self.ip: int = 0
        self.steps: int = 0
        self.state = MachineState.RUNNING
        self.error: Optional[Exception] = None

        self._trace = False
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> MachineState:
        """Execute one instruction and return the resulting state.

        In a terminal state this does nothing. On failure the engine
        moves to FAILED, keeps the error in self.error and re-raises it.
        """
        if self.state is not MachineState.RUNNING:
            return self.state

        if self.ip >= len(self.program):
            log.debug("ip=%d past end of program, implicit halt", self.ip)
            self.state = MachineState.HALTED
            return self.state

        instr = self.program[self.ip]

        if self._trace:
            self._trace_line(instr)

        try:
            self._check_operand(instr)
            self._dispatch[instr.opcode](instr.operand)
        except MachineError as e:
            self.state = MachineState.FAILED
            self.error = e
            log.debug("ip=%d %s failed: %s", self.ip, instr, e)
            raise
        except Exception as e:
            # Host-side faults (a bad stream object, say) still end the run
            self.state = MachineState.FAILED
            self.error = e
            log.debug("ip=%d %s: unexpected %s", self.ip, instr, type(e).__name__, exc_info=True)
            raise

        self.steps += 1
        return self.state

    def run(self) -> MachineState:
        """Step until HALTED. Raises the error that stopped the run."""
        if self.state is MachineState.FAILED:
            raise self.error

        while self.state is MachineState.RUNNING:
            self.step()

        log.info("halted after %d steps (ip=%d, acc=%d)", self.steps, self.ip, self.acc)
        return self.state

    def _check_operand(self, instr: Instruction):
        if instr.opcode in MEMORY_OPS:
            limit = len(self.memory)
            if instr.operand >= limit:
                raise AddressOutOfBounds(instr.operand, limit, self.ip, instr.opcode)
        elif instr.opcode in JUMP_OPS:
            # A jump may land exactly on len(program): that halts the machine
            limit = len(self.program) + 1
            if instr.operand >= limit:
                raise AddressOutOfBounds(instr.operand, limit, self.ip, instr.opcode)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(operand). Operands are already checked.

    def _build_dispatch(self) -> Dict[OpCode, Callable[[int], None]]:
        dispatch = {
            OpCode.LOAD:  self._op_load,
            OpCode.ADD:   self._op_add,
            OpCode.SUB:   self._op_sub,
            OpCode.STORE: self._op_store,
            OpCode.JGZ:   self._op_jgz,
            OpCode.READ:  self._op_read,
            OpCode.PRINT: self._op_print,
            OpCode.HALT:  self._op_halt,
        }
        missing = set(OpCode) - set(dispatch)
        if missing:
            raise NotImplementedError(
                "no handler for " + ", ".join(sorted(op.value for op in missing))
            )
        return dispatch

    def _op_load(self, a: int):
        self.acc = self.memory.read(a)
        self.ip += 1

    def _op_add(self, a: int):
        self.acc = wrap_i32(self.acc + self.memory.read(a))
        self.ip += 1

    def _op_sub(self, a: int):
        self.acc = wrap_i32(self.acc - self.memory.read(a))
        self.ip += 1

    def _op_store(self, a: int):
        self.memory.write(a, self.acc)
        self.ip += 1

    def _op_jgz(self, a: int):
        if self.acc > 0:
            self.ip = a
        else:
            self.ip += 1

    def _op_read(self, a: int):
        # Decode before writing so a bad line leaves memory untouched
        value = self.port.read_int()
        self.memory.write(a, value)
        self.ip += 1

    def _op_print(self, a: int):
        self.port.write_int(self.memory.read(a))
        self.ip += 1

    def _op_halt(self, a: int):
        self.state = MachineState.HALTED

    # ══════════════════════════════════════════════
    # Host-side access
    # ══════════════════════════════════════════════

    def peek(self, addr: int) -> int:
        return self.memory.read(addr)

    def poke(self, addr: int, value: int):
        """Seed a memory cell from the host (value wraps to 32 bits)."""
        self.memory.write(addr, value)

    def display(self) -> str:
        """One-line register summary."""
        return (f"state={self.state.value} ip={self.ip}/{len(self.program)} "
                f"acc={self.acc} steps={self.steps}")

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Record (and log at DEBUG) every instruction before it executes."""
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def _trace_line(self, instr: Instruction):
        line = f"{self.ip:4d}: {str(instr):10s} acc={self.acc}"
        self._trace_output.append(line)
        log.debug(line)
