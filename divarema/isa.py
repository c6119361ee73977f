"""
Instruction Set: the eight DiVaReMa opcodes

Every instruction is an (opcode, operand) pair. The operand is an
unsigned integer whose meaning depends on the opcode:

  LOAD a   acc <- mem[a]
  ADD a    acc <- acc + mem[a]
  SUB a    acc <- acc - mem[a]
  STORE a  mem[a] <- acc
  JGZ a    if acc > 0: ip <- a
  READ a   mem[a] <- next input line
  PRINT a  output mem[a]
  HALT _   stop (operand unused, placeholder 0)

The enum values are the source mnemonics, so OpCode("LOAD") is the
loader's lookup and str values stay case-sensitive.
"""

from __future__ import annotations
import enum
from typing import FrozenSet, NamedTuple, Sequence, Tuple, Union

__all__ = ['OpCode', 'Instruction', 'Program', 'MEMORY_OPS', 'JUMP_OPS', 'as_program']


class OpCode(str, enum.Enum):
    LOAD = "LOAD"
    ADD = "ADD"
    SUB = "SUB"
    STORE = "STORE"
    JGZ = "JGZ"
    READ = "READ"
    PRINT = "PRINT"
    HALT = "HALT"

    def __str__(self) -> str:
        return self.value


# Opcodes whose operand must be a valid memory cell
MEMORY_OPS: FrozenSet[OpCode] = frozenset({
    OpCode.LOAD, OpCode.ADD, OpCode.SUB, OpCode.STORE,
    OpCode.READ, OpCode.PRINT,
})

# Opcodes whose operand is an instruction index (may equal program length)
JUMP_OPS: FrozenSet[OpCode] = frozenset({OpCode.JGZ})


class Instruction(NamedTuple):
    """One immutable (opcode, operand) pair."""
    opcode: OpCode
    operand: int = 0

    @classmethod
    def of(cls, pair: Union['Instruction', Tuple[Union[OpCode, str], int]]) -> 'Instruction':
        """Normalize a pair, accepting a mnemonic string for the opcode."""
        if isinstance(pair, Instruction):
            opcode, operand = pair
        else:
            opcode, operand = pair
            opcode = OpCode(opcode)
        if isinstance(operand, bool) or not isinstance(operand, int):
            raise TypeError(f"{opcode}: operand must be an int, got {operand!r}")
        if operand < 0:
            raise ValueError(f"{opcode}: operand must be unsigned, got {operand}")
        return cls(opcode, operand)

    def __str__(self) -> str:
        return f"{self.opcode.value} {self.operand}"


Program = Tuple[Instruction, ...]


def as_program(instructions: Sequence) -> Program:
    """Freeze a sequence of pairs into a validated Program."""
    return tuple(Instruction.of(pair) for pair in instructions)
