"""
Program loader / tokenizer for DiVaReMa source text.

One instruction per line:

    LOAD 0
    ADD 1
    STORE 2
    HALT 0

Mnemonics are case-sensitive. The operand is an unsigned decimal
integer; HALT may omit it (placeholder 0). Anything after the second
token is ignored. Every line must hold an instruction, a blank line is
reported as "Missing OpCode".

Errors carry the 1-indexed line number and one of four reasons:
    Missing OpCode | Invalid OpCode | Missing Argument | Invalid Argument
When both tokens are bad the opcode error wins.
"""

from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import List, Union

from .isa import Instruction, OpCode, Program

__all__ = ['LoaderError', 'tokenize_line', 'tokenize', 'load_program',
           'MISSING_OPCODE', 'INVALID_OPCODE', 'MISSING_ARGUMENT', 'INVALID_ARGUMENT']

log = logging.getLogger('divarema.loader')

MISSING_OPCODE = "Missing OpCode"
INVALID_OPCODE = "Invalid OpCode"
MISSING_ARGUMENT = "Missing Argument"
INVALID_ARGUMENT = "Invalid Argument"

_OPERAND_RE = re.compile(r'[0-9]+')


class LoaderError(Exception):
    """Raised on a syntax error in program source."""
    def __init__(self, reason: str, line_num: int = 0, line_text: str = ""):
        self.reason = reason
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"Error on line {line_num}: {reason}" if line_num else reason)


def tokenize_line(text: str) -> Instruction:
    """Turn one source line into an Instruction, or raise LoaderError."""
    tokens = text.split()[:2]

    if not tokens:
        raise LoaderError(MISSING_OPCODE)
    try:
        opcode = OpCode(tokens[0])
    except ValueError:
        raise LoaderError(INVALID_OPCODE) from None

    if len(tokens) < 2:
        if opcode is OpCode.HALT:
            return Instruction(opcode, 0)
        raise LoaderError(MISSING_ARGUMENT)

    if not _OPERAND_RE.fullmatch(tokens[1]):
        raise LoaderError(INVALID_ARGUMENT)
    return Instruction(opcode, int(tokens[1]))


def tokenize(source: str) -> Program:
    """Tokenize a whole program. Stops at the first bad line."""
    program: List[Instruction] = []
    for line_num, line in enumerate(source.splitlines(), start=1):
        try:
            program.append(tokenize_line(line))
        except LoaderError as e:
            raise LoaderError(e.reason, line_num, line) from None
    log.debug("tokenized %d instructions", len(program))
    return tuple(program)


def load_program(path: Union[str, Path]) -> Program:
    """Read a UTF-8 source file and tokenize it."""
    source = Path(path).read_text(encoding='utf-8')
    log.info("loading program from %s", path)
    return tokenize(source)
