"""
DiVaReMa Memory: fixed-size array of signed 32-bit cells

Memory is flat and absolutely addressed from 0. Its length is set once
when the engine is built (8 cells on the reference machine) and never
changes. Every cell starts at 0.

Writes wrap to 32 bits, matching the accumulator width. Reads and
writes outside [0, size) raise IndexError; the engine checks operands
before touching memory and reports AddressOutOfBounds itself, so an
IndexError here means a host-side bug.
"""

from typing import Iterable, List, Tuple

from .codec import wrap_i32


class Memory:
    """Fixed-length signed 32-bit word memory."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"memory size must be >= 0, got {size}")
        self._cells: List[int] = [0] * size

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, addr: int) -> int:
        return self.read(addr)

    def __iter__(self):
        return iter(self._cells)

    @property
    def size(self) -> int:
        return len(self._cells)

    def contains(self, addr: int) -> bool:
        return 0 <= addr < len(self._cells)

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        if not self.contains(addr):
            raise IndexError(f"memory address {addr} out of range 0..{len(self._cells) - 1}")
        return self._cells[addr]

    def write(self, addr: int, value: int):
        """Write a cell, wrapping the value to 32 bits."""
        if not self.contains(addr):
            raise IndexError(f"memory address {addr} out of range 0..{len(self._cells) - 1}")
        self._cells[addr] = wrap_i32(value)

    # --- Bulk load ---

    def load(self, values: Iterable[int], base_addr: int = 0):
        """Seed consecutive cells starting at base_addr."""
        for i, value in enumerate(values):
            self.write(base_addr + i, value)

    # --- Snapshots ---

    def snapshot(self) -> Tuple[int, ...]:
        """Immutable copy of every cell."""
        return tuple(self._cells)

    def dump(self, per_line: int = 4) -> str:
        """Memory dump for debugging, `per_line` cells to a row."""
        lines = []
        for base in range(0, len(self._cells), per_line):
            row = self._cells[base:base + per_line]
            cells = ' '.join(f'{v:>11d}' for v in row)
            lines.append(f'[{base:04d}] {cells}')
        return '\n'.join(lines)
