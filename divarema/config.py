"""
Machine configuration.

The reference machine has 8 memory cells. Everything else here is for
the front end: tracing and where log output goes.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .engine import DEFAULT_MEMORY_SIZE

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_int_arg(value: str) -> int:
    """Parse a decimal or 0x-prefixed hex integer argument."""
    value = value.strip()
    if value.startswith("0x") or value.startswith("0X"):
        return int(value, 16)
    return int(value)


@dataclass
class MachineConfig:
    memory_size: int = DEFAULT_MEMORY_SIZE
    trace: bool = False
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.memory_size < 0:
            raise ValueError(f"memory size must be >= 0, got {self.memory_size}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {self.log_level}")

    @property
    def console_level(self) -> int:
        # Tracing is only visible at DEBUG
        if self.trace:
            return logging.DEBUG
        return getattr(logging, self.log_level)

    @classmethod
    def from_args(cls, args) -> 'MachineConfig':
        """Build from an argparse namespace (see divarun.py)."""
        if args.verbose >= 2:
            level = "DEBUG"
        elif args.verbose == 1:
            level = "INFO"
        else:
            level = "WARNING"
        return cls(memory_size=args.memsize, trace=args.trace,
                   log_level=level, log_file=args.log_file)
