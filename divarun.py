#!/usr/bin/env python3
"""
divarun: DiVaReMa command-line runner

Usage:
    python divarun.py <program.drm> [--memsize 8] [--trace] [--dump]
                                    [--tokens] [-v] [--log-file run.log]

Integers for READ come from stdin, one per line; PRINT writes to stdout.

Examples:
    echo 5 | python divarun.py double.drm
    python divarun.py sum.drm --memsize 16 --dump < numbers.txt
    python divarun.py sum.drm --tokens            # show the parsed program
    python divarun.py sum.drm --trace -v          # per-instruction trace on stderr

Exit codes:
    0  program halted
    1  unreadable file, syntax error, or runtime failure
    2  internal error
"""

import argparse
import logging
import sys
import traceback

from divarema import __version__
from divarema.config import MachineConfig, parse_int_arg
from divarema.engine import DEFAULT_MEMORY_SIZE, Engine
from divarema.errors import MachineError
from divarema.loader import LoaderError, load_program
from divarema.log_setup import setup_logging

log = logging.getLogger('divarema.cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="divarun",
        description="The Didactic Vanity Register Machine",
    )
    parser.add_argument("progfile", help="File-name of the source code to interpret")
    parser.add_argument("--memsize", type=parse_int_arg, default=DEFAULT_MEMORY_SIZE,
                        help="Number of memory cells (default: %(default)s)")
    parser.add_argument("--trace", action="store_true",
                        help="Log every instruction before it executes")
    parser.add_argument("--dump", action="store_true",
                        help="Print registers and memory to stderr after the run")
    parser.add_argument("--tokens", action="store_true",
                        help="Print the tokenized program and exit (debug)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v, -vv)")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"divarun {__version__}")
    return parser


def main(argv=None, stdin=None, stdout=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = MachineConfig.from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging("divarema", console_level=config.console_level,
                  log_file=config.log_file, reconfigure=True)

    # Load the source file
    try:
        program = load_program(args.progfile)
    except FileNotFoundError:
        print(f"Error: File not found: {args.progfile}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {args.progfile}: {e}", file=sys.stderr)
        return 1
    except LoaderError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.tokens:
        for addr, instr in enumerate(program):
            print(f"{addr:4d}  {instr}")
        return 0

    # Set up the execution environment
    engine = Engine(
        program, config.memory_size,
        stdin if stdin is not None else sys.stdin.buffer,
        stdout if stdout is not None else sys.stdout.buffer,
    )
    engine.enable_trace(config.trace)
    log.info("running %s: %d instructions, %d memory cells",
             args.progfile, len(program), config.memory_size)

    # Execute
    status = 0
    try:
        engine.run()
    except MachineError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        status = 1
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 2

    if args.dump:
        print(engine.display(), file=sys.stderr)
        print(engine.memory.dump(), file=sys.stderr)

    return status


if __name__ == "__main__":
    sys.exit(main())
