"""
Logging setup for the DiVaReMa tools.

Library modules only call logging.getLogger('divarema.<module>'); the
command-line front end calls setup_logging() once to attach handlers:

  console  rich RichHandler, WARNING+ by default (stderr, so program
           output on stdout stays clean)
  file     optional, DEBUG+, pipe-separated format
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str = "divarema",
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    rich_console: bool = True,
    reconfigure: bool = False,
) -> logging.Logger:
    """Configure and return the named logger.

    Calling it again for a logger that already has handlers returns the
    logger unchanged, unless reconfigure is set: then the old handlers
    are closed and replaced.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        if not reconfigure:
            return logger
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
    logger.setLevel(level)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logger.addHandler(fh)

    if rich_console:
        ch = RichHandler(
            level=console_level,
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S",
        ))
    ch.setLevel(console_level)
    logger.addHandler(ch)

    logger.debug("logger initialized: %s (console level %s)",
                 name, logging.getLevelName(console_level))
    if log_file is not None:
        logger.debug("log file: %s", log_file)
    return logger
