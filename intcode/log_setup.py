"""
Intcode VM - Logging Setup

Every module logs through logging.getLogger(__name__) under the "intcode"
namespace and never configures handlers itself. Drivers call
setup_logging() once:

  - console: rich.logging.RichHandler, WARNING+ by default
  - file (only when log_dir is given): everything DEBUG+, written to
    ``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import (
    LOGGER_NAME, DEFAULT_LEVEL, DEFAULT_CONSOLE_LEVEL,
    LOG_FILE_FORMAT, LOG_DATE_FORMAT,
)


def setup_logging(
    name: str = LOGGER_NAME,
    level: int = DEFAULT_LEVEL,
    console_level: int = DEFAULT_CONSOLE_LEVEL,
    log_dir: Optional[Union[str, Path]] = None,
    console: Optional[Console] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure and return the named logger.

    Calling this again for a logger that already has handlers returns it
    unchanged, so drivers and tests can call it freely. With force=True the
    existing handlers are closed and replaced with the new settings.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        if not force:
            return logger
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
    logger.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{ts}.log"
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(fh)

    # ── Console handler: only important stuff (WARNING+ default) ──
    ch = RichHandler(
        level=console_level,
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    ch.setLevel(console_level)
    logger.addHandler(ch)

    return logger
