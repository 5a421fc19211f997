"""
logging_utils.py
----------------

Colorized console (and optional rotating file) logging for the diagramtree
logger, driven by CoreConfig.
"""

__all__ = ["configure_logging", "ColorFormatter"]

import os
import time
import logging
from typing import Optional, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, init as colorama_init

from .config import DEFAULT_CONFIG, LOGGER_NAME, CoreConfig

PathLike = Union[str, os.PathLike]


class ColorFormatter(logging.Formatter):
    """Colorized console formatter."""
    COLORS = {
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = Style.RESET_ALL
        record.level_str = f"{record.levelname:<5s}"
        return (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{record.name}] "
            f"[{color}{record.level_str}{reset}] "
            f"{record.getMessage()}"
        )


def configure_logging(level: Optional[int] = None,
                      log_dir: Optional[PathLike] = None,
                      name: Optional[str] = LOGGER_NAME,
                      run_prefix: Optional[str] = "run",
                      config: CoreConfig = DEFAULT_CONFIG) -> Optional[Path]:
    """Configure colorized console logging, plus a rotating file when a log dir is set.

    Args:
        level:   Logger level; defaults to `config.logger_level`.
        log_dir: Directory of the rotating log file; defaults to `config.log_dir`.
        config:  Source of the defaults above.

    Returns:
        Path of the log file, or None for console-only logging.
    """
    level = config.logger_level if level is None else level
    log_dir = config.log_dir if log_dir is None else log_dir
    colorama_init(strip=False, convert=True)
    datefmt = "%H:%M:%S"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setFormatter(ColorFormatter(datefmt=datefmt))
    logger.addHandler(ch)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y-%m-%d_%H%M%S")
        log_path = log_dir / f"{run_prefix}_PID{os.getpid()}_{ts}.log"
        mono_fmt = "[%(asctime)s] [%(name)s] [%(levelname)-5s] %(message)s"
        fh = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5)
        fh.setFormatter(logging.Formatter(mono_fmt, datefmt))
        logger.addHandler(fh)

    logger.info(f"Logging initialized - PID {os.getpid()}; file {log_path}")
    return log_path
