"""Logging setup for the marketplace admin dashboard."""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logger(
    name: str = "marketplace_admin",
    level: int | str = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger.

    Streamlit re-executes the entry script on every interaction, so this is
    a no-op once handlers are attached.

    Args:
        name: Logger name.
        level: Logging level (int or level name such as "DEBUG").
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    log.setLevel(level)
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str = "marketplace_admin") -> logging.Logger:
    """Return the application logger. Use after setup_logger has been called."""
    return logging.getLogger(name)
