"""Helpers shared by the controller, the configuration loader and the GUI."""
from __future__ import annotations

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_log_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


def setup_logger(name: str = "tictactoe", level: Union[str, int] = "INFO") -> logging.Logger:
    """Configure ``name`` to log to stdout; repeated calls only change the level."""

    logger = logging.getLogger(name)
    log_level = parse_log_level(level)
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)
    return logger


__all__ = [
    "DATE_FORMAT",
    "LOG_FORMAT",
    "parse_log_level",
    "setup_logger",
]
