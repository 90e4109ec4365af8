#!/usr/bin/env python3
"""
Scanner Logging
Console logging with level colors for operator warnings
"""

import logging
import sys
from typing import Optional, TextIO


class ScanFormatter(logging.Formatter):
    """Custom formatter with color support for console"""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_color: bool = True, stream: Optional[TextIO] = None):
        super().__init__(fmt="%(levelname)s - %(name)s - %(message)s")
        self.use_color = use_color
        self.stream = stream or sys.stderr

    def format(self, record):
        if self.use_color and self.stream.isatty():
            levelname = record.levelname
            if levelname in self.COLORS:
                record = logging.makeLogRecord(record.__dict__)
                record.levelname = (
                    f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
                )
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    use_color: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Setup scanner logging

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_color: Colorize level names when the stream is a terminal
        stream: Console stream, stderr by default so stdout carries reports

    Returns:
        Logger instance
    """
    logger = logging.getLogger("hulud_scan")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers
    logger.handlers.clear()

    stream = stream or sys.stderr
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(logger.level)
    console_handler.setFormatter(ScanFormatter(use_color=use_color, stream=stream))
    logger.addHandler(console_handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Module name

    Returns:
        Logger instance
    """
    return logging.getLogger(f"hulud_scan.{module_name}")
