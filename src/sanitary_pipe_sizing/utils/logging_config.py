"""
Logging configuration for the sanitary pipe sizer.

This module provides a logging setup with the standard levels plus a custom TRACE level.
It supports file and console output with different formats for the command line and
the Rhino/Grasshopper environment.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional

# Custom TRACE level (between DEBUG and NOTSET)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


class SanitarySizingLogger:
    """
    Configures logging for the sanitary pipe sizer.

    Supports:
    - Standard levels (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    - Custom TRACE level for per-table-entry diagnostics
    - File and console output with different formats and levels
    """

    TRACE_LEVEL = TRACE_LEVEL

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: Optional[str] = "logs",
        rhino_mode: bool = False,
        trace_mode: bool = False,
    ) -> Optional[str]:
        """
        Configure the logging system for the entire application.

        Args:
            debug_mode: If True, sets DEBUG level for all loggers
            log_dir: Directory to store log files; None disables the file handler
            rhino_mode: If True, uses the short console format for the Grasshopper output panel
            trace_mode: If True, sets TRACE level, which also logs every table entry scanned

        Returns:
            Path to the created log file, or None without a file handler
        """
        if trace_mode:
            level = TRACE_LEVEL
        elif debug_mode:
            level = logging.DEBUG
        else:
            level = logging.INFO
        verbose = debug_mode or trace_mode

        # Configure the root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Clear any existing handlers
        if root_logger.handlers:
            root_logger.handlers.clear()

        log_file = None
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(log_dir, f"sanitary_sizing_{timestamp}.log")

            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)

        # stdout is reserved for CLI output outside Rhino
        console_handler = logging.StreamHandler(sys.stdout if rhino_mode else sys.stderr)
        if rhino_mode:
            console_formatter = logging.Formatter('%(levelname)s: %(message)s')
        else:
            console_formatter = logging.Formatter('%(name)s - %(levelname)s: %(message)s')
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(level if verbose else logging.WARNING)
        root_logger.addHandler(console_handler)

        return log_file

    @staticmethod
    def get_logger(name: str, level: Optional[int] = None):
        """
        Get a configured logger for a specific module.

        Args:
            name: Logger name, typically __name__
            level: Optional specific level for this logger

        Returns:
            A configured logger
        """
        logger = logging.getLogger(name)
        if level:
            logger.setLevel(level)
        return logger


# For direct import convenience
def get_logger(name: str, level: Optional[int] = None):
    """Delegates to SanitarySizingLogger.get_logger."""
    return SanitarySizingLogger.get_logger(name, level)
