"""
logging_config.py — Centralized Logging Configuration for the Payment Allocator

This module configures unified logging behavior for the entire application.
It ensures that all modules log messages consistently to both console and file.

Features:
    • Combined console and file logging output
    • Process ID tagging for multi-process visibility (API workers)
    • Standardized log format for all modules
    • Reduced verbosity for external dependencies (e.g., httpx)
"""

import logging
import sys

from . import config


def setup_logging(level=None, log_file=None):
    """
    Configures the global logging system for the application.

    The configuration includes:
        - Log level: `level`, falling back to PAYMENT_ALLOCATOR_LOG_LEVEL (default INFO)
        - Log format: timestamp, log level, process ID, and message
        - Output destinations:
            1. File: `log_file`, falling back to PAYMENT_ALLOCATOR_LOG_FILE
               (an empty value disables the file output)
            2. Console (stderr): real-time logs, stdout stays free for reports
        - Reduced verbosity for third-party libraries such as httpx
    """
    log_format = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    log_file = config.LOG_FILE if log_file is None else log_file

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format=log_format,
        handlers=handlers
    )

    # Reduce verbosity from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a configured logger instance for a given module or component name.

    Args:
        name (str): The logger name, typically the module's __name__.

    Returns:
        logging.Logger: A logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
