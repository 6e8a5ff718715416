#!/usr/bin/env python3
"""
Logging configuration for the config drive provider.
Provides consistent logging to stdout and, optionally, to a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "config_drive"

# Mapping from string levels to logging constants
LOG_LEVELS = {
    "OFF": logging.CRITICAL + 10,    # Higher than CRITICAL = disable all
    "DEBUG": logging.DEBUG,          # 10
    "INFO": logging.INFO,            # 20
    "WARNING": logging.WARNING,      # 30
    "WARN": logging.WARNING,         # 30 (alias)
    "ERROR": logging.ERROR,          # 40
    "CRITICAL": logging.CRITICAL,    # 50
    "FATAL": logging.CRITICAL,       # 50 (alias)
}

def resolve_level(log_level: str) -> int:
    """
    Convert a level name to its logging constant.

    Raises:
        ValueError: If log_level is invalid
    """
    level_str_upper = log_level.upper()
    if level_str_upper not in LOG_LEVELS:
        valid_levels = ", ".join(sorted(LOG_LEVELS.keys()))
        raise ValueError(
            f"Invalid log level: '{log_level}'. Must be one of: {valid_levels}"
        )
    return LOG_LEVELS[level_str_upper]

def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        log_level: Logging level as string (OFF, DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file, or None for stdout only

    Returns:
        Configured package logger

    Raises:
        ValueError: If log_level is invalid
    """
    numeric_level = resolve_level(log_level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Clear handlers from a previous setup call
    logger.handlers.clear()

    # Nothing will be emitted at OFF, so no handlers are needed
    if log_level.upper() == "OFF":
        logger.propagate = False
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            logger.debug(f"File logging enabled: {log_file}")
        except OSError as e:
            logger.warning(f"Could not setup file logging: {e}")

    # Prevent propagation to root logger
    logger.propagate = False

    return logger

def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
