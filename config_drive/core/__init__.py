"""
Core utilities: logging, shell execution and error types.
"""

from .errors import (
    ConfigDriveError,
    DeviceOpenError,
    DiscoveryPatternError,
    FilesystemNotFoundError,
    MountError,
    UnmountError,
    UserDataNotFoundError,
)
from .logger import get_logger, setup_logging
from .shell_executor import run_command

__all__ = [
    "ConfigDriveError",
    "DeviceOpenError",
    "DiscoveryPatternError",
    "FilesystemNotFoundError",
    "MountError",
    "UnmountError",
    "UserDataNotFoundError",
    "get_logger",
    "setup_logging",
    "run_command",
]
