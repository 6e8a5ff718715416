"""
Error types raised while discovering and reading config drives.
"""

from typing import Optional


class ConfigDriveError(Exception):
    """Base error for config drive discovery and extraction"""

    def __init__(self, message: str, device: Optional[str] = None):
        super().__init__(message)
        self.device = device


class DiscoveryPatternError(ConfigDriveError):
    """The block device enumeration pattern is unusable"""


class DeviceOpenError(ConfigDriveError):
    """A block device could not be opened read-only"""


class FilesystemNotFoundError(ConfigDriveError):
    """No supported filesystem was found on a device"""


class MountError(ConfigDriveError):
    """Mounting a device failed"""

    def __init__(self, message: str, device: Optional[str] = None, stderr: str = ""):
        super().__init__(message, device)
        self.stderr = stderr


class UnmountError(ConfigDriveError):
    """Unmounting a mount point failed"""


class UserDataNotFoundError(ConfigDriveError):
    """The mandatory user_data file is missing or empty"""
