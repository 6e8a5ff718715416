"""
Config drive metadata provider.
Finds config-2 labelled drives and reads cloud-init user-data from them.
"""

from .core.errors import ConfigDriveError
from .discovery import DeviceScanner, DriveCandidate, find_config_drives, scan_config_drives
from .provider import ConfigDriveProvider, Provider, list_config_drives
from .storage import DriveMounter

__version__ = "0.1.0"

__all__ = [
    "ConfigDriveError",
    "ConfigDriveProvider",
    "DeviceScanner",
    "DriveCandidate",
    "DriveMounter",
    "Provider",
    "find_config_drives",
    "list_config_drives",
    "scan_config_drives",
]
