"""
Discovery module for detecting config drives among block devices.
"""

from .device_scanner import (
    DeviceScanner,
    DriveCandidate,
    find_config_drives,
    scan_config_drives,
)
from .fs_inspector import FilesystemInfo, FilesystemInspector

__all__ = [
    "DeviceScanner",
    "DriveCandidate",
    "FilesystemInfo",
    "FilesystemInspector",
    "find_config_drives",
    "scan_config_drives",
]
