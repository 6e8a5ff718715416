"""
Metadata providers.
"""

from .base import Provider
from .config_drive import ConfigDriveProvider, list_config_drives

__all__ = [
    "Provider",
    "ConfigDriveProvider",
    "list_config_drives",
]
