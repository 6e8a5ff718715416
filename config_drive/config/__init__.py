"""
Configuration loading.
"""

from .loader import ConfigLoader, DriveConfig

__all__ = ["ConfigLoader", "DriveConfig"]
