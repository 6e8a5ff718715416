"""
Storage module for mounting config drives.
"""

from .drive_mounter import DriveMounter

__all__ = [
    "DriveMounter",
]
