#!/usr/bin/env python3
"""
Device scanner for detecting config drives.
Walks the block devices exposed by sysfs and keeps those whose filesystem
label marks them as a config drive.
"""

import glob
import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.errors import ConfigDriveError, DiscoveryPatternError
from ..core.logger import get_logger
from .fs_inspector import FilesystemInspector

logger = get_logger(__name__)

BLOCK_DEVICE_GLOB = "/sys/class/block/*"
DEVICE_DIR = "/dev"
CONFIG_DRIVE_LABEL = "config-2"
IGNORED_DEVICE_PREFIXES = ("loop", "ram")

@dataclass(frozen=True)
class DriveCandidate:
    """A block device carrying a config drive label"""
    name: str              # e.g., "sr0", "vdb"
    device: str            # e.g., "/dev/sr0"
    fstype: str            # e.g., "iso9660", "vfat"
    label: str             # Trimmed filesystem label

class DeviceScanner:
    """Scanner for block devices labelled as config drives"""

    def __init__(
        self,
        block_device_glob: str = BLOCK_DEVICE_GLOB,
        device_dir: str = DEVICE_DIR,
        label: str = CONFIG_DRIVE_LABEL,
        ignore_prefixes: Sequence[str] = IGNORED_DEVICE_PREFIXES,
        inspector: Optional[FilesystemInspector] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.block_device_glob = block_device_glob
        self.device_dir = device_dir
        self.label = label
        self.ignore_prefixes = tuple(ignore_prefixes)
        self.inspector = inspector or FilesystemInspector()
        self.log = log or logger

    def scan_config_drives(self) -> List[DriveCandidate]:
        """
        Scan all block devices for config drives.

        Returns:
            Matching devices in enumeration order

        Raises:
            DiscoveryPatternError: If the enumeration pattern is unusable
        """
        entries = self._list_block_devices()
        self.log.debug(f"block devices found: {entries}")

        candidates = []
        for entry in entries:
            candidate = self._check_device(os.path.basename(entry))
            if candidate:
                self.log.debug(f"adding device: {candidate.device}")
                candidates.append(candidate)

        return candidates

    def find_config_drives(self) -> List[str]:
        """
        Find device paths of all config drives.

        Returns:
            List of device node paths (e.g., ["/dev/sr0"])
        """
        return [candidate.device for candidate in self.scan_config_drives()]

    def _list_block_devices(self) -> List[str]:
        """Expand the block device pattern"""
        if not self.block_device_glob:
            raise DiscoveryPatternError("Invalid glob pattern: empty pattern")

        try:
            # sorted to keep the lexicographic order of a directory glob
            return sorted(glob.glob(self.block_device_glob))
        except (re.error, ValueError) as e:
            raise DiscoveryPatternError(
                f"Invalid glob pattern: {self.block_device_glob}: {e}"
            ) from e

    def _check_device(self, name: str) -> Optional[DriveCandidate]:
        """Inspect one device, returning a candidate if its label matches"""
        if name.startswith(self.ignore_prefixes):
            self.log.debug(f"ignoring loop or ram device: {name}")
            return None

        device = os.path.join(self.device_dir, name)
        self.log.debug(f"checking device: {device}")

        try:
            info = self.inspector.inspect(device, partition=0)
        except ConfigDriveError as e:
            self.log.debug(f"skipping device {device}: {e}")
            return None

        label = info.label.strip()
        self.log.debug(f"found trimmed filesystem label for device: {device}: '{label}'")
        if label != self.label:
            return None

        return DriveCandidate(name=name, device=device, fstype=info.fstype, label=label)

def scan_config_drives(log: Optional[logging.Logger] = None) -> List[DriveCandidate]:
    """Scan the host's block devices with default settings"""
    return DeviceScanner(log=log).scan_config_drives()

def find_config_drives(log: Optional[logging.Logger] = None) -> List[str]:
    """Return the device paths of all config drives on the host"""
    return DeviceScanner(log=log).find_config_drives()
