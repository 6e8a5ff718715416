#!/usr/bin/env python3
"""
Read-only filesystem inspection for block devices.
Uses blkid in low-level mode (-p), which reads the device directly
and bypasses the blkid cache, so nothing on the device is changed.
"""

import shlex
from dataclasses import dataclass
from typing import Dict

from ..core.errors import DeviceOpenError, FilesystemNotFoundError
from ..core.logger import get_logger
from ..core.shell_executor import run_command

logger = get_logger(__name__)


@dataclass(frozen=True)
class FilesystemInfo:
    """Filesystem found on a device"""
    fstype: str            # e.g., "iso9660", "vfat"
    label: str             # Volume label, surrounding whitespace trimmed
    partition: int = 0     # Partition index (0 = whole device)


def parse_blkid_export(output: str) -> Dict[str, str]:
    """
    Parse `blkid -o export` output into a dict.

    Values are shell-escaped by blkid (e.g. "LABEL=config-2\\ "),
    so each line is unquoted before splitting on the first '='.
    """
    values = {}
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            tokens = shlex.split(line)
        except ValueError:
            logger.debug(f"Ignoring unparsable blkid line: {line}")
            continue
        for token in tokens:
            key, sep, value = token.partition("=")
            if sep:
                values[key] = value
    return values


class FilesystemInspector:
    """Reads the filesystem type and label of a device without mounting it"""

    def __init__(self, timeout: int = 30):
        self.timeout = timeout

    def inspect(self, device: str, partition: int = 0) -> FilesystemInfo:
        """
        Inspect the filesystem on a device.

        Args:
            device: Device node path (e.g., "/dev/sr0")
            partition: Partition index, only 0 (whole device) is supported

        Returns:
            FilesystemInfo for the detected filesystem

        Raises:
            DeviceOpenError: If the device cannot be opened read-only
            FilesystemNotFoundError: If blkid finds no filesystem
        """
        if partition != 0:
            raise FilesystemNotFoundError(
                f"unsupported partition index {partition} on {device}", device
            )

        # blkid reports unreadable and empty devices the same way, check first
        try:
            with open(device, "rb"):
                pass
        except OSError as e:
            raise DeviceOpenError(f"cannot open {device} read-only: {e}", device) from e

        success, stdout, stderr = run_command(
            ["blkid", "-p", "-o", "export", device],
            check=False,
            timeout=self.timeout
        )
        if not success:
            raise FilesystemNotFoundError(
                f"no filesystem found on {device}: {stderr or 'blkid found nothing'}", device
            )

        values = parse_blkid_export(stdout)
        fstype = values.get("TYPE", "")
        if not fstype:
            raise FilesystemNotFoundError(f"no filesystem type reported for {device}", device)

        info = FilesystemInfo(fstype=fstype, label=values.get("LABEL", "").strip())
        logger.debug(f"Detected {info.fstype} on {device} with label '{info.label}'")
        return info
