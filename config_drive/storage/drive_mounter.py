#!/usr/bin/env python3
"""
Drive mounter for config drives.
Handles read-only mounting, unmounting, and private mount point management.
"""

import logging
import os
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..core.errors import MountError, UnmountError
from ..core.logger import get_logger
from ..core.shell_executor import run_command

logger = get_logger(__name__)

DEFAULT_FSTYPE = "iso9660"
MOUNT_POINT_PREFIX = "cd"

class DriveMounter:
    """Mounts devices read-only on private temporary mount points"""

    READ_ONLY_OPTIONS = "ro"

    def __init__(
        self,
        retries: int = 0,
        retry_delay: float = 0,
        log: Optional[logging.Logger] = None,
    ):
        self.retries = retries
        self.retry_delay = retry_delay
        self.log = log or logger

    def mount(self, device: str, mount_point: Path, fstype: str = DEFAULT_FSTYPE) -> None:
        """
        Mount a device read-only.

        Args:
            device: Device node path (e.g., "/dev/sr0")
            mount_point: Existing directory to mount on
            fstype: Filesystem type passed to mount

        Raises:
            MountError: If every attempt failed
        """
        mount_cmd = [
            "mount",
            "-t", fstype,
            "-o", self.READ_ONLY_OPTIONS,
            device,
            str(mount_point)
        ]

        stderr = ""
        for attempt in range(self.retries + 1):
            if attempt:
                self.log.debug(f"Mount attempt {attempt} failed, retrying in {self.retry_delay}s")
                time.sleep(self.retry_delay)

            success, _, stderr = run_command(mount_cmd, check=False)
            if success:
                self.log.debug(f"Mounted {device} ({fstype}) on {mount_point}")
                return

        raise MountError(f"Mount command failed for {device}: {stderr}", device, stderr)

    def unmount(self, mount_point: Path) -> None:
        """
        Unmount whatever is mounted at a mount point.

        Raises:
            UnmountError: If umount failed
        """
        success, _, stderr = run_command(["umount", str(mount_point)], check=False)
        if not success:
            raise UnmountError(f"Failed to unmount {mount_point}: {stderr}")
        self.log.debug(f"Unmounted {mount_point}")

    def is_mount_point(self, path: Path) -> bool:
        """Check if path is a mount point"""
        try:
            # Different device IDs means it's a mount point
            return path.stat().st_dev != path.parent.stat().st_dev
        except OSError:
            return False

    @contextmanager
    def temporary_mount_point(self, prefix: str = MOUNT_POINT_PREFIX) -> Iterator[Path]:
        """
        Create a private mount point directory and remove it afterwards.

        Raises:
            OSError: If the directory cannot be created
        """
        mount_point = Path(tempfile.mkdtemp(prefix=prefix))
        try:
            yield mount_point
        finally:
            # rmdir only: a medium that is still mounted must never be touched
            if self.is_mount_point(mount_point):
                self.log.warning(f"Cannot cleanup {mount_point} - it's a mount point")
            else:
                try:
                    os.rmdir(mount_point)
                except OSError as e:
                    self.log.warning(f"Could not remove mount point directory {mount_point}: {e}")

    @contextmanager
    def mounted(self, device: str, mount_point: Path, fstype: str = DEFAULT_FSTYPE) -> Iterator[Path]:
        """
        Mount a device for the duration of the block.
        Unmount failures are logged and never raised.

        Raises:
            MountError: If the device could not be mounted
        """
        self.mount(device, mount_point, fstype)
        try:
            yield mount_point
        finally:
            try:
                self.unmount(mount_point)
            except UnmountError as e:
                self.log.warning(str(e))
