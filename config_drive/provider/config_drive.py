#!/usr/bin/env python3
"""
Config drive provider.
Mounts a config-2 labelled device, captures its user-data and metadata,
and exposes them through the Provider contract.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.errors import ConfigDriveError, UserDataNotFoundError
from ..core.logger import get_logger
from ..discovery.device_scanner import DeviceScanner
from ..storage.drive_mounter import DEFAULT_FSTYPE, DriveMounter

logger = get_logger(__name__)

CONFIG_DRIVE_DIR = ("openstack", "latest")
USERDATA_FILE = "user_data"
METADATA_FILE = "meta_data.json"
NETWORKDATA_FILE = "network_data.json"  # reserved, not read yet

class ConfigDriveProvider:
    """
    Provider backed by a config drive.

    Everything happens in the constructor: the device is mounted on a
    private temporary directory, user_data and meta_data.json are read,
    then the device is unmounted and the directory removed. Failures never
    raise, they are kept and returned by extract().
    """

    def __init__(
        self,
        device: str,
        fstype: str = DEFAULT_FSTYPE,
        mounter: Optional[DriveMounter] = None,
        log: Optional[logging.Logger] = None,
    ):
        self._device = device
        self._fstype = fstype
        self._mount_point: Optional[Path] = None
        self._userdata = b""
        self._metadata = b""
        self._error: Optional[Exception] = None
        self.log = log or logger

        self._load(mounter or DriveMounter(log=self.log))

    def _load(self, mounter: DriveMounter) -> None:
        try:
            with mounter.temporary_mount_point() as mount_point:
                self._mount_point = mount_point
                with mounter.mounted(self._device, mount_point, self._fstype):
                    self._read_drive(mount_point)
        except (ConfigDriveError, OSError) as e:
            self.log.debug(f"{self.describe()}: {e}")
            self._error = e

    def _read_drive(self, mount_point: Path) -> None:
        base = mount_point.joinpath(*CONFIG_DRIVE_DIR)

        try:
            self._userdata = (base / USERDATA_FILE).read_bytes()
        except OSError as e:
            self.log.debug(f"failed to read {USERDATA_FILE} on {self._device}: {e}")

        if not self._userdata:
            self._error = UserDataNotFoundError(
                f"no userdata found in ./{'/'.join(CONFIG_DRIVE_DIR)}/{USERDATA_FILE}",
                self._device,
            )

        # metadata is optional
        try:
            self._metadata = (base / METADATA_FILE).read_bytes()
        except OSError:
            pass

    @property
    def device(self) -> str:
        return self._device

    @property
    def fstype(self) -> str:
        return self._fstype

    @property
    def mount_point(self) -> Optional[Path]:
        """Temporary directory used during construction, removed afterwards"""
        return self._mount_point

    @property
    def userdata(self) -> bytes:
        return self._userdata

    @property
    def metadata(self) -> bytes:
        return self._metadata

    @property
    def error(self) -> Optional[Exception]:
        return self._error

    def describe(self) -> str:
        return f"ConfigDrive {self._device}"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"ConfigDriveProvider(device={self._device!r}, fstype={self._fstype!r})"

    def probe(self) -> bool:
        """Check if the drive had user-data"""
        return len(self._userdata) != 0

    def extract(self) -> Tuple[bytes, Optional[Exception]]:
        return self._userdata, self._error

def list_config_drives(
    scanner: Optional[DeviceScanner] = None,
    mounter: Optional[DriveMounter] = None,
    fstype: Optional[str] = None,
    log: Optional[logging.Logger] = None,
) -> List[ConfigDriveProvider]:
    """
    Build a provider for every config drive on the host.

    Each provider is mounted with the filesystem type seen during discovery
    unless fstype forces one.
    """
    log = log or logger
    scanner = scanner or DeviceScanner(log=log)

    candidates = scanner.scan_config_drives()
    log.debug(f"config-2 devices to be checked: {[c.device for c in candidates]}")

    return [
        ConfigDriveProvider(
            candidate.device,
            fstype=fstype or candidate.fstype,
            mounter=mounter,
            log=log,
        )
        for candidate in candidates
    ]
