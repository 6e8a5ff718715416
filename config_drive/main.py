#!/usr/bin/env python3
"""
Main entry point for the config drive provider.
Discovers config drives, reads them, and reports which ones are usable.
"""

import logging
import sys
from typing import List, Optional

from .config.loader import DEFAULT_CONFIG_PATH, ConfigLoader, DriveConfig
from .core.logger import setup_logging
from .discovery.device_scanner import DeviceScanner
from .provider.config_drive import ConfigDriveProvider, list_config_drives
from .storage.drive_mounter import DriveMounter

def build_scanner(config: DriveConfig, log: Optional[logging.Logger] = None) -> DeviceScanner:
    """Create a DeviceScanner from configuration"""
    return DeviceScanner(
        block_device_glob=config.block_device_glob,
        device_dir=config.device_dir,
        label=config.label,
        ignore_prefixes=config.ignore_prefixes,
        log=log,
    )

def build_mounter(config: DriveConfig, log: Optional[logging.Logger] = None) -> DriveMounter:
    """Create a DriveMounter from configuration"""
    return DriveMounter(
        retries=config.mount_retries,
        retry_delay=config.retry_delay,
        log=log,
    )

def discover_providers(
    config: DriveConfig,
    log: Optional[logging.Logger] = None,
) -> List[ConfigDriveProvider]:
    """Build providers for every config drive using configuration"""
    return list_config_drives(
        scanner=build_scanner(config, log),
        mounter=build_mounter(config, log),
        fstype=None if config.use_detected_fstype else config.default_fstype,
        log=log,
    )

def main(config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """Discover config drives and log a summary. Returns the exit code."""
    try:
        config = ConfigLoader.load(config_path)
    except ValueError as e:
        # JSONDecodeError is a ValueError too
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    logger = setup_logging(log_level=config.log_level, log_file=config.log_file or None)
    logger.info("Scanning for config drives...")

    providers = discover_providers(config, logger)
    if not providers:
        logger.info("No config drives found")
        return 1

    viable = 0
    for provider in providers:
        userdata, err = provider.extract()
        if provider.probe() and err is None:
            viable += 1
            logger.info(
                f"{provider.describe()}: {len(userdata)} bytes of user-data, "
                f"{len(provider.metadata)} bytes of metadata"
            )
        else:
            logger.warning(f"{provider.describe()}: not usable: {err}")

    logger.info(f"Found {viable} usable config drive(s)")
    return 0 if viable else 1

if __name__ == "__main__":
    sys.exit(main())
