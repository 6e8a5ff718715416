#!/usr/bin/env python3
"""
Configuration loader for the config drive provider.
Loads settings from a JSON options file and provides defaults.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..core.logger import LOG_LEVELS, get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "/etc/config-drive/options.json"

@dataclass
class DriveConfig:
    """Settings for discovering and reading config drives"""
    block_device_glob: str = "/sys/class/block/*"   # Where block devices are listed
    device_dir: str = "/dev"                        # Where device nodes live
    label: str = "config-2"                         # Filesystem label to match
    ignore_prefixes: List[str] = field(default_factory=lambda: ["loop", "ram"])
    default_fstype: str = "iso9660"                 # Used when no type was detected
    use_detected_fstype: bool = True                # Mount with the type seen at discovery
    mount_retries: int = 0                          # Extra mount attempts
    retry_delay: float = 1.0                        # Delay between mount attempts (seconds)
    log_level: str = "INFO"                         # OFF, DEBUG, INFO, WARNING, ERROR
    log_file: str = ""                              # Empty for stdout only

class ConfigLoader:
    """Loads and validates configuration from an options file"""

    DEFAULT_CONFIG = {
        "block_device_glob": "/sys/class/block/*",
        "device_dir": "/dev",
        "label": "config-2",
        "ignore_prefixes": ["loop", "ram"],
        "default_fstype": "iso9660",
        "use_detected_fstype": True,
        "mount_retries": 0,
        "retry_delay": 1.0,
        "log_level": "INFO",
        "log_file": "",
    }

    SUPPORTED_FSTYPES = ("iso9660", "vfat")

    @staticmethod
    def load(config_path: str = DEFAULT_CONFIG_PATH) -> DriveConfig:
        """
        Load configuration from a JSON options file.
        A missing file yields the defaults.

        Args:
            config_path: Path to options file

        Returns:
            DriveConfig object with all settings

        Raises:
            json.JSONDecodeError: If config file is invalid JSON
            ValueError: If a setting is invalid
        """
        config_file = Path(config_path)

        if not config_file.exists():
            logger.debug(f"Config file not found at {config_path}, using defaults")
            user_config = {}
        else:
            try:
                with open(config_file, 'r') as f:
                    user_config = json.load(f)
                logger.debug(f"Loaded config from {config_path}")
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON in config file: {e}")
                raise

        if not isinstance(user_config, dict):
            raise ValueError(f"Configuration error: {config_path} must contain a JSON object")

        # Merge defaults with user config
        config_dict = ConfigLoader.DEFAULT_CONFIG.copy()
        config_dict.update(user_config)

        return ConfigLoader._create_config(config_dict)

    @staticmethod
    def _create_config(config_dict: dict) -> DriveConfig:
        """Create DriveConfig object from dictionary with validation"""
        try:
            prefixes = config_dict.get("ignore_prefixes", ["loop", "ram"])
            if isinstance(prefixes, str):
                prefixes = [p.strip() for p in prefixes.split(",") if p.strip()]

            config = DriveConfig(
                block_device_glob=str(config_dict.get("block_device_glob", "/sys/class/block/*")),
                device_dir=str(config_dict.get("device_dir", "/dev")),
                label=str(config_dict.get("label", "config-2")).strip(),
                ignore_prefixes=[str(p) for p in prefixes],
                default_fstype=str(config_dict.get("default_fstype", "iso9660")),
                use_detected_fstype=bool(config_dict.get("use_detected_fstype", True)),
                mount_retries=int(config_dict.get("mount_retries", 0)),
                retry_delay=float(config_dict.get("retry_delay", 1.0)),
                log_level=str(config_dict.get("log_level", "INFO")),
                log_file=str(config_dict.get("log_file") or ""),
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Invalid configuration value: {e}")
            raise ValueError(f"Configuration error: {e}") from e

        ConfigLoader._validate_config(config)

        return config

    @staticmethod
    def _validate_config(config: DriveConfig) -> None:
        """Validate configuration values"""
        errors = []

        if not config.block_device_glob:
            errors.append("block_device_glob must not be empty")

        if not config.device_dir:
            errors.append("device_dir must not be empty")

        if not config.label:
            errors.append("label must not be empty")

        if config.default_fstype not in ConfigLoader.SUPPORTED_FSTYPES:
            errors.append(
                f"default_fstype must be one of {list(ConfigLoader.SUPPORTED_FSTYPES)}, "
                f"got {config.default_fstype}"
            )

        if config.mount_retries < 0:
            errors.append(f"mount_retries must be >= 0, got {config.mount_retries}")

        if config.retry_delay < 0:
            errors.append(f"retry_delay must be >= 0, got {config.retry_delay}")

        if config.log_level.upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {sorted(LOG_LEVELS)}, got {config.log_level}")

        if errors:
            error_msg = "; ".join(errors)
            logger.error(f"Configuration validation failed: {error_msg}")
            raise ValueError(f"Invalid configuration: {error_msg}")

    @staticmethod
    def get_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
        """
        Get raw configuration dictionary (for debugging)

        Args:
            config_path: Path to options file

        Returns:
            Raw configuration dictionary
        """
        config_file = Path(config_path)

        if not config_file.exists():
            return {}

        try:
            with open(config_file, 'r') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read raw config: {e}")
            return {}
