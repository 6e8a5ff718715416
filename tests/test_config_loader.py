"""Tests for configuration loading."""

import json

import pytest

from config_drive.config.loader import ConfigLoader, DriveConfig


def write_options(tmp_path, options):
    path = tmp_path / "options.json"
    path.write_text(json.dumps(options))
    return str(path)


def test_missing_file_uses_defaults(tmp_path):
    config = ConfigLoader.load(str(tmp_path / "missing.json"))

    assert config == DriveConfig()
    assert config.block_device_glob == "/sys/class/block/*"
    assert config.label == "config-2"
    assert config.ignore_prefixes == ["loop", "ram"]
    assert config.mount_retries == 0


def test_user_values_override_defaults(tmp_path):
    path = write_options(tmp_path, {"mount_retries": "3", "retry_delay": 2, "log_level": "debug"})

    config = ConfigLoader.load(path)

    assert config.mount_retries == 3
    assert config.retry_delay == 2.0
    assert config.log_level == "debug"
    assert config.default_fstype == "iso9660"


def test_ignore_prefixes_from_string(tmp_path):
    path = write_options(tmp_path, {"ignore_prefixes": "loop, ram,zram"})

    assert ConfigLoader.load(path).ignore_prefixes == ["loop", "ram", "zram"]


def test_invalid_json(tmp_path):
    path = tmp_path / "options.json"
    path.write_text("{not json")

    with pytest.raises(json.JSONDecodeError):
        ConfigLoader.load(str(path))


def test_non_object_json(tmp_path):
    path = write_options(tmp_path, ["a", "b"])

    with pytest.raises(ValueError, match="JSON object"):
        ConfigLoader.load(path)


def test_wrong_type(tmp_path):
    path = write_options(tmp_path, {"mount_retries": "many"})

    with pytest.raises(ValueError, match="Configuration error"):
        ConfigLoader.load(path)


def test_all_validation_errors_reported(tmp_path):
    path = write_options(tmp_path, {
        "mount_retries": -1,
        "retry_delay": -5,
        "default_fstype": "ext4",
        "log_level": "LOUD",
        "label": "  ",
    })

    with pytest.raises(ValueError) as exc_info:
        ConfigLoader.load(path)

    message = str(exc_info.value)
    for fragment in ("mount_retries", "retry_delay", "default_fstype", "log_level", "label"):
        assert fragment in message


def test_raw_config(tmp_path):
    path = write_options(tmp_path, {"label": "cidata"})

    assert ConfigLoader.get_raw_config(path) == {"label": "cidata"}
    assert ConfigLoader.get_raw_config(str(tmp_path / "missing.json")) == {}


def test_label_is_stored_trimmed(tmp_path):
    path = write_options(tmp_path, {"label": " config-2 "})

    assert ConfigLoader.load(path).label == "config-2"


def test_blank_label_is_rejected(tmp_path):
    path = write_options(tmp_path, {"label": "   "})

    with pytest.raises(ValueError, match="label must not be empty"):
        ConfigLoader.load(path)
