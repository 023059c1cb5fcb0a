"""
Build settings loader for dmgflow.

This module provides the BuildConfig settings object and a loader that reads
overrides from an explicitly named YAML file.
"""

import os
import logging
from typing import Optional, Dict, Any

import yaml

from ..constants import DEFAULT_VALUES, DiskImageFormat
from .exceptions import ConfigError

# Initialize logger for this module
logger = logging.getLogger("dmgflow")

FORMAT_KEYS = ("writable_format", "compressed_format")


class BuildConfig:
    """Settings for one disk image build."""

    def __init__(
        self,
        volume_name: Optional[str] = None,
        writable_format: str = DEFAULT_VALUES["writable_format"],
        compressed_format: str = DEFAULT_VALUES["compressed_format"],
        applications_target: str = DEFAULT_VALUES["applications_target"],
        hdiutil: str = DEFAULT_VALUES["hdiutil"],
        cp: str = DEFAULT_VALUES["cp"],
    ):
        self.volume_name = volume_name
        self.writable_format = _validate_format("writable_format", writable_format)
        self.compressed_format = _validate_format("compressed_format", compressed_format)
        self.applications_target = applications_target
        self.hdiutil = hdiutil
        self.cp = cp

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volume_name": self.volume_name,
            "writable_format": self.writable_format,
            "compressed_format": self.compressed_format,
            "applications_target": self.applications_target,
            "hdiutil": self.hdiutil,
            "cp": self.cp,
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"BuildConfig({fields})"


def _validate_format(key: str, value: Any) -> str:
    valid = [fmt.value for fmt in DiskImageFormat]
    if str(value).upper() not in valid:
        raise ConfigError(f"Invalid {key} '{value}'. Must be one of: {', '.join(valid)}")
    return str(value).upper()


def load_build_config(file_path: Optional[str] = None) -> BuildConfig:
    """
    Load build settings, applying overrides from a YAML file when one is given.

    Args:
        file_path: Path to a YAML settings file (optional)

    Returns:
        BuildConfig with defaults for every key the file does not set

    Raises:
        ConfigError: If the file is missing, malformed or has unknown keys
    """
    if not file_path:
        return BuildConfig()

    logger.debug(f"Loading build settings from {file_path}")

    if not os.path.exists(file_path):
        raise ConfigError(f"Settings file not found: {file_path}")

    try:
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing settings file {file_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {file_path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {file_path} must contain a mapping")

    unknown = sorted(set(data) - set(DEFAULT_VALUES))
    if unknown:
        raise ConfigError(f"Unknown settings in {file_path}: {', '.join(unknown)}")

    for key, value in data.items():
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"Setting '{key}' in {file_path} must be a string")

    settings = {key: value for key, value in data.items() if value is not None}
    config = BuildConfig(**settings)
    logger.debug(f"Loaded build settings: {config}")
    return config
