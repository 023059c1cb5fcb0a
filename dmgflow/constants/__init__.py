"""
Constants package for dmgflow.

This package exports the fixed literals used by the image builder.
"""

from .common import (
    DiskImageFormat,
    DEFAULT_VALUES,
    DEFAULT_VOLUME_NAME,
    APPLICATIONS_LINK_NAME,
    TEMP_IMAGE_SUFFIX,
    STAGING_DIR_PREFIX,
    MOUNT_DIR_PREFIX,
    USAGE,
)

__all__ = [
    "DiskImageFormat",
    "DEFAULT_VALUES",
    "DEFAULT_VOLUME_NAME",
    "APPLICATIONS_LINK_NAME",
    "TEMP_IMAGE_SUFFIX",
    "STAGING_DIR_PREFIX",
    "MOUNT_DIR_PREFIX",
    "USAGE",
]
