"""
Common constants for dmgflow.

This module defines the fixed literals used by the image builder,
including default values, link names, disk image formats and the
prefixes used for temporary directories.
"""

from enum import Enum


class DiskImageFormat(str, Enum):
    """Disk image format codes understood by ``hdiutil``."""

    UDRW = "UDRW"  # read/write
    UDRO = "UDRO"  # read-only
    UDZO = "UDZO"  # zlib-compressed
    UDBZ = "UDBZ"  # bzip2-compressed
    ULFO = "ULFO"  # lzfse-compressed
    ULMO = "ULMO"  # lzma-compressed


# Default values
DEFAULT_VALUES = {
    "volume_name": "My DMG",
    "writable_format": DiskImageFormat.UDRW.value,
    "compressed_format": DiskImageFormat.UDZO.value,
    "applications_target": "/Applications",
    "hdiutil": "hdiutil",
    "cp": "cp",
}

DEFAULT_VOLUME_NAME = DEFAULT_VALUES["volume_name"]

# Name of the shortcut placed next to the bundle
APPLICATIONS_LINK_NAME = "Applications"

# Suffix appended to the output name (without extension) for the writable image
TEMP_IMAGE_SUFFIX = "_temp.dmg"

# Prefixes for temporary directories
STAGING_DIR_PREFIX = "dmgtemp"
MOUNT_DIR_PREFIX = "dmgmount"

USAGE = "Usage: dmgflow <path-to-app> <output-dmg-path> [volume-name]"
