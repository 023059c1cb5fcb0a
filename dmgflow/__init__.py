"""
dmgflow

Packages a macOS application bundle into a distributable disk image.
"""

__version__ = "0.1.0"

# Import core exceptions
from .core.exceptions import (
    DMGFlowError, ConfigError, ValidationError, BundleNotFoundError,
    PathResolutionError, ResourceError, SymlinkError, CleanupError, ToolError
)

# Import core modules
from .core.config_loader import BuildConfig, load_build_config
from .core.image_builder import (
    ImageBuilder, BuildResult, build_dmg, derive_temp_image_path, resolve_volume_name
)
from .constants import DiskImageFormat, DEFAULT_VOLUME_NAME

__all__ = [
    "__version__",
    "DMGFlowError", "ConfigError", "ValidationError", "BundleNotFoundError",
    "PathResolutionError", "ResourceError", "SymlinkError", "CleanupError", "ToolError",
    "BuildConfig", "load_build_config",
    "ImageBuilder", "BuildResult", "build_dmg", "derive_temp_image_path", "resolve_volume_name",
    "DiskImageFormat", "DEFAULT_VOLUME_NAME",
]
