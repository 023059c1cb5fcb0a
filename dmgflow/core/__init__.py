"""
Core package for dmgflow.

This package provides the image builder, its external tool adapters, build
settings, logging and the exception hierarchy.
"""

from .exceptions import (
    DMGFlowError, ConfigError, ValidationError, BundleNotFoundError,
    PathResolutionError, ResourceError, SymlinkError, CleanupError, ToolError
)
from .config_loader import BuildConfig, load_build_config
from .image_builder import (
    ImageBuilder, BuildResult, build_dmg, derive_temp_image_path, resolve_volume_name
)
from .logging_utils import configure_logging
