"""
Disk image builder for dmgflow.

This module packages a macOS application bundle into a compressed disk
image. The build runs as a fixed sequence of steps:

1. Validate that the bundle exists
2. Resolve the bundle path to an absolute path
3. Create a temporary staging directory
4. Copy the bundle into the staging directory
5. Add an ``Applications`` shortcut to the staging directory
6. Create a writable image from the staging directory
7. Attach the image and make sure the shortcut is present
8. Detach the image
9. Convert the image to its compressed form and delete the writable image

The first failing step raises a DMGFlowError subclass and nothing after it
runs. The staging directory and the mount point are removed on every exit
path; the writable image is left behind if a later step fails.
"""

import os
import shutil
import logging
import tempfile
from contextlib import ExitStack, contextmanager
from typing import Iterator, List, Optional

from ..constants import (
    APPLICATIONS_LINK_NAME,
    DEFAULT_VOLUME_NAME,
    MOUNT_DIR_PREFIX,
    STAGING_DIR_PREFIX,
    TEMP_IMAGE_SUFFIX,
)
from .config_loader import BuildConfig
from .exceptions import (
    BundleNotFoundError,
    CleanupError,
    PathResolutionError,
    ResourceError,
    SymlinkError,
)
from . import tools

logger = logging.getLogger("dmgflow")


def derive_temp_image_path(output_path: str) -> str:
    """
    Derive the writable image path from the final output path.

    The extension of the output path is replaced, e.g. ``Output.dmg``
    becomes ``Output_temp.dmg``. Everything from the last dot of the file
    name counts as the extension, so ``.dmg`` becomes ``_temp.dmg``.
    """
    head, tail = os.path.split(output_path)
    if "." in tail:
        tail = tail[:tail.rindex(".")]
    return os.path.join(head, tail + TEMP_IMAGE_SUFFIX)


def resolve_volume_name(volume_name: Optional[str], config: Optional[BuildConfig] = None) -> str:
    """Pick the volume name: explicit value, then settings, then the default."""
    if volume_name:
        return volume_name
    if config is not None and config.volume_name:
        return config.volume_name
    return DEFAULT_VOLUME_NAME


@contextmanager
def scoped_temp_dir(prefix: str, purpose: str) -> Iterator[str]:
    """
    Create a temporary directory that is removed when the block exits.

    Args:
        prefix: Prefix for the directory name
        purpose: Human-readable description used in the error message

    Raises:
        ResourceError: If the directory cannot be created
    """
    try:
        path = tempfile.mkdtemp(prefix=prefix)
    except OSError as e:
        raise ResourceError(f"Failed to create {purpose}: {e}")
    logger.debug(f"Created {purpose} {path}")
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug(f"Removed {purpose} {path}")


class BuildResult:
    """Outcome of a completed build."""

    def __init__(self, output_path: str, volume_name: str, temp_image_path: str, bundle_name: str):
        self.output_path = output_path
        self.volume_name = volume_name
        self.temp_image_path = temp_image_path
        self.bundle_name = bundle_name

    def __repr__(self) -> str:
        return (
            f"BuildResult(output_path={self.output_path!r}, volume_name={self.volume_name!r}, "
            f"bundle_name={self.bundle_name!r})"
        )


class ImageBuilder:
    """
    Build a distributable disk image from an application bundle.

    Args:
        bundle_path: Path to the ``.app`` bundle
        output_path: Path of the compressed image to produce
        volume_name: Volume name of the image; the configured or default
            name is used when empty
        config: Build settings (optional)
    """

    def __init__(
        self,
        bundle_path: str,
        output_path: str,
        volume_name: Optional[str] = None,
        config: Optional[BuildConfig] = None,
    ):
        self.config = config or BuildConfig()
        self.bundle_path = bundle_path
        self.output_path = output_path
        self.volume_name = resolve_volume_name(volume_name, self.config)
        self.temp_image_path = derive_temp_image_path(output_path)

    def validate(self) -> str:
        """Check that the bundle exists and return its absolute path."""
        if not os.path.exists(self.bundle_path):
            raise BundleNotFoundError(self.bundle_path)

        try:
            return os.path.abspath(self.bundle_path)
        except OSError as e:
            raise PathResolutionError(
                f"Failed to resolve absolute path for {self.bundle_path}: {e}"
            )

    def build(self) -> BuildResult:
        """
        Run the full pipeline.

        Returns:
            BuildResult describing the produced image

        Raises:
            DMGFlowError: On the first failing step
        """
        abs_bundle_path = self.validate()
        bundle_name = os.path.basename(abs_bundle_path)

        with ExitStack() as cleanup:
            staging_dir = cleanup.enter_context(
                scoped_temp_dir(STAGING_DIR_PREFIX, "temporary directory")
            )
            self._stage_bundle(abs_bundle_path, bundle_name, staging_dir)

            logger.info("Creating writable DMG file...")
            tools.create_image(
                staging_dir,
                self.volume_name,
                self.temp_image_path,
                image_format=self.config.writable_format,
                hdiutil=self.config.hdiutil,
            )

            logger.info("Mounting DMG file...")
            mount_point = cleanup.enter_context(scoped_temp_dir(MOUNT_DIR_PREFIX, "mount point"))
            tools.attach_image(self.temp_image_path, mount_point, hdiutil=self.config.hdiutil)
            self._ensure_applications_link(mount_point)

            logger.info("Unmounting DMG file...")
            tools.detach_image(mount_point, hdiutil=self.config.hdiutil)

            logger.info("Converting DMG to compressed format...")
            tools.convert_image(
                self.temp_image_path,
                self.output_path,
                image_format=self.config.compressed_format,
                hdiutil=self.config.hdiutil,
            )

            logger.info("Deleting temporary writable DMG file...")
            try:
                os.remove(self.temp_image_path)
            except OSError as e:
                raise CleanupError(f"Failed to delete temporary DMG: {e}")

        return BuildResult(self.output_path, self.volume_name, self.temp_image_path, bundle_name)

    def plan(self) -> List[List[str]]:
        """
        Validate the inputs and return the tool commands a build would run.

        Temporary directory names are shown as placeholders; nothing is
        created on disk.
        """
        abs_bundle_path = self.validate()
        bundle_name = os.path.basename(abs_bundle_path)
        staging_dir = f"<{STAGING_DIR_PREFIX}>"
        mount_point = f"<{MOUNT_DIR_PREFIX}>"
        hdiutil = self.config.hdiutil
        return [
            tools.copy_command(abs_bundle_path, os.path.join(staging_dir, bundle_name), self.config.cp),
            tools.create_command(
                staging_dir, self.volume_name, self.temp_image_path,
                self.config.writable_format, hdiutil,
            ),
            tools.attach_command(self.temp_image_path, mount_point, hdiutil),
            tools.detach_command(mount_point, hdiutil),
            tools.convert_command(
                self.temp_image_path, self.output_path, self.config.compressed_format, hdiutil,
            ),
        ]

    def _stage_bundle(self, abs_bundle_path: str, bundle_name: str, staging_dir: str) -> None:
        tools.copy_tree(abs_bundle_path, os.path.join(staging_dir, bundle_name), cp=self.config.cp)

        link_path = os.path.join(staging_dir, APPLICATIONS_LINK_NAME)
        try:
            os.symlink(self.config.applications_target, link_path)
        except OSError as e:
            raise SymlinkError(f"Failed to create symlink: {e}")

    def _ensure_applications_link(self, mount_point: str) -> None:
        # hdiutil usually copies the staged link into the image already
        link_path = os.path.join(mount_point, APPLICATIONS_LINK_NAME)
        if os.path.lexists(link_path):
            logger.info("Symlink already exists in DMG mount point. Skipping creation.")
            return

        try:
            os.symlink(self.config.applications_target, link_path)
        except OSError as e:
            tools.try_detach_image(mount_point, hdiutil=self.config.hdiutil)
            raise SymlinkError(f"Failed to create symlink in DMG: {e}")


def build_dmg(
    bundle_path: str,
    output_path: str,
    volume_name: Optional[str] = None,
    config: Optional[BuildConfig] = None,
) -> BuildResult:
    """
    Package an application bundle into a compressed disk image.

    Args:
        bundle_path: Path to the ``.app`` bundle
        output_path: Path of the compressed image to produce
        volume_name: Volume name; empty or None selects the default
        config: Build settings (optional)

    Returns:
        BuildResult describing the produced image
    """
    return ImageBuilder(bundle_path, output_path, volume_name, config).build()
