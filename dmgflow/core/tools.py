"""
External tool adapters for dmgflow.

This module wraps the command-line tools the image builder drives: ``cp``
for staging the bundle and ``hdiutil`` for creating, attaching, detaching
and converting disk images. Each ``*_command`` function returns the argument
list for a tool call; the matching runner executes it and translates failures
into ToolError.
"""

import shlex
import logging
import subprocess
from typing import List

from ..constants import DiskImageFormat
from .exceptions import ToolError

logger = logging.getLogger("dmgflow")


def format_command(command: List[str]) -> str:
    """Render a command as a shell-quoted string for logging."""
    return " ".join(shlex.quote(part) for part in command)


def run_tool(
    command: List[str],
    step: str,
    failure_message: str,
    forward_output: bool = True,
) -> None:
    """
    Run an external tool and wait for it to exit.

    Args:
        command: Argument list, executable first
        step: Name of the pipeline step running the tool
        failure_message: Prefix for the error message on failure
        forward_output: Inherit stdout/stderr when True, capture them otherwise

    Raises:
        ToolError: If the tool cannot be started or exits with a non-zero status
    """
    logger.debug(f"[{step}] {format_command(command)}")

    kwargs = {}
    if not forward_output:
        kwargs = {"stdout": subprocess.PIPE, "stderr": subprocess.PIPE, "text": True}

    try:
        subprocess.run(command, check=True, **kwargs)
    except FileNotFoundError:
        raise ToolError(
            f"{failure_message}: {command[0]} not found",
            step=step,
            command=command,
        )
    except subprocess.CalledProcessError as e:
        message = f"{failure_message}: exit status {e.returncode}"
        stderr = (e.stderr or "").strip() if isinstance(e.stderr, str) else ""
        if stderr:
            message = f"{message}: {stderr}"
        raise ToolError(message, step=step, command=command, returncode=e.returncode)


def copy_command(source: str, destination: str, cp: str = "cp") -> List[str]:
    return [cp, "-R", source, destination]


def create_command(
    source_folder: str,
    volume_name: str,
    image_path: str,
    image_format: str = DiskImageFormat.UDRW.value,
    hdiutil: str = "hdiutil",
) -> List[str]:
    # -ov overwrites an image left at image_path by a previous run
    return [
        hdiutil, "create",
        "-volname", volume_name,
        "-srcfolder", source_folder,
        "-ov",
        "-format", image_format,
        image_path,
    ]


def attach_command(image_path: str, mount_point: str, hdiutil: str = "hdiutil") -> List[str]:
    return [hdiutil, "attach", image_path, "-mountpoint", mount_point, "-owners", "on"]


def detach_command(mount_point: str, hdiutil: str = "hdiutil") -> List[str]:
    return [hdiutil, "detach", mount_point]


def convert_command(
    image_path: str,
    output_path: str,
    image_format: str = DiskImageFormat.UDZO.value,
    hdiutil: str = "hdiutil",
) -> List[str]:
    return [hdiutil, "convert", image_path, "-format", image_format, "-ov", "-o", output_path]


def copy_tree(source: str, destination: str, cp: str = "cp") -> None:
    """Recursively copy a bundle; the copy tool's output is not shown."""
    run_tool(
        copy_command(source, destination, cp),
        step="copy",
        failure_message="Failed to copy .app file",
        forward_output=False,
    )


def create_image(
    source_folder: str,
    volume_name: str,
    image_path: str,
    image_format: str = DiskImageFormat.UDRW.value,
    hdiutil: str = "hdiutil",
) -> None:
    run_tool(
        create_command(source_folder, volume_name, image_path, image_format, hdiutil),
        step="create",
        failure_message="Failed to create writable DMG",
    )


def attach_image(image_path: str, mount_point: str, hdiutil: str = "hdiutil") -> None:
    run_tool(
        attach_command(image_path, mount_point, hdiutil),
        step="attach",
        failure_message="Failed to mount DMG",
    )


def detach_image(mount_point: str, hdiutil: str = "hdiutil") -> None:
    run_tool(
        detach_command(mount_point, hdiutil),
        step="detach",
        failure_message="Failed to unmount DMG",
    )


def try_detach_image(mount_point: str, hdiutil: str = "hdiutil") -> bool:
    """
    Best-effort detach used while already handling another failure.

    Returns:
        True if the image was detached, False otherwise
    """
    command = detach_command(mount_point, hdiutil)
    logger.debug(f"[detach] {format_command(command)}")
    try:
        result = subprocess.run(
            command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
    except OSError as e:
        logger.debug(f"Best-effort detach of {mount_point} failed: {e}")
        return False
    if result.returncode != 0:
        logger.debug(f"Best-effort detach of {mount_point} exited with {result.returncode}")
        return False
    return True


def convert_image(
    image_path: str,
    output_path: str,
    image_format: str = DiskImageFormat.UDZO.value,
    hdiutil: str = "hdiutil",
) -> None:
    run_tool(
        convert_command(image_path, output_path, image_format, hdiutil),
        step="convert",
        failure_message="Failed to convert DMG to compressed format",
    )
