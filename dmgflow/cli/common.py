"""
Common CLI options for dmgflow.

This module provides reusable option factories for the build command.
"""

import os
import typer
from pathlib import Path
from typing import List

from dmgflow.core.logging_utils import log_format_callback, log_level_callback


def complete_settings_files() -> List[Path]:
    """
    Auto-complete settings file paths.
    Returns YAML files in the current directory.
    """
    return [
        Path(f) for f in os.listdir(".")
        if f.endswith((".yaml", ".yml")) and os.path.isfile(f)
    ]


class LoggingOptions:
    """Options controlling log output."""

    @staticmethod
    def verbose():
        return typer.Option(False, "--verbose", "-v", help="Enable verbose output")

    @staticmethod
    def quiet():
        return typer.Option(False, "--quiet", "-q", help="Suppress console output")

    @staticmethod
    def log_level():
        return typer.Option(
            "info",
            "--log-level",
            "-l",
            help="Set log level (debug, info, warning, error, critical)",
            callback=log_level_callback,
        )

    @staticmethod
    def log_file():
        return typer.Option(None, "--log-file", "-f", help="Log to file")

    @staticmethod
    def log_format():
        return typer.Option(
            "text",
            "--log-format",
            help="Log record format (text, json)",
            callback=log_format_callback,
        )


class BuildOptions:
    """Options for the image build."""

    @staticmethod
    def config_file():
        """Option for the build settings file."""
        return typer.Option(
            None,
            "--config",
            "-c",
            help="Path to a YAML build settings file",
            autocompletion=complete_settings_files,
        )

    @staticmethod
    def dry_run():
        """Option for dry run mode."""
        return typer.Option(
            False, "--dry-run", help="Show the commands that would run without building anything"
        )
