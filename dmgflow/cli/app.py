"""
Main CLI application for dmgflow.

This module provides the Typer application that packages an application
bundle into a disk image.
"""

import typer
import logging
from typing import Optional
from rich.console import Console
from rich.markup import escape

from dmgflow import __version__
from dmgflow.constants import USAGE
from dmgflow.core.config_loader import load_build_config
from dmgflow.core.exceptions import DMGFlowError
from dmgflow.core.image_builder import ImageBuilder
from dmgflow.core.logging_utils import configure_logging
from dmgflow.core.tools import format_command
from .common import BuildOptions, LoggingOptions

app = typer.Typer(
    help="dmgflow - package a macOS application bundle into a disk image",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console(soft_wrap=True)

logger = logging.getLogger("dmgflow")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dmgflow {__version__}")
        raise typer.Exit()


@app.command(context_settings={"allow_extra_args": True})
def build(
    ctx: typer.Context,
    app_path: Optional[str] = typer.Argument(
        None, metavar="PATH_TO_APP", help="Application bundle to package", show_default=False
    ),
    output_path: Optional[str] = typer.Argument(
        None, metavar="OUTPUT_DMG_PATH", help="Compressed disk image to create", show_default=False
    ),
    volume_name: Optional[str] = typer.Argument(
        None, metavar="[VOLUME_NAME]", help="Volume name of the image (default: 'My DMG')", show_default=False
    ),
    config: Optional[str] = BuildOptions.config_file(),
    dry_run: bool = BuildOptions.dry_run(),
    verbose: bool = LoggingOptions.verbose(),
    quiet: bool = LoggingOptions.quiet(),
    log_level: str = LoggingOptions.log_level(),
    log_file: Optional[str] = LoggingOptions.log_file(),
    log_format: str = LoggingOptions.log_format(),
    version: bool = typer.Option(
        False, "--version", help="Show the version and exit", callback=version_callback, is_eager=True
    ),
):
    """
    Package an application bundle into a compressed disk image.

    The bundle is staged together with an Applications shortcut, written to
    a writable image, verified while mounted and converted to a compressed
    image at OUTPUT_DMG_PATH.

    Examples:
        dmgflow MyApp.app Output.dmg "Cool App"

        dmgflow MyApp.app Output.dmg --dry-run

        dmgflow MyApp.app Output.dmg -- "-My Vol"

    Arguments past VOLUME_NAME are ignored.
    """
    if not app_path or not output_path:
        typer.echo(USAGE)
        return

    configure_logging(
        level=log_level,
        log_file=log_file,
        quiet=quiet,
        verbose=verbose,
        json_format=(log_format == "json"),
    )
    if ctx.args:
        logger.debug(f"Ignoring extra arguments: {ctx.args}")

    try:
        settings = load_build_config(config)
        builder = ImageBuilder(app_path, output_path, volume_name, settings)

        if dry_run:
            for command in builder.plan():
                console.print(f"[dim]Would run:[/dim] {escape(format_command(command))}")
            console.print(
                f"Dry run complete. Volume name: {escape(builder.volume_name)}"
            )
            return

        result = builder.build()
    except DMGFlowError as e:
        logger.debug(f"Build failed: {type(e).__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return

    console.print(
        f"DMG successfully created at [blue]{escape(result.output_path)}[/blue] "
        f"with volume name: {escape(result.volume_name)}"
    )


def main():
    """Console script entry point."""
    app()
