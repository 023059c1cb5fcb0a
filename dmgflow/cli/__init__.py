"""
CLI package for dmgflow.

This module exposes the Typer application and the console script entry point.
"""

from .app import app, main

__all__ = ["app", "main"]
