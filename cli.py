#!/usr/bin/env python3
"""
dmgflow CLI entry point.

This script serves as the entry point for the dmgflow command-line interface.
"""

from dmgflow.cli import main


if __name__ == "__main__":
    main()
