"""
Common test utilities for the dmgflow test suite.
"""

from .fakes import FakeToolchain, read_image

__all__ = ["FakeToolchain", "read_image"]
