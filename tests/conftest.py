"""
Test configuration and fixtures for dmgflow tests.

This module provides pytest fixtures for unit and integration tests.
"""

import os
import sys
import logging
import tempfile
import pytest
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tests.common.fakes import FakeToolchain


@pytest.fixture(autouse=True)
def reset_dmgflow_logger():
    """Drop handlers added by configure_logging so tests do not leak streams."""
    yield
    logger = logging.getLogger("dmgflow")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_root(tmp_path, monkeypatch):
    """Route tempfile.mkdtemp into a directory the test can inspect."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def app_bundle(tmp_path):
    """Return a minimal application bundle directory."""
    bundle = tmp_path / "src" / "MyApp.app"
    (bundle / "Contents" / "MacOS").mkdir(parents=True)
    (bundle / "Contents" / "Info.plist").write_text("<plist version=\"1.0\"><dict/></plist>")
    (bundle / "Contents" / "MacOS" / "MyApp").write_text("#!/bin/sh\necho hello\n")
    return bundle


@pytest.fixture
def output_dir(tmp_path):
    out = tmp_path / "dist"
    out.mkdir()
    return out


@pytest.fixture
def make_toolchain(tmp_path, monkeypatch):
    """Factory installing a FakeToolchain in place of subprocess.run."""
    def _make(**kwargs):
        toolchain = FakeToolchain(str(tmp_path / "image-store"), **kwargs)
        monkeypatch.setattr("dmgflow.core.tools.subprocess.run", toolchain)
        return toolchain
    return _make


@pytest.fixture
def toolchain(make_toolchain):
    return make_toolchain()
