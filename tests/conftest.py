"""Shared fixtures for solaris installer tests."""

import os
import sys

import pytest

# Ensure tests/ is on sys.path so test files can import the fakes
# unambiguously (avoids conftest module name collisions).
sys.path.insert(0, os.path.dirname(__file__))

from skeleton_files import MYSQL_ENV, write_skeleton  # noqa: E402


@pytest.fixture
def skeleton(tmp_path):
    """A project directory holding the default SQLite skeleton files."""
    directory = str(tmp_path / "demo")
    write_skeleton(directory)
    return directory


@pytest.fixture
def mysql_skeleton(tmp_path):
    directory = str(tmp_path / "demo")
    write_skeleton(directory, MYSQL_ENV)
    return directory
