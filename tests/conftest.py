"""Shared fixtures for hostkit tests."""

import os
import shutil
import sys

import pytest


def tool_path(name: str) -> str:
    """Absolute path of a POSIX tool, skipping the test if it is missing."""
    path = shutil.which(name)
    if not path:
        pytest.skip(f"{name} not available")
    return path


@pytest.fixture
def cat_path():
    return tool_path("cat")


@pytest.fixture
def env_path():
    return tool_path("env")


@pytest.fixture
def pwd_path():
    return tool_path("pwd")


@pytest.fixture
def which_path():
    """The default search tool used by ExecutableResolver."""
    if not os.access("/usr/bin/which", os.X_OK):
        pytest.skip("/usr/bin/which not available")
    return "/usr/bin/which"


@pytest.fixture
def python_path():
    return sys.executable
