"""
hostkit: OS capabilities for scripts.

Synchronous process execution, filesystem operations, file tags and text
analysis.
"""

from .exceptions import (
    HostKitError,
    LaunchError,
    ResolutionError,
    UnsupportedPlatformError,
)
from .exec import TaskRequest, TaskResult, ProcessLauncher, ExecutableResolver, run, resolve

__version__ = "0.1.0"

__all__ = [
    "HostKitError",
    "LaunchError",
    "ResolutionError",
    "UnsupportedPlatformError",
    "TaskRequest",
    "TaskResult",
    "ProcessLauncher",
    "ExecutableResolver",
    "run",
    "resolve",
]
