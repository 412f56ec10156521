"""
Host capability gate.

Process execution needs POSIX pipes and process creation. The check runs
once per interpreter; every later call returns the cached result.
"""

import logging
import os
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import Optional

from .exceptions import UnsupportedPlatformError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capabilities:
    """What the current host supports."""
    platform: str
    posix: bool
    pipes: bool
    extended_attributes: bool


_capabilities: Optional[Capabilities] = None
_lock = threading.Lock()


def detect_capabilities() -> Capabilities:
    """Inspect the host, without caching."""
    return Capabilities(
        platform=sys.platform,
        posix=os.name == "posix",
        pipes=hasattr(os, "pipe") and hasattr(subprocess, "Popen"),
        extended_attributes=hasattr(os, "getxattr") and hasattr(os, "setxattr"),
    )


def get_capabilities() -> Capabilities:
    """Return the host capabilities, detecting them on first use."""
    global _capabilities
    if _capabilities is None:
        with _lock:
            if _capabilities is None:
                _capabilities = detect_capabilities()
                logger.debug(f"Detected host capabilities: {_capabilities}")
    return _capabilities


def require_process_support() -> Capabilities:
    """
    Ensure the host can run child processes with piped standard streams.

    Returns:
        The cached Capabilities

    Raises:
        UnsupportedPlatformError: If the host is not POSIX or lacks pipes
    """
    caps = get_capabilities()
    if not caps.posix:
        raise UnsupportedPlatformError(
            f"Process execution requires a POSIX host, got platform '{caps.platform}'"
        )
    if not caps.pipes:
        raise UnsupportedPlatformError("Process execution requires OS pipe support")
    return caps


def require_extended_attributes() -> Capabilities:
    """Ensure the host exposes extended attribute calls (used for file tags)."""
    caps = get_capabilities()
    if not caps.extended_attributes:
        raise UnsupportedPlatformError(
            f"Extended attributes are not available on platform '{caps.platform}'"
        )
    return caps


def reset_capabilities() -> None:
    """Forget the cached detection result (used by tests)."""
    global _capabilities
    with _lock:
        _capabilities = None
