"""hostkit exceptions."""

from typing import List, Optional
from dataclasses import dataclass


class HostKitError(Exception):
    """Base class for all hostkit errors."""


class LaunchError(HostKitError):
    """Raised when a child process could not be created.

    Covers a missing executable, permission denied, a file that is not
    executable and an unusable working directory. The OS diagnostic is kept
    verbatim in ``message``.
    """

    def __init__(self, executable: str, message: str, errno: Optional[int] = None):
        self.executable = executable
        self.message = message
        self.errno = errno
        super().__init__(f"Failed to launch {executable}: {message}")


class ResolutionError(HostKitError):
    """Raised when an executable name cannot be found on the search path."""

    def __init__(self, name: str, diagnostic: str = ""):
        self.name = name
        self.diagnostic = diagnostic
        message = f"Executable not found: {name}"
        if diagnostic:
            message = f"{message} ({diagnostic})"
        super().__init__(message)


class UnsupportedPlatformError(HostKitError):
    """Raised when the host lacks a capability hostkit needs."""


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class DocumentValidationError(HostKitError):
    """Raised when a YAML document fails validation.

    Collects every problem found so the CLI can report them together and
    map the failure to exit code 2.
    """

    kind = "Validation"

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            location = f" at {error.path}" if error.path else ""
            messages.append(f"{self.kind} error{location}: {error.message}")

        super().__init__("\n".join(messages))


class TaskValidationError(DocumentValidationError):
    """Raised by the task loader when a task file is invalid."""
    kind = "Task validation"


class ConfigValidationError(DocumentValidationError):
    """Raised when the configuration file is invalid."""
    kind = "Config validation"
