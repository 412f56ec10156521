"""
Executable resolver.

Looks up a bare executable name with the system search tool, which is
itself launched as a one-shot child through ProcessLauncher.
"""

import logging
import os
from typing import Optional, Union

from .launcher import ProcessLauncher
from .task import TaskRequest
from ..exceptions import LaunchError, ResolutionError


logger = logging.getLogger(__name__)

DEFAULT_SEARCH_TOOL = "/usr/bin/which"


class ExecutableResolver:
    """Resolves executable names to absolute paths via the search tool."""

    def __init__(
        self,
        search_tool: str = DEFAULT_SEARCH_TOOL,
        launcher: Optional[ProcessLauncher] = None,
    ):
        """
        Initialize resolver.

        Args:
            search_tool: Path of the `which`-style lookup executable
            launcher: Launcher used to run the search tool
        """
        self.search_tool = search_tool
        self.launcher = launcher or ProcessLauncher()

    def resolve(self, name: str, quiet: bool = False) -> Union[str, bool]:
        """
        Find an executable on the search path.

        Args:
            name: Bare executable name, e.g. "ls"
            quiet: Return a found flag instead of a path, never raise

        Returns:
            Absolute path (quiet=False) or True/False (quiet=True)

        Raises:
            ResolutionError: If the name is not found and quiet is False
            LaunchError: If the search tool itself cannot be started and quiet is False
        """
        if not name or os.sep in name or name in (".", ".."):
            if quiet:
                return False
            raise ResolutionError(name, "expected a bare executable name")

        try:
            result = self.launcher.run(TaskRequest(self.search_tool, (name,)))
        except LaunchError as e:
            if quiet:
                logger.debug(f"Search tool unavailable while resolving {name}: {e}")
                return False
            raise

        # which prints one path per line; take the first
        path = result.out_text.split("\n", 1)[0].strip()
        found = result.exit_code == 0 and bool(path)
        logger.debug(f"Resolved {name!r} -> {path if found else 'not found'}")

        if quiet:
            return found
        if not found:
            raise ResolutionError(name, result.err_text.strip())
        return path


def resolve(name: str, quiet: bool = False, search_tool: str = DEFAULT_SEARCH_TOOL) -> Union[str, bool]:
    """
    Resolve an executable name to its path.

    Args:
        name: Bare executable name
        quiet: Return True/False instead of raising
        search_tool: Lookup executable (default /usr/bin/which)

    Returns:
        Path string, or a found flag in quiet mode
    """
    return ExecutableResolver(search_tool).resolve(name, quiet=quiet)
