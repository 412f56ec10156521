"""Which command implementation."""

import logging
from argparse import Namespace

from hostkit.config import HostConfig
from hostkit.exceptions import LaunchError, ResolutionError
from hostkit.exec import ExecutableResolver


logger = logging.getLogger(__name__)


def which_executable(args: Namespace, config: HostConfig) -> int:
    """Resolve a name with the configured search tool and print the path."""
    resolver = ExecutableResolver(search_tool=config.search_tool)

    if args.found_only:
        return 0 if resolver.resolve(args.name, quiet=True) else 1

    try:
        path = resolver.resolve(args.name)
    except ResolutionError as e:
        logger.error(str(e))
        return 1
    except LaunchError as e:
        logger.error(f"Search tool unavailable: {e}")
        return 1

    print(path)
    return 0
