"""Tags command implementation."""

import logging
from argparse import Namespace

from hostkit.config import HostConfig
from hostkit.exceptions import UnsupportedPlatformError
from hostkit.tags import TagStore


logger = logging.getLogger(__name__)


def tags_command(args: Namespace, config: HostConfig) -> int:
    """Read or change the tags on a file, printing the resulting tags one per line."""
    try:
        store = TagStore(attribute=config.tags_attribute)
        if args.tags_command == 'get':
            tags = store.get(args.path)
        elif args.tags_command == 'set':
            tags = store.set(args.path, args.tags)
        elif args.tags_command == 'add':
            tags = store.add(args.path, args.tags)
        else:
            tags = store.remove(args.path, args.tags)
    except UnsupportedPlatformError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        logger.error(f"Invalid tag: {e}")
        return 2
    except OSError as e:
        logger.error(f"Tag operation failed: {e}")
        return 1

    for tag in tags:
        print(tag)
    return 0
