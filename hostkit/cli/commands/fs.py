"""Filesystem command implementation."""

import logging
from argparse import Namespace

from hostkit.config import HostConfig
from hostkit.fs import FileManager


logger = logging.getLogger(__name__)


def fs_command(args: Namespace, config: HostConfig) -> int:
    """Dispatch a filesystem operation and print the resulting path(s)."""
    manager = FileManager(trash_dir=config.trash_dir)
    op = args.fs_command

    try:
        if op == 'copy':
            results = [manager.copy(args.source, args.dest_dir, replace=args.replace)]
        elif op == 'move':
            results = [manager.move(args.source, args.dest_dir, replace=args.replace)]
        elif op == 'rename':
            results = [manager.rename(args.path, args.new_name, replace=args.replace)]
        elif op == 'trash':
            results = [manager.trash(path) for path in args.paths]
        elif op == 'link':
            results = [manager.link(args.target, args.link_path, symbolic=not args.hard)]
        elif op == 'alias':
            results = [manager.alias(args.target, args.dest_dir, name=args.name)]
        elif op == 'list':
            results = manager.list_dir(args.directory, include_hidden=args.all)
        elif op == 'mkdir':
            results = [manager.mkdir(path) for path in args.paths]
        else:
            logger.error(f"Unknown fs operation: {op}")
            return 2
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 2
    except OSError as e:
        logger.error(f"{op} failed: {e}")
        return 1

    for path in results:
        print(path)
    return 0
