"""Main CLI entry point for hostkit."""

import argparse
import logging
import sys
from typing import Optional

from hostkit.config import HostConfig, load_config
from hostkit.exceptions import DocumentValidationError

from .commands import run_task, which_executable, fs_command, tags_command, text_command


logger = logging.getLogger(__name__)

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}


def _common_options() -> argparse.ArgumentParser:
    """Options accepted by every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--config',
        type=str,
        help='Path to a hostkit YAML config file'
    )
    common.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    common.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    common.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    common.add_argument(
        '--log-level',
        choices=sorted(LOG_LEVELS),
        default=None,
        help='Set log level (default: from config, else info)'
    )
    return common


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the hostkit CLI."""
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog='hostkit',
        description='Process, filesystem, tag and text tools for scripts'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Run command
    run_parser = subparsers.add_parser(
        'run',
        parents=[common],
        help='Run an executable and capture its output',
        allow_abbrev=False,
        description='Options must come before EXECUTABLE; everything after it is passed to the child.'
    )
    run_parser.add_argument(
        '--task',
        type=str,
        metavar='FILE',
        help='Load the request from a YAML task file'
    )
    run_parser.add_argument(
        '--pwd',
        type=str,
        help='Working directory for the child'
    )
    run_parser.add_argument(
        '--env',
        action='append',
        metavar='KEY=VALUE',
        help='Environment variable for the child (replaces the inherited environment; repeatable)'
    )
    run_parser.add_argument(
        '--env-file',
        type=str,
        help='JSON file with the complete child environment'
    )
    input_group = run_parser.add_mutually_exclusive_group()
    input_group.add_argument(
        '--input',
        type=str,
        help='Text to write to the child stdin'
    )
    input_group.add_argument(
        '--input-file',
        type=str,
        help='File whose contents are written to the child stdin'
    )
    run_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )
    run_parser.add_argument(
        'executable',
        nargs='?',
        help='Path to the executable'
    )
    run_parser.add_argument(
        'args',
        nargs=argparse.REMAINDER,
        help='Arguments passed literally to the executable'
    )

    # Which command
    which_parser = subparsers.add_parser('which', parents=[common], help='Resolve an executable name')
    which_parser.add_argument(
        'name',
        type=str,
        help='Bare executable name'
    )
    which_parser.add_argument(
        '--found-only',
        action='store_true',
        help='Print nothing; exit 0 if found, 1 otherwise'
    )

    # Filesystem commands
    fs_parser = subparsers.add_parser('fs', parents=[common], help='Filesystem operations')
    fs_sub = fs_parser.add_subparsers(dest='fs_command', help='Operations')
    fs_sub.required = True

    for name, help_text in (('copy', 'Copy into a directory'), ('move', 'Move into a directory')):
        op = fs_sub.add_parser(name, help=help_text)
        op.add_argument('source')
        op.add_argument('dest_dir')
        op.add_argument('--replace', action='store_true', help='Overwrite an existing item')

    op = fs_sub.add_parser('rename', help='Rename in place')
    op.add_argument('path')
    op.add_argument('new_name')
    op.add_argument('--replace', action='store_true', help='Overwrite an existing item')

    op = fs_sub.add_parser('trash', help='Move to the trash')
    op.add_argument('paths', nargs='+')

    op = fs_sub.add_parser('link', help='Create a link')
    op.add_argument('target')
    op.add_argument('link_path')
    op.add_argument('--hard', action='store_true', help='Create a hard link')

    op = fs_sub.add_parser('alias', help='Place a symlink to target in a directory')
    op.add_argument('target')
    op.add_argument('dest_dir')
    op.add_argument('--name', type=str, help='Alias name (default: target name)')

    op = fs_sub.add_parser('list', help='List a directory')
    op.add_argument('directory', nargs='?', default='.')
    op.add_argument('--all', action='store_true', help='Include hidden entries')

    op = fs_sub.add_parser('mkdir', help='Create directories')
    op.add_argument('paths', nargs='+')

    # Tags commands
    tags_parser = subparsers.add_parser('tags', parents=[common], help='File tags')
    tags_parser.add_argument('tags_command', choices=['get', 'set', 'add', 'remove'])
    tags_parser.add_argument('path')
    tags_parser.add_argument('tags', nargs='*')

    # Text commands
    text_parser = subparsers.add_parser('text', parents=[common], help='Text analysis')
    text_parser.add_argument(
        'text_command',
        choices=['tokens', 'dates', 'links', 'phones', 'addresses', 'analyze']
    )
    text_parser.add_argument('text', nargs='?', help='Text to analyze (default: stdin)')
    text_parser.add_argument(
        '--unit',
        choices=['word', 'sentence', 'paragraph'],
        default='word',
        help='Token unit for the tokens command'
    )

    return parser


def configure_logging(args: argparse.Namespace, config: HostConfig) -> None:
    """Set up root logging from flags, falling back to the config level."""
    level_name = args.log_level or config.log_level
    log_level = LOG_LEVELS.get(level_name, logging.INFO)
    if args.debug or args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(parsed_args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DocumentValidationError as e:
        for error in e.errors:
            print(f"Config error: {error.message} ({error.path})", file=sys.stderr)
        return e.exit_code

    configure_logging(parsed_args, config)

    if parsed_args.command == 'run':
        return run_task(parsed_args, config)
    elif parsed_args.command == 'which':
        return which_executable(parsed_args, config)
    elif parsed_args.command == 'fs':
        return fs_command(parsed_args, config)
    elif parsed_args.command == 'tags':
        return tags_command(parsed_args, config)
    elif parsed_args.command == 'text':
        return text_command(parsed_args, config)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
