"""Run command implementation."""

import errno
import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Dict, Optional

from hostkit.config import HostConfig
from hostkit.exceptions import LaunchError, TaskValidationError
from hostkit.exec import ProcessLauncher, TaskRequest, TaskResult
from hostkit.loader import TaskLoader


logger = logging.getLogger(__name__)


def parse_env(args: Namespace) -> Optional[Dict[str, str]]:
    """Build the replacement environment from --env-file and --env flags.

    Returns None when neither flag is given, so the child inherits the
    caller's environment.
    """
    if not args.env and not args.env_file:
        return None

    env: Dict[str, str] = {}

    if args.env_file:
        env_file = Path(args.env_file)
        if not env_file.exists():
            raise FileNotFoundError(f"Environment file not found: {env_file}")

        with open(env_file, 'r') as f:
            file_env = json.load(f)
            if not isinstance(file_env, dict):
                raise ValueError(f"Environment file must contain a JSON object, got {type(file_env).__name__}")

            for key, value in file_env.items():
                env[str(key)] = str(value)

    if args.env:
        for item in args.env:
            if '=' not in item:
                raise ValueError(f"Invalid env format: {item}. Expected KEY=VALUE")
            key, value = item.split('=', 1)
            env[key] = value

    return env


def build_request(args: Namespace) -> TaskRequest:
    """Build the TaskRequest from a task file and/or command line flags.

    Flags given on the command line override the task file's values.
    """
    if args.task:
        request = TaskLoader().load(args.task)
        if args.executable:
            request.executable = args.executable
            request.args = tuple(args.args)
    elif args.executable:
        request = TaskRequest(executable=args.executable, args=args.args)
    else:
        raise ValueError("An executable or --task is required")

    env = parse_env(args)
    if env is not None:
        request.env = env
    if args.pwd:
        request.pwd = args.pwd
    if args.input is not None:
        request.input = args.input
    elif args.input_file:
        request.input = Path(args.input_file).read_text(encoding='utf-8')

    return request


def exit_status(result: TaskResult) -> int:
    """Map a child exit code to a shell-style status (signals become 128+N)."""
    if result.exit_code < 0:
        return 128 - result.exit_code
    return result.exit_code


def write_result(result: TaskResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return
    if result.out_text:
        sys.stdout.write(result.out_text + '\n')
    if result.err_text:
        sys.stderr.write(result.err_text + '\n')


def run_task(args: Namespace, config: HostConfig) -> int:
    """
    Run an executable and relay its output.

    Returns:
        The child's exit status, 126/127 on launch failure, 2 on invalid
        input, 1 on other errors
    """
    try:
        request = build_request(args)
    except TaskValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid request: {e}")
        return 2

    try:
        result = ProcessLauncher().run(request)
    except LaunchError as e:
        logger.error(str(e))
        return 127 if e.errno == errno.ENOENT else 126

    write_result(result, args.json)
    return exit_status(result)
