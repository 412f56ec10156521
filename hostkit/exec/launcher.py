"""
Process launcher for synchronous one-shot execution.

Starts one child with piped standard streams, optionally feeds it input,
waits for it to exit and returns its captured output. Arguments are passed
as an argv vector; no shell is ever involved.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Dict, Optional, Union

from .drain import ResultAssembler, StreamDrainer
from .task import ArgsLike, TaskRequest, TaskResult
from ..capabilities import require_process_support
from ..exceptions import LaunchError
from ..paths import expand_path


logger = logging.getLogger(__name__)


class ProcessLauncher:
    """
    Runs TaskRequests to completion.

    Holds no per-call state, so one instance can serve concurrent callers
    on different threads.
    """

    def __init__(self, assembler: Optional[ResultAssembler] = None):
        """
        Initialize launcher.

        Args:
            assembler: Result assembler (default: ResultAssembler())

        Raises:
            UnsupportedPlatformError: If the host cannot run piped processes
        """
        require_process_support()
        self.assembler = assembler or ResultAssembler()

    def run(self, request: TaskRequest) -> TaskResult:
        """
        Execute a request and block until the child has exited.

        Args:
            request: What to run and how

        Returns:
            TaskResult with exit code and decoded stdout/stderr

        Raises:
            LaunchError: If the child process could not be started
        """
        executable = expand_path(request.executable)
        working_dir = expand_path(request.pwd) if request.pwd is not None else None
        # None inherits the caller's environment; a mapping replaces it entirely
        process_env = dict(request.env) if request.env is not None else None
        argv = [executable, *request.args]

        logger.debug(f"Launching: {argv} (cwd={working_dir or 'inherited'})")
        if process_env is not None:
            logger.debug(f"Using replacement environment with {len(process_env)} variables")

        start_time = time.time()

        try:
            process = subprocess.Popen(
                argv,
                cwd=working_dir,
                env=process_env,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                close_fds=True,
            )
        except OSError as e:
            raise LaunchError(executable, _describe_os_error(e), e.errno) from e
        except ValueError as e:
            # Embedded NUL bytes in argv, cwd or env
            raise LaunchError(executable, str(e)) from e

        with process:
            stdout_drainer = StreamDrainer(process.stdout, "stdout").start()
            stderr_drainer = StreamDrainer(process.stderr, "stderr").start()

            self._feed_input(process, request.input)

            exit_code = process.wait()
            stdout = stdout_drainer.join()
            stderr = stderr_drainer.join()

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            f"Process {executable} exited with {exit_code} after {duration_ms} ms "
            f"({len(stdout)} stdout bytes, {len(stderr)} stderr bytes)"
        )

        return self.assembler.assemble(exit_code, stdout, stderr)

    def _feed_input(self, process: subprocess.Popen, input_text: Optional[str]) -> None:
        """Write input to the child's stdin, then close it so the child sees EOF."""
        stdin = process.stdin
        try:
            if input_text:
                stdin.write(input_text.encode("utf-8"))
        except BrokenPipeError:
            # The child exited or closed stdin without reading everything
            logger.debug("Child closed stdin before all input was written")
        finally:
            try:
                stdin.close()
            except BrokenPipeError:
                pass


def _describe_os_error(error: OSError) -> str:
    message = error.strerror or str(error)
    if error.filename is not None:
        message = f"{message}: {error.filename}"
    return message


def run(
    executable: Union[str, Path],
    args: ArgsLike = None,
    pwd: Optional[Union[str, Path]] = None,
    env: Optional[Dict[str, str]] = None,
    input: Optional[str] = None,
) -> TaskResult:
    """
    Run an executable synchronously and capture its output.

    Args:
        executable: Path to the executable (tilde and relative paths expanded)
        args: One argument string or a sequence of them, passed literally
        pwd: Working directory for the child (default: inherited)
        env: Complete environment for the child (default: inherited)
        input: Text delivered on the child's stdin

    Returns:
        TaskResult with exit_code, out_text and err_text

    Raises:
        LaunchError: If the process could not be started
    """
    request = TaskRequest(
        executable=executable,
        args=args,
        pwd=pwd,
        env=env,
        input=input,
    )
    return ProcessLauncher().run(request)
