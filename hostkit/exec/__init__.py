"""
Execution module for hostkit.
Handles process launch, stream draining, result assembly and name resolution.
"""

from .task import TaskRequest, TaskResult
from .drain import StreamDrainer, ResultAssembler
from .launcher import ProcessLauncher, run
from .resolver import ExecutableResolver, resolve

__all__ = [
    "TaskRequest",
    "TaskResult",
    "StreamDrainer",
    "ResultAssembler",
    "ProcessLauncher",
    "ExecutableResolver",
    "run",
    "resolve",
]
