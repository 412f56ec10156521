"""CLI commands for hostkit."""

from .run import run_task
from .which import which_executable
from .fs import fs_command
from .tags import tags_command
from .text import text_command

__all__ = ['run_task', 'which_executable', 'fs_command', 'tags_command', 'text_command']
