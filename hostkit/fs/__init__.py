"""Filesystem module for file operations and the trash can."""

from .trash import Trash
from .operations import (
    FileManager,
    copy,
    move,
    rename,
    trash,
    link,
    alias,
    list_dir,
    mkdir
)

__all__ = [
    'Trash',
    'FileManager',
    'copy',
    'move',
    'rename',
    'trash',
    'link',
    'alias',
    'list_dir',
    'mkdir'
]
