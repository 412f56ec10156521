"""Path expansion helpers shared by the process and filesystem modules."""

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def expand_path(path: PathLike) -> str:
    """
    Expand a user-supplied path to an absolute one.

    Performs ``~`` and ``~user`` expansion, then makes the result absolute
    against the current working directory. Symlinks are left alone.

    Args:
        path: Path string or Path object

    Returns:
        Absolute, normalized path string

    Raises:
        ValueError: If path is empty
    """
    text = os.fspath(path)
    if not text:
        raise ValueError("Path must not be empty")
    return os.path.abspath(os.path.expanduser(text))


def canonical_path(path: PathLike) -> str:
    """Expand a path and resolve every symlink in it."""
    return os.path.realpath(expand_path(path))
