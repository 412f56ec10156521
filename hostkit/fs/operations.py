"""Filesystem operations: copy, move, rename, trash, link, alias, list, mkdir.

All paths go through expand_path, so ``~`` and relative paths are accepted.
Every operation returns the absolute path it produced.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Union

from .trash import Trash
from ..paths import expand_path


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileManager:
    """Performs filesystem operations with overwrite protection."""

    def __init__(self, trash_dir: Optional[PathLike] = None):
        """Initialize file manager.

        Args:
            trash_dir: Trash root used by trash() (default: per-user trash)
        """
        self.trash_can = Trash(trash_dir)

    def copy(self, source: PathLike, dest_dir: PathLike, replace: bool = False) -> str:
        """Copy a file or directory tree into dest_dir.

        Args:
            source: File or directory to copy
            dest_dir: Existing destination directory
            replace: Overwrite an existing item of the same name

        Returns:
            Absolute path of the copy

        Raises:
            FileNotFoundError: If source or dest_dir is missing
            FileExistsError: If the target exists and replace is False
            ValueError: If the target is the source, one of its parents or
                lies inside a source directory
        """
        src = self._existing(source)
        dest = self._target_in(dest_dir, src.name, replace, source=src)
        self._reject_nested(src, dest)

        def produce(target: Path) -> None:
            if src.is_dir() and not src.is_symlink():
                shutil.copytree(str(src), str(target), symlinks=True)
            else:
                shutil.copy2(str(src), str(target), follow_symlinks=False)

        self._place(dest, produce)
        logger.debug(f"Copied {src} -> {dest}")
        return str(dest)

    def move(self, source: PathLike, dest_dir: PathLike, replace: bool = False) -> str:
        """Move a file or directory into dest_dir.

        Raises:
            FileNotFoundError: If source or dest_dir is missing
            FileExistsError: If the target exists and replace is False
            ValueError: If the target is the source, one of its parents or
                lies inside a source directory
        """
        src = self._existing(source)
        dest = self._target_in(dest_dir, src.name, replace, source=src)
        self._reject_nested(src, dest)
        self._place(
            dest,
            lambda target: shutil.move(str(src), str(target)),
            undo=lambda staged: shutil.move(str(staged), str(src)),
        )
        logger.debug(f"Moved {src} -> {dest}")
        return str(dest)

    def rename(self, path: PathLike, new_name: str, replace: bool = False) -> str:
        """Rename an item in place.

        Args:
            path: Item to rename
            new_name: New bare name (no directory components)
            replace: Overwrite an existing item of the same name

        Raises:
            ValueError: If new_name is empty or contains a path separator
        """
        if not new_name or os.sep in new_name or new_name in (".", ".."):
            raise ValueError(f"Invalid new name: {new_name!r}")

        src = self._existing(path)
        dest = self._target_in(src.parent, new_name, replace, source=src)
        self._place(
            dest,
            lambda target: os.rename(src, target),
            undo=lambda staged: os.rename(staged, src),
        )
        logger.debug(f"Renamed {src} -> {dest}")
        return str(dest)

    def trash(self, path: PathLike) -> str:
        """Move an item to the trash and return its location there."""
        return self.trash_can.put(path)

    def link(self, target: PathLike, link_path: PathLike, symbolic: bool = True) -> str:
        """Create a symbolic or hard link at link_path pointing to target.

        Raises:
            FileExistsError: If link_path already exists
            FileNotFoundError: If a hard link target is missing
        """
        target_abs = Path(expand_path(target))
        link_abs = Path(expand_path(link_path))

        if symbolic:
            os.symlink(target_abs, link_abs, target_is_directory=target_abs.is_dir())
        else:
            os.link(target_abs, link_abs)

        logger.debug(f"Linked {link_abs} -> {target_abs} (symbolic={symbolic})")
        return str(link_abs)

    def alias(self, target: PathLike, dest_dir: PathLike, name: Optional[str] = None) -> str:
        """Place a symlink to target inside dest_dir, named after target by default."""
        src = self._existing(target)
        dest = self._target_in(dest_dir, name or src.name, replace=False, source=src)
        return self.link(src, dest, symbolic=True)

    def list_dir(self, directory: PathLike, include_hidden: bool = False) -> List[str]:
        """List entries of a directory.

        Returns:
            Sorted absolute paths of the entries

        Raises:
            NotADirectoryError: If directory is not a directory
        """
        target = self._existing(directory)
        if not target.is_dir():
            raise NotADirectoryError(f"Not a directory: {target}")

        entries = []
        for entry in target.iterdir():
            if not include_hidden and entry.name.startswith('.'):
                continue
            entries.append(str(entry))

        return sorted(entries)

    def mkdir(self, path: PathLike, parents: bool = True) -> str:
        """Create a directory; an existing directory is not an error."""
        target = Path(expand_path(path))
        target.mkdir(parents=parents, exist_ok=True)
        return str(target)

    def _existing(self, path: PathLike) -> Path:
        resolved = Path(expand_path(path))
        if not os.path.lexists(resolved):
            raise FileNotFoundError(f"No such file or directory: {resolved}")
        return resolved

    def _target_in(self, dest_dir: PathLike, name: str, replace: bool, source: Optional[Path] = None) -> Path:
        directory = Path(expand_path(dest_dir))
        if not directory.is_dir():
            raise FileNotFoundError(f"Destination directory not found: {directory}")

        dest = directory / name
        if source is not None:
            real_source = Path(os.path.realpath(source.parent)) / source.name
            real_dest = Path(os.path.realpath(directory)) / name
            if real_dest == real_source:
                raise ValueError(f"Source and destination are the same: {dest}")
            if real_dest in real_source.parents:
                raise ValueError(f"Destination {dest} contains the source {source}")
        if os.path.lexists(dest) and not replace:
            raise FileExistsError(f"Destination already exists: {dest}")
        return dest

    def _reject_nested(self, source: Path, dest: Path) -> None:
        if not source.is_dir() or source.is_symlink():
            return
        real_source = Path(os.path.realpath(source))
        real_dest_dir = Path(os.path.realpath(dest.parent))
        if real_dest_dir == real_source or real_source in real_dest_dir.parents:
            raise ValueError(f"Cannot place directory {source} inside itself: {dest}")

    def _place(
        self,
        dest: Path,
        produce: Callable[[Path], object],
        undo: Optional[Callable[[Path], object]] = None,
    ) -> None:
        """Create an item at dest with produce(), swapping out any existing item.

        The new item is built under a staging directory next to dest and only
        then renamed into place, so a failed copy or move leaves the old item
        untouched.
        """
        if not os.path.lexists(dest):
            produce(dest)
            return

        # Same directory as dest keeps both renames on one filesystem
        staging = Path(tempfile.mkdtemp(prefix=".hostkit-", dir=str(dest.parent)))
        staged = staging / dest.name
        backup = staging / f"{dest.name}.replaced"
        try:
            produce(staged)
            try:
                os.rename(dest, backup)
                try:
                    os.rename(staged, dest)
                except OSError:
                    os.rename(backup, dest)
                    raise
            except OSError:
                if undo is not None:
                    undo(staged)
                raise
        finally:
            shutil.rmtree(staging, ignore_errors=True)


# Convenience functions for common operations
def copy(source: PathLike, dest_dir: PathLike, replace: bool = False) -> str:
    """Copy source into dest_dir."""
    return FileManager().copy(source, dest_dir, replace=replace)


def move(source: PathLike, dest_dir: PathLike, replace: bool = False) -> str:
    """Move source into dest_dir."""
    return FileManager().move(source, dest_dir, replace=replace)


def rename(path: PathLike, new_name: str, replace: bool = False) -> str:
    """Rename path to new_name in the same directory."""
    return FileManager().rename(path, new_name, replace=replace)


def trash(path: PathLike, trash_dir: Optional[PathLike] = None) -> str:
    """Move path to the trash."""
    return FileManager(trash_dir).trash(path)


def link(target: PathLike, link_path: PathLike, symbolic: bool = True) -> str:
    """Create a symbolic or hard link at link_path."""
    return FileManager().link(target, link_path, symbolic=symbolic)


def alias(target: PathLike, dest_dir: PathLike, name: Optional[str] = None) -> str:
    """Place a symlink to target inside dest_dir."""
    return FileManager().alias(target, dest_dir, name=name)


def list_dir(directory: PathLike, include_hidden: bool = False) -> List[str]:
    """List directory entries as absolute paths."""
    return FileManager().list_dir(directory, include_hidden=include_hidden)


def mkdir(path: PathLike, parents: bool = True) -> str:
    """Create a directory."""
    return FileManager().mkdir(path, parents=parents)
