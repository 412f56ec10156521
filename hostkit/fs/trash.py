"""Trash can following the freedesktop.org Trash specification.

Trashed items live in ``<trash>/files`` and each has a matching
``<trash>/info/<name>.trashinfo`` recording the original path and the
deletion time. The info file is created first with O_EXCL, which reserves
the name against concurrent trashers.
"""

import datetime
import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import quote, unquote

from ..config import default_trash_dir
from ..paths import expand_path


logger = logging.getLogger(__name__)

INFO_SUFFIX = ".trashinfo"


class Trash:
    """A per-user trash directory."""

    def __init__(self, trash_dir: Optional[Union[str, Path]] = None):
        """
        Initialize trash.

        Args:
            trash_dir: Trash root (default: $XDG_DATA_HOME/Trash)
        """
        self.root = Path(expand_path(trash_dir or default_trash_dir()))
        self.files_dir = self.root / "files"
        self.info_dir = self.root / "info"

    def put(self, path: Union[str, Path]) -> str:
        """
        Move a file or directory into the trash.

        Args:
            path: Item to trash

        Returns:
            Absolute path of the item inside the trash

        Raises:
            FileNotFoundError: If path does not exist
        """
        source = Path(expand_path(path))
        if not os.path.lexists(source):
            raise FileNotFoundError(f"Cannot trash missing path: {source}")

        self.files_dir.mkdir(parents=True, exist_ok=True)
        self.info_dir.mkdir(parents=True, exist_ok=True)

        name, info_path = self._reserve_name(source)
        destination = self.files_dir / name
        try:
            shutil.move(str(source), str(destination))
        except Exception:
            # Release the reservation if the move failed
            info_path.unlink()
            raise

        logger.debug(f"Trashed {source} -> {destination}")
        return str(destination)

    def list_items(self) -> List[str]:
        """Return original paths of everything currently in the trash."""
        if not self.info_dir.exists():
            return []
        originals = []
        for info_file in sorted(self.info_dir.glob(f"*{INFO_SUFFIX}")):
            original = self.original_path(info_file.name[:-len(INFO_SUFFIX)])
            if original:
                originals.append(original)
        return originals

    def original_path(self, trashed_name: str) -> Optional[str]:
        """Read the original location of a trashed item from its info file."""
        info_path = self.info_dir / f"{trashed_name}{INFO_SUFFIX}"
        if not info_path.exists():
            return None
        for line in info_path.read_text(encoding="utf-8").splitlines():
            if line.startswith("Path="):
                return unquote(line[len("Path="):])
        return None

    def _reserve_name(self, source: Path):
        stem, suffix = _split_name(source.name)
        content = _info_content(source)
        counter = 1
        while True:
            name = source.name if counter == 1 else f"{stem}.{counter}{suffix}"
            info_path = self.info_dir / f"{name}{INFO_SUFFIX}"
            if not os.path.lexists(self.files_dir / name):
                try:
                    fd = os.open(info_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
                except FileExistsError:
                    fd = None
                if fd is not None:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        f.write(content)
                    return name, info_path
            counter += 1


def _split_name(name: str):
    # Dotfiles and names without an extension keep the whole name as stem
    dot = name.rfind(".")
    if dot <= 0:
        return name, ""
    return name[:dot], name[dot:]


def _info_content(source: Path) -> str:
    deletion_date = datetime.datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
    return (
        "[Trash Info]\n"
        f"Path={quote(str(source))}\n"
        f"DeletionDate={deletion_date}\n"
    )
