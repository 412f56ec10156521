"""
File tags stored in extended attributes.

Tags are kept as a comma-separated UTF-8 list in the ``user.xdg.tags``
attribute, the convention shared by freedesktop file managers.
"""

import errno
import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from .capabilities import require_extended_attributes
from .paths import expand_path


logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "user.xdg.tags"

# errno values meaning "attribute not set"
_MISSING_ATTRIBUTE = {getattr(errno, "ENODATA", errno.ENOENT), getattr(errno, "ENOATTR", errno.ENOENT)}


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """
    Strip, drop empty and de-duplicate tags, preserving first occurrence order.

    Raises:
        ValueError: If a tag contains a comma
        TypeError: If a tag is not a string
    """
    if isinstance(tags, str):
        tags = [tags]

    normalized: List[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            raise TypeError(f"Tags must be strings, got {type(tag).__name__}")
        tag = tag.strip()
        if not tag:
            continue
        if "," in tag:
            raise ValueError(f"Tag may not contain a comma: {tag!r}")
        if tag not in normalized:
            normalized.append(tag)
    return normalized


class TagStore:
    """Reads and writes tags on files."""

    def __init__(self, attribute: str = DEFAULT_ATTRIBUTE):
        """
        Initialize tag store.

        Args:
            attribute: Extended attribute name holding the tags

        Raises:
            UnsupportedPlatformError: If the host has no xattr support
        """
        require_extended_attributes()
        self.attribute = attribute

    def get(self, path: Union[str, Path]) -> List[str]:
        """Return the tags on path; a file with no tags yields []."""
        target = expand_path(path)
        try:
            raw = os.getxattr(target, self.attribute)
        except OSError as e:
            if e.errno in _MISSING_ATTRIBUTE:
                return []
            raise
        return normalize_tags(raw.decode("utf-8", errors="replace").split(","))

    def set(self, path: Union[str, Path], tags: Iterable[str]) -> List[str]:
        """
        Replace the tags on path.

        An empty tag list removes the attribute.

        Returns:
            The tags actually stored
        """
        target = expand_path(path)
        normalized = normalize_tags(tags)

        if not normalized:
            try:
                os.removexattr(target, self.attribute)
            except OSError as e:
                if e.errno not in _MISSING_ATTRIBUTE:
                    raise
            logger.debug(f"Cleared tags on {target}")
            return []

        os.setxattr(target, self.attribute, ",".join(normalized).encode("utf-8"))
        logger.debug(f"Set tags on {target}: {normalized}")
        return normalized

    def add(self, path: Union[str, Path], tags: Iterable[str]) -> List[str]:
        """Add tags, keeping the existing ones first."""
        return self.set(path, self.get(path) + normalize_tags(tags))

    def remove(self, path: Union[str, Path], tags: Iterable[str]) -> List[str]:
        """Remove the given tags if present."""
        unwanted = set(normalize_tags(tags))
        return self.set(path, [tag for tag in self.get(path) if tag not in unwanted])


def get_tags(path: Union[str, Path], attribute: str = DEFAULT_ATTRIBUTE) -> List[str]:
    """Return the tags on a file."""
    return TagStore(attribute).get(path)


def set_tags(path: Union[str, Path], tags: Iterable[str], attribute: str = DEFAULT_ATTRIBUTE) -> List[str]:
    """Replace the tags on a file."""
    return TagStore(attribute).set(path, tags)
