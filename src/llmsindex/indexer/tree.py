"""
Tree walker: flat enumeration of the files under a scan root.

The walk skips any directory whose name is in the skip set, at any depth
(exact name match, not path match). Entries come back in filesystem listing
order; callers that need a stable order sort the result themselves.

A directory that cannot be listed raises OSError, which is not caught here.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..logging.setup import get_logger

logger = get_logger(__name__)

DEFAULT_SKIP_DIRS: frozenset[str] = frozenset({".git", "node_modules", ".github"})


@dataclass(frozen=True)
class FileDescriptor:
    """A file found during the walk."""

    absolute_path: str
    relative_path: str   # Relative to the scan root, host separators
    extension: str       # Lowercase, leading dot, "" if none

    @property
    def parts(self) -> tuple[str, ...]:
        """Segments of the relative path."""
        return tuple(self.relative_path.split(os.sep))


def walk(
    directory: str | Path,
    base: str | Path | None = None,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> list[FileDescriptor]:
    """Recursively list the files under ``directory``.

    Args:
        directory: Directory to scan
        base: Root against which relative paths are computed (defaults to directory)
        skip_dirs: Entry names that are never entered or recorded

    Returns:
        FileDescriptor list in listing order.

    Raises:
        OSError: If any traversed directory cannot be read
    """
    directory = os.fspath(directory)
    base = directory if base is None else os.fspath(base)
    skip = frozenset(skip_dirs)

    files = _walk(directory, base, skip)
    logger.debug("indexer.walk.complete", root=directory, files=len(files))
    return files


def _walk(directory: str, base: str, skip: frozenset[str]) -> list[FileDescriptor]:
    files: list[FileDescriptor] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.name in skip:
                continue
            full = os.path.join(directory, entry.name)
            # Symlinked directories are recorded as files, never followed
            if entry.is_dir(follow_symlinks=False):
                files.extend(_walk(full, base, skip))
            else:
                files.append(
                    FileDescriptor(
                        absolute_path=full,
                        relative_path=os.path.relpath(full, base),
                        extension=os.path.splitext(entry.name)[1].lower(),
                    )
                )
    return files
