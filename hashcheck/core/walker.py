"""
Directory tree traversal.

Yields the relative paths of regular files beneath a root. Directories,
symlinks (to files or directories), devices, sockets and FIFOs are skipped,
and symlinked directories are never descended into.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import stat
from collections.abc import Iterator, Sequence
from pathlib import Path

from hashcheck.errors import PathError

logger = logging.getLogger(__name__)


def check_root(root: Path) -> Path:
    """
    Ensure root exists and is a directory.

    Raises:
        PathError: If root is missing or not a directory.
    """
    root = Path(root)
    if not root.exists():
        raise PathError(str(root), "Directory does not exist")
    if not root.is_dir():
        raise PathError(str(root), "Not a directory")
    return root


def _raise(error: OSError) -> None:
    raise error


def _is_excluded(relative_path: str, exclude: Sequence[str]) -> bool:
    return any(fnmatch.fnmatchcase(relative_path, pattern) for pattern in exclude)


def walk_files(root: Path, exclude: Sequence[str] = ()) -> Iterator[str]:
    """
    Enumerate regular files under root.

    The root is checked immediately; the traversal itself is lazy.
    Entries within each directory are visited in sorted order, so repeated
    walks of an unchanged tree yield the same sequence.

    Args:
        root: Directory to walk.
        exclude: fnmatch-style globs matched against relative paths.

    Returns:
        Iterator of slash-separated paths relative to root.

    Raises:
        PathError: If root is missing or not a directory.
        OSError: During iteration, if a subdirectory cannot be read.
    """
    root = check_root(root)
    return _walk(root, tuple(exclude))


def _walk(root: Path, exclude: tuple[str, ...]) -> Iterator[str]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        base = Path(dirpath)
        for name in sorted(filenames):
            full_path = base / name
            try:
                mode = full_path.lstat().st_mode
            except FileNotFoundError:
                # Removed between listing and stat
                continue
            if not stat.S_ISREG(mode):
                continue

            relative_path = full_path.relative_to(root).as_posix()
            if exclude and _is_excluded(relative_path, exclude):
                logger.debug("Excluded %s", relative_path)
                continue
            yield relative_path
