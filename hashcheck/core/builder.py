"""
Manifest creation.

Walks a directory and hashes every regular file in it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from hashcheck.core.hasher import DEFAULT_ALGORITHM, compute_digests
from hashcheck.core.manifest import FileEntry, Manifest
from hashcheck.core.walker import walk_files

logger = logging.getLogger(__name__)


def build_manifest(
    root: Path,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
    exclude: Sequence[str] = (),
) -> Manifest:
    """
    Build a fresh manifest for a directory.

    Entries appear in walk order. Nothing is written to disk; persisting the
    result is up to the caller.

    Args:
        root: Directory to scan.
        algorithm: Digest algorithm name.
        workers: Number of hashing threads.
        exclude: fnmatch-style globs of relative paths to leave out.

    Returns:
        Manifest of every regular file under root.

    Raises:
        PathError: If root is missing or not a directory.
        OSError: If any file or subdirectory cannot be read.
    """
    root = Path(root)
    relative_paths = list(walk_files(root, exclude))
    logger.info("Hashing %d files under %s", len(relative_paths), root)

    digests = compute_digests(
        [root / rel for rel in relative_paths],
        algorithm=algorithm,
        workers=workers,
    )

    return Manifest(
        FileEntry(relative_path=rel, digest=digest)
        for rel, digest in zip(relative_paths, digests)
    )
