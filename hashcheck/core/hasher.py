"""
File content hashing.

Files are read as opaque byte streams in fixed-size chunks; no line-ending
or encoding normalization is applied.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from hashcheck.errors import UsageError

CHUNK_SIZE = 1024 * 1024
DEFAULT_ALGORITHM = "sha256"

# All supported algorithms produce 256-bit digests (64 hex characters).
_ALGORITHMS: dict[str, Callable[[], "hashlib._Hash"]] = {
    "sha256": hashlib.sha256,
    "sha3_256": hashlib.sha3_256,
    "blake2b": lambda: hashlib.blake2b(digest_size=32),
}

DIGEST_ALGORITHMS = tuple(_ALGORITHMS)


def new_hasher(algorithm: str = DEFAULT_ALGORITHM) -> "hashlib._Hash":
    """
    Create a fresh hash object for an algorithm name.

    Raises:
        UsageError: If the algorithm is not supported.
    """
    try:
        factory = _ALGORITHMS[algorithm]
    except KeyError:
        raise UsageError(
            f"Unsupported digest algorithm '{algorithm}' "
            f"(choose from: {', '.join(DIGEST_ALGORITHMS)})"
        ) from None
    return factory()


def compute_file_digest(path: Path, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Compute the digest of a file's contents.

    Args:
        path: Path to file.
        algorithm: Digest algorithm name.

    Returns:
        Lowercase hex-encoded digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    hasher = new_hasher(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()
def iter_digests(
    paths: Sequence[Path],
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
    capture_errors: bool = False,
) -> Iterator[str | OSError]:
    """
    Hash many files, optionally across a thread pool, yielding as they finish.

    Results come out in the order of ``paths`` whatever the number of
    workers. The algorithm is checked when the function is called.

    Args:
        paths: Files to hash.
        algorithm: Digest algorithm name.
        workers: Number of hashing threads; 1 hashes sequentially.
        capture_errors: If True, an OSError for a file is yielded in its
            slot instead of being raised.

    Yields:
        One digest (or captured OSError) per path.

    Raises:
        UsageError: If the algorithm is not supported.
        OSError: On the first unreadable file, unless capture_errors is set.
    """
    new_hasher(algorithm)  # reject unknown algorithms before reading anything
    return _iter_digests(list(paths), algorithm, workers, capture_errors)


def _iter_digests(
    paths: list[Path], algorithm: str, workers: int, capture_errors: bool
) -> Iterator[str | OSError]:
    def _one(path: Path) -> str | OSError:
        try:
            return compute_file_digest(path, algorithm)
        except OSError as e:
            if not capture_errors:
                raise
            return e

    if workers <= 1 or len(paths) <= 1:
        for path in paths:
            yield _one(path)
        return

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hashcheck") as executor:
        yield from executor.map(_one, paths)


def compute_digests(
    paths: Sequence[Path],
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
    capture_errors: bool = False,
) -> list[str | OSError]:
    """Hash many files and collect the results of :func:`iter_digests`."""
    return list(iter_digests(paths, algorithm, workers, capture_errors))
