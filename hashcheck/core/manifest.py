"""
Manifest data model.

A manifest maps relative file paths to their expected content digests.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

import xxhash
from pydantic import BaseModel, ConfigDict, Field, field_validator

DIGEST_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")


def path_problem(path: str) -> str | None:
    """
    Describe why a manifest path cannot be resolved under the root.

    Returns:
        None for a usable relative path, otherwise a short reason.
    """
    if not path:
        return "relative path must not be empty"
    if path.startswith("/"):
        return "relative path must not be absolute"
    if path.startswith("./"):
        return "relative path must not start with './'"
    if ".." in path.split("/"):
        return "relative path must not contain '..'"
    return None


class FileEntry(BaseModel):
    """A single manifest record."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(description="Slash-separated path relative to the root")
    digest: str = Field(description="64-character hex digest")

    @field_validator("relative_path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        problem = path_problem(value)
        if problem:
            raise ValueError(problem)
        return value

    @field_validator("digest")
    @classmethod
    def _check_digest(cls, value: str) -> str:
        if not DIGEST_PATTERN.match(value):
            raise ValueError("digest must be 64 hexadecimal characters")
        return value.lower()


class Manifest:
    """
    Ordered, read-only mapping of relative path to digest.

    Repeated paths keep their first position but take the last digest.
    """

    __slots__ = ("_digests",)

    def __init__(self, entries: Iterable[FileEntry] = ()):
        digests: dict[str, str] = {}
        for entry in entries:
            digests[entry.relative_path] = entry.digest
        self._digests = MappingProxyType(digests)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Manifest:
        """Build a manifest from (relative_path, digest) pairs."""
        return cls(FileEntry(relative_path=path, digest=digest) for path, digest in pairs)

    def __len__(self) -> int:
        return len(self._digests)

    def __iter__(self) -> Iterator[FileEntry]:
        for path, digest in self._digests.items():
            yield FileEntry(relative_path=path, digest=digest)

    def __contains__(self, path: object) -> bool:
        return path in self._digests

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Manifest):
            return NotImplemented
        return dict(self._digests) == dict(other._digests)

    def __repr__(self) -> str:
        return f"Manifest({len(self)} entries)"

    def get(self, path: str) -> str | None:
        """Expected digest for a path, or None if not listed."""
        return self._digests.get(path)

    def paths(self) -> frozenset[str]:
        return frozenset(self._digests)

    def as_dict(self) -> Mapping[str, str]:
        """Read-only view of the path to digest mapping, in manifest order."""
        return self._digests

    def fingerprint(self) -> str:
        """
        Compute a short hash identifying this manifest's content.

        Two manifests with the same records in the same order share a
        fingerprint.

        Returns:
            Hex-encoded xxh64 hash of the serialized manifest.
        """
        hasher = xxhash.xxh64()
        for path, digest in self._digests.items():
            hasher.update(f"{path}:{digest}\n".encode("utf-8"))
        return hasher.hexdigest()
