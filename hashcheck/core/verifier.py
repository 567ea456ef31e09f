"""
Manifest verification.

Compares a directory's current contents against a manifest and classifies
every path as valid, mismatched, missing, extra or unreadable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hashcheck.core.hasher import DEFAULT_ALGORITHM, iter_digests
from hashcheck.core.json_canonical import canonical_json_dumps
from hashcheck.core.manifest import Manifest
from hashcheck.core.walker import check_root, walk_files
from hashcheck.errors import UsageError

logger = logging.getLogger(__name__)


class EntryStatus(str, Enum):
    """Outcome of checking one manifest entry."""

    VALID = "valid"
    MISMATCH = "mismatch"
    MISSING = "missing"
    UNREADABLE = "unreadable"


class UnreadablePolicy(str, Enum):
    """What to do when a listed file exists but cannot be read."""

    ABORT = "abort"
    RECORD = "record"


class VerificationReport(BaseModel):
    """
    Result of verifying a directory against a manifest.

    ``valid`` is not stored; it is every manifest path that landed in no
    other category.
    """

    model_config = ConfigDict(frozen=True)

    manifest_paths: frozenset[str] = Field(default_factory=frozenset)
    mismatched: frozenset[str] = Field(default_factory=frozenset)
    missing: frozenset[str] = Field(default_factory=frozenset)
    extra: frozenset[str] = Field(default_factory=frozenset)
    unreadable: frozenset[str] = Field(default_factory=frozenset)

    @property
    def valid(self) -> frozenset[str]:
        return self.manifest_paths - self.mismatched - self.missing - self.unreadable

    @property
    def is_clean(self) -> bool:
        return not (self.mismatched or self.missing or self.extra or self.unreadable)

    def counts(self) -> dict[str, int]:
        return {
            "valid": len(self.valid),
            "mismatched": len(self.mismatched),
            "missing": len(self.missing),
            "extra": len(self.extra),
            "unreadable": len(self.unreadable),
        }

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with sorted path lists."""
        return {
            "clean": self.is_clean,
            "counts": self.counts(),
            "valid": sorted(self.valid),
            "mismatched": sorted(self.mismatched),
            "missing": sorted(self.missing),
            "extra": sorted(self.extra),
            "unreadable": sorted(self.unreadable),
        }

    def to_json(self, indent: bool = True) -> str:
        """Serialize to canonical JSON."""
        return canonical_json_dumps(self.to_dict(), indent=indent)


def verify_manifest(
    root: Path,
    manifest: Manifest,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    workers: int = 1,
    on_unreadable: UnreadablePolicy | str = UnreadablePolicy.ABORT,
    exclude: Sequence[str] = (),
    on_entry: Callable[[str, EntryStatus], None] | None = None,
) -> VerificationReport:
    """
    Verify a directory against a manifest.

    Every manifest entry is checked first, then the tree is walked to find
    files the manifest does not list. The manifest is never modified.

    Args:
        root: Directory to verify.
        manifest: Expected paths and digests.
        algorithm: Digest algorithm the manifest was built with.
        workers: Number of hashing threads.
        on_unreadable: ``abort`` re-raises the read error; ``record`` lists the
            path under ``unreadable`` and carries on.
        exclude: fnmatch-style globs of relative paths never reported as extra.
        on_entry: Called once per manifest entry, in manifest order, with the
            path and its status, as soon as that entry is classified.

    Returns:
        VerificationReport for the directory.

    Raises:
        PathError: If root is missing or not a directory.
        OSError: If a listed file cannot be read (abort policy) or the tree
            cannot be traversed.
    """
    try:
        policy = UnreadablePolicy(on_unreadable)
    except ValueError:
        raise UsageError(f"Unknown unreadable-file policy: {on_unreadable}") from None

    root = check_root(root)
    expected = manifest.as_dict()

    present = [rel for rel in expected if (root / rel).is_file()]
    results = iter_digests(
        [root / rel for rel in present],
        algorithm=algorithm,
        workers=workers,
        capture_errors=policy is UnreadablePolicy.RECORD,
    )

    statuses: dict[str, EntryStatus] = {}
    present_set = set(present)
    for rel in expected:
        if rel not in present_set:
            status = EntryStatus.MISSING
        else:
            result = next(results)
            if isinstance(result, OSError):
                logger.warning("Cannot read %s: %s", rel, result)
                status = EntryStatus.UNREADABLE
            elif result != expected[rel]:
                status = EntryStatus.MISMATCH
            else:
                status = EntryStatus.VALID

        statuses[rel] = status
        if on_entry is not None:
            on_entry(rel, status)

    extra = frozenset(rel for rel in walk_files(root, exclude) if rel not in manifest)

    def _having(status: EntryStatus) -> frozenset[str]:
        return frozenset(rel for rel, s in statuses.items() if s is status)

    report = VerificationReport(
        manifest_paths=frozenset(expected),
        mismatched=_having(EntryStatus.MISMATCH),
        missing=_having(EntryStatus.MISSING),
        extra=extra,
        unreadable=_having(EntryStatus.UNREADABLE),
    )
    logger.info("Verified %s: %s", root, report.counts())
    return report
