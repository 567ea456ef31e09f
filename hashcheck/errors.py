"""
Error taxonomy.

Every failure the tool reports to the user is one of these, or a plain
OSError raised while hashing a file or traversing a directory.
"""

from __future__ import annotations


class HashCheckError(Exception):
    """Base class for hashcheck errors."""


class UsageError(HashCheckError):
    """Invalid arguments or configuration values."""


class PathError(HashCheckError, OSError):
    """Target directory does not exist or is not a directory."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ManifestReadError(HashCheckError, OSError):
    """Manifest file is missing or cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read manifest {path}: {reason}")


class FormatError(HashCheckError, ValueError):
    """
    Manifest text is malformed.

    Carries the 1-based line number, the offending line and a short reason
    so the caller can point the user at the exact record.
    """

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Invalid format in hash file (line {line_number}, {reason}): {line}")
