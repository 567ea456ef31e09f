"""
Settings for the hashcheck CLI.

Defaults can be overridden from a YAML file, and command-line options
override the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from hashcheck.core.codec import DEFAULT_EXTENSION
from hashcheck.core.hasher import DEFAULT_ALGORITHM, DIGEST_ALGORITHMS
from hashcheck.core.verifier import UnreadablePolicy
from hashcheck.errors import UsageError

CONFIG_ENV_VAR = "HASHCHECK_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CheckConfig:
    """Configuration for manifest creation and verification."""

    # Hashing
    algorithm: str = DEFAULT_ALGORITHM
    workers: int = 1

    # Manifest file naming
    extension: str = DEFAULT_EXTENSION

    # Verification
    on_unreadable: str = UnreadablePolicy.ABORT.value

    # Walk
    exclude: tuple[str, ...] = field(default_factory=tuple)

    # Logging
    log_level: str = "WARNING"

    def validate(self) -> CheckConfig:
        """
        Check every value.

        Returns:
            self, for chaining.

        Raises:
            UsageError: On the first invalid value.
        """
        if self.algorithm not in DIGEST_ALGORITHMS:
            raise UsageError(
                f"Unsupported digest algorithm '{self.algorithm}' "
                f"(choose from: {', '.join(DIGEST_ALGORITHMS)})"
            )
        if not isinstance(self.workers, int) or isinstance(self.workers, bool) or self.workers < 1:
            raise UsageError(f"workers must be a positive integer, got {self.workers!r}")
        if not isinstance(self.extension, str) or not self.extension or "/" in self.extension:
            raise UsageError(f"Invalid manifest extension: {self.extension!r}")
        if self.on_unreadable not in [p.value for p in UnreadablePolicy]:
            raise UsageError(f"Unknown unreadable-file policy: {self.on_unreadable}")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise UsageError(f"Unknown log level: {self.log_level}")
        return self

    def merged(self, **overrides: Any) -> CheckConfig:
        """Copy with the given non-None values replaced, validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "exclude" in changes:
            changes["exclude"] = tuple(self.exclude) + tuple(changes["exclude"])
        return replace(self, **changes).validate()


def load_config(path: Path | str | None = None) -> CheckConfig:
    """
    Load configuration from YAML.

    When no path is given, the file named by ``HASHCHECK_CONFIG`` is used if
    set; otherwise defaults apply.

    Args:
        path: Optional YAML file.

    Returns:
        Validated CheckConfig.

    Raises:
        UsageError: If the file is missing, unparsable, or has bad values.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return CheckConfig().validate()

    config_path = Path(path)
    if not config_path.is_file():
        raise UsageError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise UsageError(f"Error parsing config {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise UsageError(f"Config {config_path} must be a mapping")

    known = {f.name for f in fields(CheckConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise UsageError(f"Unknown config keys in {config_path}: {', '.join(map(str, unknown))}")

    if "exclude" in data:
        exclude = data["exclude"] or []
        if isinstance(exclude, str) or not isinstance(exclude, list):
            raise UsageError("exclude must be a list of glob patterns")
        data["exclude"] = tuple(str(pattern) for pattern in exclude)

    return CheckConfig(**data).validate()
