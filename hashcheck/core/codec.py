"""
Manifest text format.

One record per line, ``relative/path:hexdigest``, UTF-8, ``\\n`` terminated.
Parsing is strict: the first malformed line aborts the whole parse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from hashcheck.core.manifest import DIGEST_PATTERN, FileEntry, Manifest, path_problem
from hashcheck.errors import FormatError, ManifestReadError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "sha256"


@dataclass(frozen=True)
class ParsedLine:
    """A successfully tokenized manifest line."""

    line_number: int
    relative_path: str
    digest: str


@dataclass(frozen=True)
class LineError:
    """A manifest line that failed tokenization."""

    line_number: int
    line: str
    reason: str

    def to_exception(self) -> FormatError:
        return FormatError(self.line_number, self.line, self.reason)


def tokenize_line(line: str, line_number: int) -> ParsedLine | LineError:
    """
    Split a manifest line into path and digest.

    The line is split on the first colon, so a path cannot contain a colon
    and anything after it must be a bare digest. Both fields are trimmed of
    surrounding ASCII spaces and a leading ``./`` is dropped from the path.
    Absolute paths and ``..`` segments are rejected so every entry resolves
    inside the root.

    Args:
        line: Line content without its newline.
        line_number: 1-based line number for error reporting.

    Returns:
        ParsedLine on success, LineError describing the problem otherwise.
    """
    path, sep, digest = line.partition(":")
    if not sep:
        return LineError(line_number, line, "no colon")

    path = path.strip(" ")
    while path.startswith("./"):
        path = path[2:]
    digest = digest.strip(" ")
    if not path:
        return LineError(line_number, line, "empty path")
    if not digest:
        return LineError(line_number, line, "empty digest")
    if not DIGEST_PATTERN.match(digest):
        return LineError(line_number, line, "invalid digest")
    if path_problem(path):
        return LineError(line_number, line, "invalid path")

    return ParsedLine(line_number, path, digest.lower())


def parse_manifest(text: str) -> Manifest:
    """
    Parse manifest text.

    Carriage returns are dropped and blank lines skipped.

    Raises:
        FormatError: On the first malformed line.
    """
    entries = []
    for line_number, raw in enumerate(text.split("\n"), start=1):
        line = raw.replace("\r", "")
        if not line:
            continue

        result = tokenize_line(line, line_number)
        if isinstance(result, LineError):
            raise result.to_exception()
        entries.append(FileEntry(relative_path=result.relative_path, digest=result.digest))

    return Manifest(entries)


def serialize_manifest(manifest: Manifest) -> str:
    """Render a manifest as text, one ``path:digest`` line per entry."""
    return "".join(f"{entry.relative_path}:{entry.digest}\n" for entry in manifest)


def load_manifest(path: Path) -> Manifest:
    """
    Read and parse a manifest file.

    Raises:
        ManifestReadError: If the file is missing or unreadable.
        FormatError: If the content is not valid UTF-8 or is malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestReadError(str(path), "file does not exist")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise ManifestReadError(str(path), e.strerror or str(e)) from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(data[: e.start].count(b"\n") + 1, "", "not valid UTF-8") from e

    manifest = parse_manifest(text)
    logger.info("Loaded %d entries from %s", len(manifest), path)
    return manifest


def save_manifest(manifest: Manifest, path: Path) -> None:
    """Write a manifest file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_manifest(manifest), encoding="utf-8", newline="\n")
    logger.info("Wrote %d entries to %s", len(manifest), path)


def manifest_filename(root: Path, extension: str = DEFAULT_EXTENSION) -> str:
    """Default manifest name for a directory: ``<basename>.<extension>``."""
    name = Path(root).resolve().name or "root"
    return f"{name}.{extension}"
