"""Core engine: hashing, tree walking, manifest codec, build and verify."""

from hashcheck.core.builder import build_manifest
from hashcheck.core.codec import load_manifest, parse_manifest, save_manifest, serialize_manifest
from hashcheck.core.hasher import compute_file_digest
from hashcheck.core.manifest import FileEntry, Manifest
from hashcheck.core.verifier import EntryStatus, VerificationReport, verify_manifest
from hashcheck.core.walker import walk_files

__all__ = [
    "FileEntry",
    "Manifest",
    "EntryStatus",
    "VerificationReport",
    "build_manifest",
    "compute_file_digest",
    "load_manifest",
    "parse_manifest",
    "save_manifest",
    "serialize_manifest",
    "verify_manifest",
    "walk_files",
]
