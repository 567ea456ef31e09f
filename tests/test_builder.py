"""Tests for manifest creation."""

from pathlib import Path

import pytest

from hashcheck.core.builder import build_manifest
from hashcheck.core.codec import parse_manifest, serialize_manifest
from hashcheck.errors import FormatError, PathError

from tests.conftest import HELLO_SHA256, WORLD_SHA256


class TestBuildManifest:
    """Tests for build_manifest."""

    def test_build_sample(self, sample_tree: Path):
        manifest = build_manifest(sample_tree)
        assert manifest.as_dict() == {"a.txt": HELLO_SHA256, "b.txt": WORLD_SHA256}

    def test_nested_paths_relative(self, nested_tree: Path):
        manifest = build_manifest(nested_tree)
        assert manifest.paths() == {
            "README.md",
            "docs/index.md",
            "docs/api/ref.md",
            "src/main.py",
        }

    def test_empty_directory(self, tmp_path: Path):
        """Empty directories produce a manifest that serializes to nothing."""
        manifest = build_manifest(tmp_path)
        assert len(manifest) == 0
        assert serialize_manifest(manifest) == ""

    def test_roundtrip(self, nested_tree: Path):
        """parse(serialize(build(root))) equals a fresh build of the same tree."""
        manifest = build_manifest(nested_tree)
        reparsed = parse_manifest(serialize_manifest(manifest))
        assert reparsed.as_dict() == build_manifest(nested_tree).as_dict()

    def test_colon_in_name_does_not_roundtrip(self, tmp_path: Path):
        """A file name with a colon is listed but its line cannot be read back."""
        (tmp_path / "a:b.txt").write_bytes(b"hello")
        manifest = build_manifest(tmp_path)
        assert manifest.get("a:b.txt") == HELLO_SHA256
        with pytest.raises(FormatError):
            parse_manifest(serialize_manifest(manifest))

    def test_parallel_matches_sequential(self, nested_tree: Path):
        sequential = build_manifest(nested_tree)
        parallel = build_manifest(nested_tree, workers=4)
        assert list(parallel.as_dict().items()) == list(sequential.as_dict().items())

    def test_algorithm_changes_digests(self, sample_tree: Path):
        sha = build_manifest(sample_tree)
        blake = build_manifest(sample_tree, algorithm="blake2b")
        assert sha.paths() == blake.paths()
        assert sha.get("a.txt") != blake.get("a.txt")

    def test_exclude(self, nested_tree: Path):
        manifest = build_manifest(nested_tree, exclude=["docs/*"])
        assert manifest.paths() == {"README.md", "src/main.py"}

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(PathError):
            build_manifest(tmp_path / "missing")

    def test_unreadable_file_aborts(self, sample_tree: Path, monkeypatch: pytest.MonkeyPatch):
        """One unreadable file aborts the whole build."""
        from hashcheck.core import hasher

        real = hasher.compute_file_digest

        def flaky(path, algorithm="sha256"):
            if Path(path).name == "b.txt":
                raise PermissionError(13, "Permission denied", str(path))
            return real(path, algorithm)

        monkeypatch.setattr(hasher, "compute_file_digest", flaky)
        with pytest.raises(PermissionError):
            build_manifest(sample_tree)
