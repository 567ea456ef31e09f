"""Tests for file hashing."""

import hashlib
from pathlib import Path

import pytest

from hashcheck.core.hasher import (
    DIGEST_ALGORITHMS,
    compute_digests,
    compute_file_digest,
    iter_digests,
)
from hashcheck.errors import UsageError

from tests.conftest import EMPTY_SHA256, HELLO_SHA256, WORLD_SHA256


class TestComputeFileDigest:
    """Tests for single-file hashing."""

    def test_known_sha256(self, tmp_path: Path):
        """Digest matches the well-known SHA-256 of the content."""
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello")
        assert compute_file_digest(path) == HELLO_SHA256

    def test_empty_file(self, tmp_path: Path):
        """Empty files hash to the empty-input digest."""
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert compute_file_digest(path) == EMPTY_SHA256

    def test_no_line_ending_normalization(self, tmp_path: Path):
        """CRLF and LF content hash differently."""
        unix = tmp_path / "unix.txt"
        dos = tmp_path / "dos.txt"
        unix.write_bytes(b"line\n")
        dos.write_bytes(b"line\r\n")
        assert compute_file_digest(unix) != compute_file_digest(dos)

    def test_large_file_matches_in_memory_digest(self, tmp_path: Path):
        """Chunked reading gives the same digest as hashing in memory."""
        data = bytes(range(256)) * 10_000
        path = tmp_path / "big.bin"
        path.write_bytes(data)
        assert compute_file_digest(path) == hashlib.sha256(data).hexdigest()

    @pytest.mark.parametrize("algorithm", DIGEST_ALGORITHMS)
    def test_all_algorithms_are_64_hex(self, tmp_path: Path, algorithm: str):
        """Every supported algorithm yields a 64-character lowercase digest."""
        path = tmp_path / "f"
        path.write_bytes(b"content")
        digest = compute_file_digest(path, algorithm)
        assert len(digest) == 64
        assert digest == digest.lower()
        assert all(c in "0123456789abcdef" for c in digest)

    def test_missing_file_raises_oserror(self, tmp_path: Path):
        """Unreadable paths raise OSError."""
        with pytest.raises(OSError):
            compute_file_digest(tmp_path / "nope")

    def test_directory_raises_oserror(self, tmp_path: Path):
        """Directories cannot be hashed."""
        with pytest.raises(OSError):
            compute_file_digest(tmp_path)

    def test_unknown_algorithm(self, tmp_path: Path):
        """Unknown algorithms are a usage error."""
        path = tmp_path / "f"
        path.write_bytes(b"x")
        with pytest.raises(UsageError):
            compute_file_digest(path, "md5")


class TestComputeDigests:
    """Tests for batch hashing."""

    @pytest.fixture
    def files(self, tmp_path: Path) -> list[Path]:
        paths = []
        for i in range(8):
            path = tmp_path / f"f{i}.txt"
            path.write_bytes(f"content {i}".encode())
            paths.append(path)
        return paths

    def test_parallel_matches_sequential(self, files: list[Path]):
        """Thread pool results are identical and in input order."""
        assert compute_digests(files, workers=4) == compute_digests(files, workers=1)

    def test_order_follows_input(self, tmp_path: Path):
        """Digests line up with the paths passed in."""
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_bytes(b"hello")
        b.write_bytes(b"world")
        assert compute_digests([b, a], workers=2) == [WORLD_SHA256, HELLO_SHA256]

    def test_error_propagates(self, files: list[Path], tmp_path: Path):
        """An unreadable file raises by default."""
        with pytest.raises(OSError):
            compute_digests(files + [tmp_path / "missing"], workers=3)

    def test_capture_errors(self, files: list[Path], tmp_path: Path):
        """With capture_errors the OSError takes the file's slot."""
        results = compute_digests([files[0], tmp_path / "missing"], capture_errors=True)
        assert isinstance(results[0], str)
        assert isinstance(results[1], OSError)

    def test_empty_input(self):
        """No paths, no digests."""
        assert compute_digests([], workers=4) == []


class TestIterDigests:
    """Tests for lazy batch hashing."""

    def test_unknown_algorithm_rejected_on_call(self, tmp_path: Path):
        """The algorithm is checked before the first result is requested."""
        with pytest.raises(UsageError):
            iter_digests([tmp_path / "never-read"], algorithm="md5")

    def test_hashes_one_file_per_step(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Sequential mode reads a file only when its result is requested."""
        from hashcheck.core import hasher

        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_bytes(b"hello")
        b.write_bytes(b"world")

        read: list[str] = []
        real = hasher.compute_file_digest

        def counting(path, algorithm="sha256"):
            read.append(Path(path).name)
            return real(path, algorithm)

        monkeypatch.setattr(hasher, "compute_file_digest", counting)

        results = iter_digests([a, b])
        assert read == []
        assert next(results) == HELLO_SHA256
        assert read == ["a"]
        assert list(results) == [WORLD_SHA256]
        assert read == ["a", "b"]
