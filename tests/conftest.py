"""Shared fixtures."""

from pathlib import Path

import pytest

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
WORLD_SHA256 = "486ea46224d1bb4fb680f34f7c9ad96a8f24ec88be73ea8e5a6c65260e9cb8a7"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Directory with a.txt ("hello") and b.txt ("world")."""
    root = tmp_path / "sample"
    root.mkdir()
    (root / "a.txt").write_bytes(b"hello")
    (root / "b.txt").write_bytes(b"world")
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """Directory with files at several depths."""
    root = tmp_path / "nested"
    (root / "docs" / "api").mkdir(parents=True)
    (root / "src").mkdir()
    (root / "README.md").write_bytes(b"# readme\n")
    (root / "docs" / "index.md").write_bytes(b"index\r\n")
    (root / "docs" / "api" / "ref.md").write_bytes(b"ref")
    (root / "src" / "main.py").write_bytes(b"print('hi')\n")
    return root
