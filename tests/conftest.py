"""
Shared fixtures for linksame tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def lib_files(temp_dir) -> Dict[str, Path]:
    """
    Shared-library name variants that were turned into copies:
    three identical 1KB files with names of different length.
    """
    content = bytes(range(256)) * 4  # 1024 bytes
    lib_dir = temp_dir / "lib"
    lib_dir.mkdir()
    files = {
        "full": lib_dir / "libexample.so.1.0",
        "major": lib_dir / "libexample.so.1",
        "plain": lib_dir / "libexample.so",
    }
    for path in files.values():
        path.write_bytes(content)
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 2 identical files + 1 identical file in a subdirectory (1KB of 'A')
    - 2 identical files (2KB of 'B')
    - 1 file of same size as 'A' group but one byte different
    - 1 unique file
    - 1 empty file (filtered by scanner)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.dat"
    files["dup2_b"] = temp_dir / "dup2_b.dat"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["near"] = temp_dir / "near_a.txt"
    files["near"].write_bytes(b"A" * 1023 + b"Z")

    files["unique"] = temp_dir / "unique.txt"
    files["unique"].write_bytes(b"C" * 1500)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


def _snapshot(root: Path) -> Dict[str, tuple]:
    """Content, mode, link status and inode of every entry below root."""
    result = {}
    for path in sorted(root.rglob("*")):
        st = path.lstat()
        if path.is_symlink():
            result[str(path)] = ("symlink", os.readlink(path))
        elif path.is_file():
            result[str(path)] = ("file", path.read_bytes(), st.st_mode, st.st_ino)
        else:
            result[str(path)] = ("dir", st.st_mode)
    return result


@pytest.fixture
def snapshot():
    """Returns a function capturing the observable state of a directory tree."""
    return _snapshot
