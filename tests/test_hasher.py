"""
Unit tests for HasherImpl.
Verifies SHA-1 full hashing (20-byte digests) and xxHash64 front hashing (8 bytes).
"""
import hashlib
import pytest
from linksame.core.hasher import HasherImpl, SHA1AlgorithmImpl, XXHashAlgorithmImpl, FRONT_CHUNK_SIZE
from linksame.core.models import FileCandidate


def make_file(tmp_path, name, content):
    path = tmp_path / name
    path.write_bytes(content)
    return FileCandidate(path=str(path), size=len(content))


class TestHasherImpl:
    """Test streaming hash computation."""

    def test_same_content_produces_same_full_hash(self, tmp_path):
        content = b"test content " * 1000
        file1 = make_file(tmp_path, "one.bin", content)
        file2 = make_file(tmp_path, "two.bin", content)

        hasher = HasherImpl()
        hash1 = hasher.compute_full_hash(file1)
        hash2 = hasher.compute_full_hash(file2)

        assert hash1 == hash2
        assert isinstance(hash1, bytes)
        assert len(hash1) == 20  # SHA-1 = 160 bits
        assert hash1 == hashlib.sha1(content).digest()

    def test_one_byte_difference_changes_full_hash(self, tmp_path):
        file1 = make_file(tmp_path, "a.bin", b"A" * 1024)
        file2 = make_file(tmp_path, "b.bin", b"A" * 1023 + b"B")

        hasher = HasherImpl()
        assert hasher.compute_full_hash(file1) != hasher.compute_full_hash(file2)

    def test_streams_in_small_blocks(self, tmp_path):
        """Block size must not change the digest."""
        content = bytes(range(256)) * 300
        file = make_file(tmp_path, "blocks.bin", content)

        hasher = HasherImpl(block_size=7)
        assert hasher.compute_full_hash(file) == hashlib.sha1(content).digest()

    def test_front_hash_reads_only_first_chunk(self, tmp_path):
        """Files differing only after the first chunk share a front hash."""
        head = b"H" * FRONT_CHUNK_SIZE
        file1 = make_file(tmp_path, "a.bin", head + b"tail-one")
        file2 = make_file(tmp_path, "b.bin", head + b"tail-two")

        hasher = HasherImpl()
        front1 = hasher.compute_front_hash(file1)
        front2 = hasher.compute_front_hash(file2)

        assert front1 == front2
        assert len(front1) == 8  # xxHash64 = 8 bytes
        assert hasher.compute_full_hash(file1) != hasher.compute_full_hash(file2)

    def test_hash_caching(self, tmp_path):
        """Hasher should cache computed hashes in FileCandidate.hashes."""
        file = make_file(tmp_path, "cached.bin", b"test" * 100)
        hasher = HasherImpl()

        full = hasher.compute_full_hash(file)
        front = hasher.compute_front_hash(file)
        assert file.hashes.full == full
        assert file.hashes.front == front

        # Second call returns cached value (no I/O)
        (tmp_path / "cached.bin").unlink()
        assert hasher.compute_full_hash(file) == full
        assert hasher.compute_front_hash(file) == front

    def test_deleted_file_raises_os_error(self, tmp_path):
        """A vanished file is an I/O error, never an empty digest."""
        file = make_file(tmp_path, "deleted.txt", b"content")
        (tmp_path / "deleted.txt").unlink()

        hasher = HasherImpl()
        with pytest.raises(OSError):
            hasher.compute_full_hash(file)
        with pytest.raises(OSError):
            hasher.compute_front_hash(file)
        assert file.hashes.full is None

    def test_truncated_file_raises_os_error(self, tmp_path):
        file = make_file(tmp_path, "shrunk.bin", b"X" * 4096)
        (tmp_path / "shrunk.bin").write_bytes(b"X" * 100)

        with pytest.raises(OSError, match="size changed"):
            HasherImpl().compute_full_hash(file)

    def test_algorithms_are_pluggable(self, tmp_path):
        content = b"pluggable"
        file = make_file(tmp_path, "p.bin", content)

        class SHA256AlgorithmImpl:
            name = "sha256"

            def new(self):
                return hashlib.sha256()

        hasher = HasherImpl(algorithm=SHA256AlgorithmImpl())
        assert hasher.compute_full_hash(file) == hashlib.sha256(content).digest()

    def test_algorithm_names(self):
        assert SHA1AlgorithmImpl().name == "sha1"
        assert XXHashAlgorithmImpl().name == "xxh64"
