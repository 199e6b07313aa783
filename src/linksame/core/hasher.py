"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing utilities using the FileCandidate class and pluggable hash algorithms.

HasherImpl streams files through an incremental hash object, caching results
in the candidate's FileHashes container. SHA-1 proves content identity;
xxHash64 over the first chunk is a cheap pre-filter.
"""

import hashlib
import logging

import xxhash

from linksame.core.models import FileCandidate
from linksame.core.interfaces import Hasher, HashAlgorithm

logger = logging.getLogger(__name__)

FRONT_CHUNK_SIZE = 64 * 1024
READ_BLOCK_SIZE = 1024 * 1024


# Use the same way to implement and use any other hashing algorithm
class SHA1AlgorithmImpl(HashAlgorithm):
    name = "sha1"

    def new(self):
        return hashlib.sha1()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    def new(self):
        return xxhash.xxh64()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Read errors are raised as OSError so that callers can exclude the file.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm = None,
        quick_algorithm: HashAlgorithm = None,
        front_chunk_size: int = FRONT_CHUNK_SIZE,
        block_size: int = READ_BLOCK_SIZE
    ):
        self.algorithm = algorithm or SHA1AlgorithmImpl()
        self.quick_algorithm = quick_algorithm or XXHashAlgorithmImpl()
        self.front_chunk_size = front_chunk_size
        self.block_size = block_size

    def compute_full_hash(self, file: FileCandidate) -> bytes:
        """
        Streams the whole file and caches its digest.
        Raises OSError if the file cannot be read, or if its length no longer
        matches the size recorded by the scanner.
        """
        if file.hashes.full is not None:
            return file.hashes.full

        h = self.algorithm.new()
        total = 0
        with open(file.path, 'rb') as f:
            while True:
                block = f.read(self.block_size)
                if not block:
                    break
                h.update(block)
                total += len(block)

        if total != file.size:
            raise OSError(
                f"{file.path}: size changed during hashing "
                f"(expected {file.size} bytes, read {total})"
            )

        result = h.digest()
        file.hashes.full = result
        logger.debug(f"{self.algorithm.name} {result.hex()} {file.path}")
        return result

    def compute_front_hash(self, file: FileCandidate) -> bytes:
        """Computes and caches hash of the first N bytes of a file."""
        if file.hashes.front is not None:
            return file.hashes.front

        with open(file.path, 'rb') as f:
            data = f.read(self.front_chunk_size)

        h = self.quick_algorithm.new()
        h.update(data)
        result = h.digest()
        file.hashes.front = result
        return result
