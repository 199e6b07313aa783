"""
Core linking engine: scanner, hasher, grouper, canonical selection and link substitution.

This package contains the foundation of linksame:
- DirectoryScanner: recursive traversal of one or more roots with name pattern filter
- HasherImpl: SHA-1 content identity plus xxHash64 front-chunk pre-filter
- FileGrouperImpl: size buckets, inode clustering and content grouping
- Sorter: canonical file selection (longest name, then longest path)
- LinkerImpl: hardlink/symlink substitution with restore on failure
- DeduplicatorImpl: parallel per-size-bucket pipeline
- Models: FileCandidate, SizeBucket, HashGroup, LinkStats and parameters
"""

from .scanner import DirectoryScanner, normalize_roots
from .hasher import HasherImpl, SHA1AlgorithmImpl, XXHashAlgorithmImpl
from .grouper import FileGrouperImpl
from .sorter import Sorter
from .linker import LinkerImpl
from .deduplicator import DeduplicatorImpl
from .models import (
    FileCandidate, FileHashes, SizeBucket, HashGroup, CanonicalSelection,
    LinkOutcome, LinkResult, LinkStats, GroupResult, LinkParams)

__all__ = [
    "DirectoryScanner",
    "normalize_roots",
    "HasherImpl",
    "SHA1AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "FileGrouperImpl",
    "Sorter",
    "LinkerImpl",
    "DeduplicatorImpl",
    "FileCandidate",
    "FileHashes",
    "SizeBucket",
    "HashGroup",
    "CanonicalSelection",
    "LinkOutcome",
    "LinkResult",
    "LinkStats",
    "GroupResult",
    "LinkParams",
]
