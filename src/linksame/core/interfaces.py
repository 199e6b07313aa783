"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the linking system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Factory for incremental hash objects (SHA-1, xxHash64, ...).
- Hasher: Interface for computing front-chunk and full-content hashes of files.
- FileScanner: Interface for walking root directories and returning candidate files.
- FileGrouper: Interface for partitioning files by size and by content.
- Linker: Interface for replacing members of an identical group with links.
- Deduplicator: Interface for the engine that runs grouping and linking per size bucket.
"""

from typing import Protocol, List, Dict, Optional, Callable
from linksame.core.models import (
    FileCandidate,
    SizeBucket,
    HashGroup,
    GroupResult,
    LinkStats,
)


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-1, SHA-256 or xxHash
    without affecting the rest of the grouping logic.
    """
    name: str

    def new(self):
        """Returns a fresh incremental hash object with update() and digest()."""
        ...


class Hasher(Protocol):
    """Interface for hashing files."""
    def compute_front_hash(self, file: FileCandidate) -> bytes: ...
    def compute_full_hash(self, file: FileCandidate) -> bytes: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(self, size: Optional[int] = None) -> List[FileCandidate]:
        """
        Scan files from the configured root directories.

        Args:
            size: When given, only files of exactly this size are returned.

        Returns:
            List of regular, non-empty files matching the name pattern.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for grouping files based on size or content hashes.
    """
    def group_by_size(self, files: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        """Group files by their size in bytes."""
        ...

    def group_by_content(self, bucket: SizeBucket) -> List[HashGroup]:
        """Partition a size bucket into groups of content-identical files."""
        ...


class Linker(Protocol):
    """
    Interface for the link substitution engine.
    """
    def link_group(self, group: HashGroup) -> GroupResult:
        """
        Replace every non-canonical member of the group with a link to the canonical file.

        Returns:
            Per-member results and the statistics for this group.
        """
        ...


class Deduplicator(Protocol):
    """
    Interface for the engine coordinating content grouping and linking of size buckets.
    """
    def process_buckets(
        self,
        buckets: List[SizeBucket],
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> LinkStats:
        """
        Group and link every bucket, aggregating their statistics.

        Args:
            buckets: Size buckets with 2+ files each.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            Statistics summed over all buckets.
        """
        ...
