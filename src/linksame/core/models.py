"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning, grouping and linking identical files.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


# =============================
# Enums
# =============================

class LinkOutcome(Enum):
    """
    Result of substituting one non-canonical group member.
    """
    HARDLINKED = "hardlinked"
    SYMLINKED = "symlinked"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def display_name(self) -> str:
        """Human-readable name for log output."""
        mapping = {
            LinkOutcome.HARDLINKED: "Hardlinked",
            LinkOutcome.SYMLINKED: "Symlinked",
            LinkOutcome.SKIPPED: "Skipped",
            LinkOutcome.FAILED: "Failed",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass
class FileHashes:
    full: Optional[bytes] = None
    front: Optional[bytes] = None

    def __post_init__(self):
        fields = getattr(self, '__dataclass_fields__', {})
        for key in fields:
            value = getattr(self, key)
            if value is not None and not isinstance(value, bytes):
                raise ValueError(f"Field '{key}' must be bytes or None")


@dataclass
class FileCandidate:
    """
    A regular file found by the scanner.
    Metadata is read lazily and cached; identity is device+inode, never the path.
    """
    path: str
    size: int  # in bytes
    name: Optional[str] = None
    hashes: FileHashes = field(default_factory=FileHashes)
    _stat: Optional[os.stat_result] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    def stat(self, refresh: bool = False) -> os.stat_result:
        """Returns cached metadata, re-reading it when refresh is set. Raises OSError."""
        if self._stat is None or refresh:
            self._stat = os.stat(self.path)
        return self._stat

    @property
    def identity(self) -> Tuple[int, int]:
        st = self.stat()
        return st.st_dev, st.st_ino

    def __repr__(self):
        return f"<FileCandidate path={self.path}, size={self.size}>"


@dataclass
class SizeBucket:
    """
    Files sharing one exact byte length: the coarse pre-filter before hashing.
    """
    size: int
    files: List[FileCandidate]

    def add_file(self, file: FileCandidate) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a bucket.")
        self.files.append(file)

    def is_candidate(self) -> bool:
        """True if this bucket can contain duplicates."""
        return len(self.files) >= 2

    def __repr__(self):
        return f"<SizeBucket size={self.size}, count={len(self.files)}>"


@dataclass
class HashGroup:
    """
    Files proven content-identical: same size and same content digest.
    """
    size: int
    digest: bytes
    files: List[FileCandidate]

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def __repr__(self):
        return f"<HashGroup size={self.size}, digest={self.hexdigest[:12]}, count={len(self.files)}>"


@dataclass
class CanonicalSelection:
    """The file that stays as real data, its fresh metadata, and the members to link."""
    canonical: FileCandidate
    canonical_stat: os.stat_result
    others: List[FileCandidate]


@dataclass(frozen=True)
class LinkResult:
    path: str
    outcome: LinkOutcome
    target: Optional[str] = None
    reason: Optional[str] = None
    dry_run: bool = False

    @property
    def counted(self) -> bool:
        return self.outcome in (LinkOutcome.HARDLINKED, LinkOutcome.SYMLINKED)


@dataclass(frozen=True)
class LinkStats:
    """
    Statistics for links created (or that would be created).
    Immutable: workers each produce one record, the coordinator adds them up.
    """
    links: int = 0
    bytes_saved: int = 0
    skipped: int = 0
    failed: int = 0

    def __add__(self, other: "LinkStats") -> "LinkStats":
        if not isinstance(other, LinkStats):
            return NotImplemented
        return LinkStats(
            links=self.links + other.links,
            bytes_saved=self.bytes_saved + other.bytes_saved,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
        )

    @staticmethod
    def from_results(results: List[LinkResult], size: int) -> "LinkStats":
        links = sum(1 for r in results if r.counted)
        return LinkStats(
            links=links,
            bytes_saved=links * size,
            skipped=sum(1 for r in results if r.outcome == LinkOutcome.SKIPPED),
            failed=sum(1 for r in results if r.outcome == LinkOutcome.FAILED),
        )


@dataclass
class GroupResult:
    stats: LinkStats
    results: List[LinkResult] = field(default_factory=list)
    canonical: Optional[str] = None


"""
DTO for link parameters with built-in validation.
Interface-agnostic: used by the CLI and by library callers.
"""

@dataclass
class LinkParams:
    """Parameters for a linking run with validation."""
    roots: List[str] = field(default_factory=list)
    pattern: str = ""
    write_links: bool = False
    symlink_only: bool = False
    absolute_symlinks: bool = False
    safe_mode: bool = False
    workers: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if isinstance(self.roots, str):
            raise ValueError("Roots must be a list of directories, not a string")
        self.roots = [str(root) for root in self.roots] or ["."]

        self.pattern = self.pattern or ""

        if self.workers is not None and self.workers < 1:
            raise ValueError("Number of workers must be at least 1")
