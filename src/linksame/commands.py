"""
Unified command orchestrator for linking identical files.
This is the SINGLE source of truth for business logic, used by the CLI and library callers.
"""
import os
import stat
import logging
from typing import List, Optional, Callable

from linksame.core.models import FileCandidate, SizeBucket, LinkStats, LinkParams
from linksame.core.scanner import DirectoryScanner
from linksame.core.grouper import FileGrouperImpl
from linksame.core.linker import LinkerImpl
from linksame.core.deduplicator import DeduplicatorImpl

logger = logging.getLogger(__name__)


class LinkSameCommand:
    """
    Orchestrates the whole linking workflow:
    1. Validate and de-overlap root directories (fatal errors stop here, before any change)
    2. Scan for candidate files and bucket them by size
    3. Group each bucket by content and link every identical group

    Usage:
        params = LinkParams(roots=["/usr/lib"], write_links=True)
        command = LinkSameCommand()
        stats = command.execute(params)

        # Link everything identical to one file:
        stats = command.execute_update("/opt/lib/libexample.so.1.0", params)
    """

    def __init__(self, grouper: Optional[FileGrouperImpl] = None):
        self.grouper = grouper or FileGrouperImpl()
        self.normalized_roots: List[str] = []

    def execute(
            self,
            params: LinkParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> LinkStats:
        """
        Link identical files in every root (full-tree mode).

        Args:
            params: Validated link parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Aggregated statistics (links created or that would be created, bytes saved)

        Raises:
            RuntimeError: If a root does not exist or is not a directory
        """
        scanner = DirectoryScanner(params.roots, params.pattern)
        self.normalized_roots = scanner.roots

        files = scanner.scan()
        size_groups = self.grouper.group_by_size(files)
        buckets = [SizeBucket(size=size, files=group) for size, group in size_groups.items()]
        logger.debug(f"Found {len(files)} files, {len(buckets)} size buckets with 2+ files")

        if progress_callback:
            progress_callback("Scanning", len(files), len(files))

        deduplicator = DeduplicatorImpl(
            linker=LinkerImpl.from_params(params),
            grouper=self.grouper,
            workers=params.workers
        )
        return deduplicator.process_buckets(buckets, progress_callback=progress_callback)

    def execute_update(self, update_file: str, params: LinkParams) -> LinkStats:
        """
        Link every file identical to update_file (update mode).

        Raises:
            ValueError: If no update file is given
            FileNotFoundError: If update_file does not exist
            RuntimeError: If a root is invalid, or update_file is not a regular file or is empty
            OSError: If update_file cannot be read
        """
        if not update_file:
            raise ValueError("Update file not specified")

        scanner = DirectoryScanner(params.roots, params.pattern)
        self.normalized_roots = scanner.roots

        update_stat = os.stat(update_file)
        if not stat.S_ISREG(update_stat.st_mode):
            raise RuntimeError(f"{update_file} is not a file")
        if update_stat.st_size == 0:
            raise RuntimeError(f"{update_file} is empty")

        reference = FileCandidate(path=update_file, size=update_stat.st_size, _stat=update_stat)
        reference_digest = self.grouper.hasher.compute_full_hash(reference)

        reference_abspath = os.path.abspath(update_file)
        bucket = SizeBucket(size=reference.size, files=[reference])
        for file in scanner.scan(size=reference.size):
            if os.path.abspath(file.path) != reference_abspath:
                bucket.add_file(file)

        if not bucket.is_candidate():
            return LinkStats()

        deduplicator = DeduplicatorImpl(linker=LinkerImpl.from_params(params), grouper=self.grouper)
        for group in self.grouper.group_by_content(bucket):
            if group.digest == reference_digest:
                return deduplicator.process_group(group)
        return LinkStats()


def link_same(
        roots: List[str],
        pattern: str = "",
        write_links: bool = False,
        symlink_only: bool = False,
        absolute_symlinks: bool = False,
        safe_mode: bool = False
) -> LinkStats:
    """
    Replace copies of files under roots with links to a single file.

    Hardlinks are created by default and symlinks when hardlinking fails or
    symlink_only is set. Nothing is changed unless write_links is set.
    """
    params = LinkParams(
        roots=roots,
        pattern=pattern,
        write_links=write_links,
        symlink_only=symlink_only,
        absolute_symlinks=absolute_symlinks,
        safe_mode=safe_mode
    )
    return LinkSameCommand().execute(params)


def link_same_update(
        reference_file: str,
        roots: List[str],
        pattern: str = "",
        write_links: bool = False,
        symlink_only: bool = False,
        absolute_symlinks: bool = False,
        safe_mode: bool = False
) -> LinkStats:
    """Same as link_same(), but only for files identical to reference_file."""
    params = LinkParams(
        roots=roots,
        pattern=pattern,
        write_links=write_links,
        symlink_only=symlink_only,
        absolute_symlinks=absolute_symlinks,
        safe_mode=safe_mode
    )
    return LinkSameCommand().execute_update(reference_file, params)
