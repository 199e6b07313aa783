"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/linker.py
Link substitution engine: replaces identical files with hardlinks or symlinks
to one canonical file.

SUBSTITUTION PROTOCOL (per non-canonical member)
------------------------------------------------
  1. stat fails                         -> skipped
  2. already the same inode             -> skipped
  3. safe mode, mode/owner differ       -> skipped
  4. dry run                            -> counted, nothing touched
  5. remove member (failure -> skipped, file untouched)
  6. hardlink canonical -> member (unless symlink-only), fall back to symlink
  7. symlink (relative by default, absolute on request)
  8. symlink failure -> restore the member's bytes and permissions -> failed
A member path is never left missing: after step 5 it is either a link or a
restored copy written through a temporary file and an atomic rename.
"""

import os
import stat
import logging
from typing import List, Optional

from linksame.core.interfaces import Linker
from linksame.core.models import (
    FileCandidate, HashGroup, GroupResult, LinkOutcome, LinkResult, LinkStats, LinkParams
)
from linksame.core.sorter import Sorter
from linksame.services.file_service import FileService

logger = logging.getLogger(__name__)


class LinkerImpl(Linker):
    """
    Links the members of identical groups according to the run options.

    Attributes:
        write_links: Mutate the filesystem; otherwise only report would-be links
        symlink_only: Never try hardlinks
        absolute_symlinks: Store absolute instead of relative symlink targets
        safe_mode: Only link files with the same permissions and ownership
    """

    def __init__(
        self,
        write_links: bool = False,
        symlink_only: bool = False,
        absolute_symlinks: bool = False,
        safe_mode: bool = False,
        file_service: FileService = None
    ):
        self.write_links = write_links
        self.symlink_only = symlink_only
        self.absolute_symlinks = absolute_symlinks
        self.safe_mode = safe_mode
        self.file_service = file_service or FileService()

    @classmethod
    def from_params(cls, params: LinkParams) -> "LinkerImpl":
        return cls(
            write_links=params.write_links,
            symlink_only=params.symlink_only,
            absolute_symlinks=params.absolute_symlinks,
            safe_mode=params.safe_mode,
        )

    def link_group(self, group: HashGroup) -> GroupResult:
        if len(group.files) < 2:
            return GroupResult(stats=LinkStats())

        selection = Sorter.select_canonical(group.files)
        if selection is None:
            logger.warning(f"No usable file left in group {group.hexdigest[:12]}")
            return GroupResult(stats=LinkStats())

        results: List[LinkResult] = []
        for member in selection.others:
            results.append(self.link_file(member, selection.canonical, selection.canonical_stat))

        stats = LinkStats.from_results(results, selection.canonical_stat.st_size)
        return GroupResult(stats=stats, results=results, canonical=selection.canonical.path)

    def link_file(self, member: FileCandidate, canonical: FileCandidate, canonical_stat: os.stat_result) -> LinkResult:
        """Replaces one member with a link to the canonical file."""
        path = member.path
        base = canonical.path

        try:
            member_stat = member.stat(refresh=True)
        except OSError as e:
            # Maybe removed since the scan
            logger.warning(f"Cannot stat {path}: {e}")
            return LinkResult(path, LinkOutcome.SKIPPED, reason=str(e))

        if self.file_service.same_file(canonical_stat, member_stat):
            return LinkResult(path, LinkOutcome.SKIPPED, target=base, reason="already linked")

        if self.safe_mode:
            reason = self._safety_mismatch(member_stat, canonical_stat)
            if reason:
                logger.debug(f"Not linking {path}: {reason}")
                return LinkResult(path, LinkOutcome.SKIPPED, reason=reason)

        if not self.write_links:
            return self._plan(path, base)

        try:
            os.remove(path)
        except OSError as e:
            logger.warning(f"Cannot remove file {path}: {e}")
            return LinkResult(path, LinkOutcome.SKIPPED, reason=f"cannot remove: {e}")

        if not self.symlink_only:
            try:
                os.link(base, path)
            except OSError as e:
                logger.info(f"Could not create hardlink for {path} ({e}), creating symlink")
            else:
                logger.info(f"hardlink: {path} <--> {base}")
                try:
                    os.chmod(path, stat.S_IMODE(canonical_stat.st_mode))
                except OSError as e:
                    logger.warning(f"Failed to set mode on hardlink {path}: {e}")
                return LinkResult(path, LinkOutcome.HARDLINKED, target=base)

        return self._symlink(path, base, stat.S_IMODE(member_stat.st_mode))

    def _symlink(self, path: str, base: str, original_mode: int) -> LinkResult:
        source = self.file_service.symlink_target(path, base, self.absolute_symlinks)
        try:
            os.symlink(source, path)
        except OSError as e:
            logger.warning(f"Failed to create symlink for {base}: {e}")
            try:
                self.file_service.restore_copy(base, path, original_mode)
            except RuntimeError as restore_error:
                logger.error(str(restore_error))
                return LinkResult(path, LinkOutcome.FAILED, reason=f"{e}; {restore_error}")
            logger.info(f"Restored {path} after failed symlink")
            return LinkResult(path, LinkOutcome.FAILED, reason=str(e))

        logger.info(f"symlink: {path} ---> {source}")
        return LinkResult(path, LinkOutcome.SYMLINKED, target=source)

    def _plan(self, path: str, base: str) -> LinkResult:
        """Reports the link a real run would create."""
        if self.symlink_only:
            source = self.file_service.symlink_target(path, base, self.absolute_symlinks)
            logger.info(f"symlink: {path} ---> {source}")
            return LinkResult(path, LinkOutcome.SYMLINKED, target=source, dry_run=True)
        logger.info(f"link: {path} <--> {base}")
        return LinkResult(path, LinkOutcome.HARDLINKED, target=base, dry_run=True)

    @staticmethod
    def _safety_mismatch(member_stat: os.stat_result, canonical_stat: os.stat_result) -> Optional[str]:
        if member_stat.st_mode != canonical_stat.st_mode:
            return "permissions differ"
        if member_stat.st_uid != canonical_stat.st_uid or member_stat.st_gid != canonical_stat.st_gid:
            return "ownership differs"
        return None
