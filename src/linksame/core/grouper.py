"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping strategies using FileCandidate objects and Hasher.
Size grouping is the coarse filter; content grouping proves identity inside a size bucket.
"""

import logging
from collections import defaultdict
from typing import List, Dict, Any, Callable, Tuple

from linksame.core.interfaces import FileGrouper
from linksame.core.models import FileCandidate, SizeBucket, HashGroup
from linksame.core.hasher import HasherImpl, Hasher

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def group_by_size(self, files: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size)

    def group_by_front_hash(self, files: List[FileCandidate]) -> Dict[bytes, List[FileCandidate]]:
        """Groups files by front hash."""
        return self._group_by(files, self.hasher.compute_front_hash)

    def group_by_full_hash(self, files: List[FileCandidate]) -> Dict[bytes, List[FileCandidate]]:
        """Groups files by full content hash."""
        return self._group_by(files, self.hasher.compute_full_hash)

    @staticmethod
    def cluster_by_inode(files: List[FileCandidate]) -> List[List[FileCandidate]]:
        """
        Clusters paths that already point to the same physical file.
        Files that cannot be stat'ed are dropped.
        """
        clusters: Dict[Tuple[int, int], List[FileCandidate]] = {}
        for file in files:
            try:
                file.stat(refresh=True)
            except OSError as e:
                logger.warning(f"Cannot stat {file.path}: {e}")
                continue
            clusters.setdefault(file.identity, []).append(file)
        return list(clusters.values())

    def group_by_content(self, bucket: SizeBucket) -> List[HashGroup]:
        """
        Partitions a size bucket into groups of content-identical files.

        Hardlinked paths share one hash: only one representative per inode is read.
        Larger files are first split by front-chunk hash so that files differing
        early are never read in full.
        """
        clusters = self.cluster_by_inode(bucket.files)
        if len(clusters) < 2:
            logger.debug(f"Size {bucket.size}: nothing to link ({len(clusters)} physical file(s))")
            return []

        members = {id(cluster[0]): cluster for cluster in clusters}
        representatives = [cluster[0] for cluster in clusters]

        if bucket.size > getattr(self.hasher, "front_chunk_size", 0):
            candidate_sets = list(self.group_by_front_hash(representatives).values())
        else:
            candidate_sets = [representatives]

        groups = []
        for candidates in candidate_sets:
            for digest, files in self.group_by_full_hash(candidates).items():
                expanded = [f for rep in files for f in members[id(rep)]]
                groups.append(HashGroup(size=bucket.size, digest=digest, files=expanded))

        logger.debug(f"Size {bucket.size}: {len(groups)} identical group(s) from {len(bucket.files)} files")
        return groups

    @staticmethod
    def _group_by(files: List[FileCandidate], key_func: Callable[[FileCandidate], Any]) -> Dict[Any, List[FileCandidate]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a FileCandidate
        Returns:
            Dict[key, List[FileCandidate]] holding only groups of 2+ files
        """
        groups = defaultdict(list)
        skipped_files = 0
        for file in files:
            try:
                key = key_func(file)
            except OSError as e:
                logger.warning(f"Error processing {file.path}: {e}")
                skipped_files += 1
                continue
            if key is not None:
                groups[key].append(file)

        if skipped_files > 0:
            logger.warning(f"Skipped {skipped_files} files due to read errors")

        return {key: group for key, group in groups.items() if len(group) >= 2}
