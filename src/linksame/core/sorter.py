"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure ordering logic for identical-file groups, with no dependencies outside core.
Chooses the canonical file that keeps the data; every other member becomes a link to it.
"""
import logging
from typing import List, Optional

from linksame.core.models import FileCandidate, CanonicalSelection

logger = logging.getLogger(__name__)


class Sorter:
    """
    Orders files inside an identical group.
    Sorting priority (applied lexicographically, descending):
    1. Base name length: the longest name is taken as the most descriptive copy
       (libexample.so.1.0 over libexample.so)
    2. Full path length
    3. Path text, so that the order never depends on scan order
    """

    @staticmethod
    def rank(files: List[FileCandidate]) -> List[FileCandidate]:
        return sorted(files, key=lambda f: (len(f.name), len(f.path), f.path), reverse=True)

    @staticmethod
    def select_canonical(files: List[FileCandidate]) -> Optional[CanonicalSelection]:
        """
        Picks the first ranked file whose metadata can be read.
        Files that cannot be stat'ed are dropped from the group.
        Returns None when no file is left.
        """
        ranked = Sorter.rank(files)
        while ranked:
            candidate = ranked.pop(0)
            try:
                candidate_stat = candidate.stat(refresh=True)
            except OSError as e:
                logger.warning(f"Cannot use {candidate.path} as link target: {e}")
                continue
            return CanonicalSelection(canonical=candidate, canonical_stat=candidate_stat, others=ranked)
        return None
