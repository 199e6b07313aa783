"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory scanning for identical-file linking.
Features:
- Validates and de-overlaps root directories before any work starts
- Recursively scans directories without following symlinks
- Applies name pattern and size filters, skips empty files
- Returns a List containing scanned files
"""

import os
import stat
import time
import logging
from fnmatch import fnmatchcase
from typing import List, Optional

logger = logging.getLogger(__name__)

# Local imports
from linksame.core.models import FileCandidate
from linksame.core.interfaces import FileScanner


def normalize_roots(roots: List[str]) -> List[str]:
    """
    Cleans root paths and drops any root that is the same as, or inside, another root.
    Raises RuntimeError for a root that does not exist or is not a directory.
    """
    cleaned = []
    for root in roots:
        root_dir = os.path.normpath(str(root))
        if not os.path.exists(root_dir):
            error_msg = f"Directory does not exist: {root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not os.path.isdir(root_dir):
            error_msg = f"{root_dir} is not a directory"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        cleaned.append(root_dir)

    if not cleaned:
        return ["."]

    absolute = [os.path.abspath(root) for root in cleaned]
    kept = []
    for i, root in enumerate(cleaned):
        parent = None
        for j, other in enumerate(cleaned):
            if j == i:
                continue
            if absolute[i] == absolute[j]:
                # Same directory given twice: keep the first occurrence.
                if j < i:
                    parent = other
                    break
                continue
            if _is_inside(absolute[i], absolute[j]):
                parent = other
                break
        if parent is not None:
            logger.warning(f"{root} already included in {parent}")
            continue
        kept.append(root)
    return kept


def _is_inside(path: str, directory: str) -> bool:
    """True if path lies below directory (component-wise, not string prefix)."""
    prefix = directory if directory.endswith(os.sep) else directory + os.sep
    return path.startswith(prefix)


class DirectoryScanner(FileScanner):
    """
    Scans root directories recursively and filters regular files by name pattern.

    Attributes:
        roots: Root directories to scan, already normalized
        pattern: Glob matched against the base name (empty matches everything)
    """

    def __init__(self, roots: List[str], pattern: str = ""):
        self.roots = normalize_roots(list(roots))
        self.pattern = pattern or ""

    def scan(self, size: Optional[int] = None) -> List[FileCandidate]:
        """
        Walks every root and returns the files that pass all filters.
        Errors on individual entries are logged and the walk continues.
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Roots: {self.roots}, pattern={self.pattern!r}, size={size}")

        found_files = []
        start_time = time.time()

        for root_dir in self.roots:
            logger.debug(f"Scanning directory: {root_dir}")
            for root, dirs, files in os.walk(root_dir, onerror=self._report_walk_error):
                for filename in files:
                    file_info = self._process_file(os.path.join(root, filename), size)
                    if file_info:
                        found_files.append(file_info)

        elapsed_time = time.time() - start_time
        logger.debug(f"Total scan time: {elapsed_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    @staticmethod
    def _report_walk_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory: {error}")

    def _process_file(self, path: str, size: Optional[int] = None) -> Optional[FileCandidate]:
        """
        Process an individual file path and return a FileCandidate if it passes all filters.
        Args:
            path: Path of the directory entry
            size: Required exact size, or None for any size
        Returns:
            Optional[FileCandidate]: candidate if it passes filters, else None
        """
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.warning(f"Cannot stat {path}: {e}")
            return None

        # Symlinks and special files are never candidates
        if not stat.S_ISREG(st.st_mode):
            return None

        # Skip zero-byte files
        if st.st_size == 0:
            return None

        if size is not None and st.st_size != size:
            return None

        if not self._pattern_passes(os.path.basename(path)):
            return None

        return FileCandidate(path=path, size=st.st_size, _stat=st)

    def _pattern_passes(self, name: str) -> bool:
        """
        Check if the base name matches the configured glob pattern.
        """
        if not self.pattern:
            return True
        return fnmatchcase(name, self.pattern)
