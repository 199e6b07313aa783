"""
LinkSame: replace identical files with links to one real file.

Core features:
- Size buckets, then SHA-1 content identity (xxHash64 front-chunk pre-filter for larger files)
- Hardlinks by default, symlinks (relative or absolute) on request or when hardlinking fails
- Dry run by default; safe mode only links files with the same permissions and owner
- A file whose symlink could not be created is restored from the canonical copy
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("linksame")
except Exception:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from linksame.commands import LinkSameCommand, link_same, link_same_update
from linksame.core import LinkParams, LinkStats, LinkOutcome, FileCandidate, HashGroup
from linksame.utils.convert_utils import ConvertUtils
from linksame.services import FileService

__all__ = [
    "LinkSameCommand",
    "link_same",
    "link_same_update",
    "LinkParams",
    "LinkStats",
    "LinkOutcome",
    "FileCandidate",
    "HashGroup",
    "ConvertUtils",
    "FileService",
    "__version__",
]
