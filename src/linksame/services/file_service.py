"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem primitives used by the link substitution engine.
Provides the same-physical-file check, symlink target computation and the
crash-safe restore of a removed file.
"""
import os
import shutil
import tempfile
import logging

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform file operations for the linker.
    """

    @staticmethod
    def same_file(first: os.stat_result, second: os.stat_result) -> bool:
        """True if both stat results describe the same physical file (device + inode)."""
        return os.path.samestat(first, second)

    @staticmethod
    def symlink_target(link_path: str, target_path: str, absolute: bool = False) -> str:
        """
        Returns the text to store in a symlink at link_path pointing to target_path.

        Relative targets are computed from the link's directory to the target's
        directory and joined with the target's base name. When no relative path
        exists (e.g. different drives on Windows) the absolute path is used.
        """
        if absolute:
            return os.path.abspath(target_path)

        link_dir = os.path.dirname(link_path) or os.curdir
        target_dir = os.path.dirname(target_path) or os.curdir
        try:
            rel_dir = os.path.relpath(target_dir, link_dir)
        except ValueError as e:
            logger.debug(f"Cannot make relative symlink for {link_path}: {e}")
            return os.path.abspath(target_path)

        if rel_dir == os.curdir:
            return os.path.basename(target_path)
        return os.path.join(rel_dir, os.path.basename(target_path))

    @staticmethod
    def restore_copy(source_path: str, dest_path: str, mode: int) -> None:
        """
        Recreates dest_path as a copy of source_path with the given permission bits.

        The bytes are written to a temporary file in the destination directory,
        which is then renamed over dest_path, so dest_path never holds a partial copy.
        """
        dest_dir = os.path.dirname(dest_path) or os.curdir
        tmp_name = None
        try:
            with open(source_path, 'rb') as src, tempfile.NamedTemporaryFile(
                    dir=dest_dir, prefix=".linksame-", delete=False) as tmp:
                tmp_name = tmp.name
                shutil.copyfileobj(src, tmp)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, dest_path)
        except OSError as e:
            if tmp_name is not None:
                try:
                    os.remove(tmp_name)
                except FileNotFoundError:
                    pass
                except OSError as cleanup_error:
                    logger.warning(f"Cannot remove temporary file {tmp_name}: {cleanup_error}")
            raise RuntimeError(f"Failed to restore {dest_path}: {e}") from e
