"""Filesystem operations used by the link substitution engine."""

from .file_service import FileService

__all__ = ["FileService"]
