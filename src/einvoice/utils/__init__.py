"""Utility modules."""

from .file_handlers import FileHandler, FileType, detect_file_type

__all__ = ["FileHandler", "FileType", "detect_file_type"]
