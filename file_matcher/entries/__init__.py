"""File and directory entries."""

from .base import DirectoryEntry, Entry, EntryReadError, EntryReader, FileEntry
from .upload import UploadedDirectoryEntry, UploadedFileEntry, build_upload_tree
from .local import LocalDirectoryEntry, LocalFileEntry, entry_for_path

__all__ = [
    "DirectoryEntry",
    "Entry",
    "EntryReadError",
    "EntryReader",
    "FileEntry",
    "UploadedDirectoryEntry",
    "UploadedFileEntry",
    "build_upload_tree",
    "LocalDirectoryEntry",
    "LocalFileEntry",
    "entry_for_path",
]
