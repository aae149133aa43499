"""ZIP archive packaging."""

from .packager import ArchivePackager, PackagedFile, PackagingError

__all__ = ["ArchivePackager", "PackagedFile", "PackagingError"]
