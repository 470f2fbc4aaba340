"""
Filesystem backend abstraction layer.

The dispatcher works against FilesystemBackend; LocalFilesystem maps request
paths onto a directory on local disk.
"""

from .base import FilesystemBackend
from .local import LocalFilesystem

__all__ = ["FilesystemBackend", "LocalFilesystem"]
