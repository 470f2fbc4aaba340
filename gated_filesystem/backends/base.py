"""
Abstract base class for filesystem backends.

The dispatcher never touches the disk itself; every primitive goes through a
FilesystemBackend. Implementations report failures by raising
FilesystemError with a human-readable description.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class FilesystemBackend(ABC):
    """Primitive file and directory operations consumed by the dispatcher."""

    @abstractmethod
    async def read_file(self, path: str) -> bytes:
        """
        Read the full contents of a file.

        Raises:
            FilesystemError: If the file cannot be read
        """
        pass

    @abstractmethod
    async def write_file(self, path: str, text: str) -> None:
        """
        Replace the contents of a file with text.

        Raises:
            FilesystemError: If the file cannot be written
        """
        pass

    @abstractmethod
    async def list_files(self, path: str) -> list[str]:
        """
        List entry names in a directory.

        Raises:
            FilesystemError: If the directory cannot be listed
        """
        pass

    @abstractmethod
    async def create_dir(self, path: str) -> None:
        """
        Create a directory, along with missing parents where supported.

        Raises:
            FilesystemError: If the directory cannot be created
        """
        pass

    @abstractmethod
    async def delete_dir(self, path: str) -> None:
        """
        Remove a directory.

        Raises:
            FilesystemError: If the directory cannot be removed
        """
        pass

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """
        Remove a file.

        Raises:
            FilesystemError: If the file cannot be removed
        """
        pass
