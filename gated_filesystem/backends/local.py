"""
Local disk filesystem backend.

Request paths are interpreted relative to a root directory, with a leading
slash meaning the root itself. Writes are atomic using temp file + rename.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from ..exceptions import FilesystemError
from .base import FilesystemBackend

logger = logging.getLogger(__name__)


class LocalFilesystem(FilesystemBackend):
    """FilesystemBackend backed by a directory on local disk."""

    def __init__(self, root: Path | str):
        self.root = Path(root).resolve()

    def resolve(self, path: str) -> Path:
        """Map a request path onto the local disk.

        Raises:
            FilesystemError: If the path is unusable or escapes the root directory
        """
        try:
            target = (self.root / path.lstrip("/")).resolve()
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL bytes
            raise FilesystemError("resolve", path, e) from e
        if target != self.root and self.root not in target.parents:
            raise FilesystemError("resolve", path, "Path outside filesystem root")
        return target

    async def read_file(self, path: str) -> bytes:
        target = self.resolve(path)
        try:
            async with aiofiles.open(target, "rb") as f:
                return await f.read()
        except (OSError, ValueError) as e:
            raise FilesystemError("read_file", path, e) from e

    async def write_file(self, path: str, text: str) -> None:
        target = self.resolve(path)
        await self._ensure_directory(target.parent, path)

        try:
            fd, temp_path = tempfile.mkstemp(dir=target.parent, prefix=".tmp_")
        except (OSError, ValueError) as e:
            raise FilesystemError("write_file", path, e) from e

        try:
            os.close(fd)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(text)
                await f.flush()
                os.fsync(f.fileno())

            await aiofiles.os.replace(temp_path, target)
        except (OSError, ValueError) as e:
            await self._discard(temp_path)
            raise FilesystemError("write_file", path, e) from e
        except BaseException:
            await self._discard(temp_path)
            raise

    async def list_files(self, path: str) -> list[str]:
        target = self.resolve(path)
        try:
            return sorted(await aiofiles.os.listdir(target))
        except (OSError, ValueError) as e:
            raise FilesystemError("list_files", path, e) from e

    async def create_dir(self, path: str) -> None:
        await self._ensure_directory(self.resolve(path), path)

    async def delete_dir(self, path: str) -> None:
        target = self.resolve(path)
        if target == self.root:
            raise FilesystemError("delete_dir", path, "Refusing to remove filesystem root")
        if not await aiofiles.os.path.isdir(target):
            raise FilesystemError("delete_dir", path, "Not a directory")
        try:
            await aiofiles.os.wrap(shutil.rmtree)(target)
        except (OSError, ValueError) as e:
            raise FilesystemError("delete_dir", path, e) from e

    async def delete_file(self, path: str) -> None:
        target = self.resolve(path)
        try:
            await aiofiles.os.remove(target)
        except (OSError, ValueError) as e:
            raise FilesystemError("delete_file", path, e) from e

    async def _discard(self, temp_path: str) -> None:
        try:
            await aiofiles.os.remove(temp_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temp file {temp_path}: {e}")

    async def _ensure_directory(self, target: Path, path: str) -> None:
        try:
            await aiofiles.os.makedirs(target, exist_ok=True)
        except (OSError, ValueError) as e:
            raise FilesystemError("create_dir", path, e) from e
