"""
Shared test configuration and fixtures.

Provides an in-memory filesystem backend that records every primitive call,
so tests can assert that denied or rejected requests never reach the disk.
"""

import json
import posixpath
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from gated_filesystem.backends import FilesystemBackend
from gated_filesystem.exceptions import FilesystemError


class RecordingFilesystem(FilesystemBackend):
    """
    In-memory filesystem backend for testing.

    Files map normalized paths to bytes; directories are a set of paths.
    Every call is appended to ``calls`` as (method, path).
    """

    def __init__(self, files: dict[str, str | bytes] | None = None, dirs: list[str] | None = None):
        self.files: dict[str, bytes] = {}
        self.dirs: set[str] = {"/"}
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[str, str] = {}
        for path in dirs or []:
            self._add_dir(path)
        for path, content in (files or {}).items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            self._add_dir(posixpath.dirname(self._norm(path)))
            self.files[self._norm(path)] = data

    @staticmethod
    def _norm(path: str) -> str:
        return posixpath.normpath("/" + path.lstrip("/"))

    def _add_dir(self, path: str) -> None:
        path = self._norm(path)
        while path not in self.dirs:
            self.dirs.add(path)
            path = posixpath.dirname(path)

    def _record(self, method: str, path: str) -> str:
        self.calls.append((method, path))
        if method in self.fail_on:
            raise FilesystemError(method, path, self.fail_on[method])
        return self._norm(path)

    async def read_file(self, path: str) -> bytes:
        key = self._record("read_file", path)
        if key not in self.files:
            raise FilesystemError("read_file", path, "No such file or directory")
        return self.files[key]

    async def write_file(self, path: str, text: str) -> None:
        key = self._record("write_file", path)
        if posixpath.dirname(key) not in self.dirs:
            raise FilesystemError("write_file", path, "No such file or directory")
        self.files[key] = text.encode("utf-8")

    async def list_files(self, path: str) -> list[str]:
        key = self._record("list_files", path)
        if key not in self.dirs:
            raise FilesystemError("list_files", path, "No such file or directory")
        entries = {p for p in self.files if posixpath.dirname(p) == key}
        entries |= {d for d in self.dirs if d != key and posixpath.dirname(d) == key}
        return sorted(posixpath.basename(p) for p in entries)

    async def create_dir(self, path: str) -> None:
        self._add_dir(self._record("create_dir", path))

    async def delete_dir(self, path: str) -> None:
        key = self._record("delete_dir", path)
        if key not in self.dirs:
            raise FilesystemError("delete_dir", path, "No such file or directory")
        prefix = key.rstrip("/") + "/"
        self.dirs = {d for d in self.dirs if d != key and not d.startswith(prefix)}
        self.files = {f: c for f, c in self.files.items() if not f.startswith(prefix)}

    async def delete_file(self, path: str) -> None:
        key = self._record("delete_file", path)
        if key not in self.files:
            raise FilesystemError("delete_file", path, "No such file or directory")
        del self.files[key]

    def text(self, path: str) -> str:
        return self.files[self._norm(path)].decode("utf-8")


def state_bytes(*permissions: str) -> bytes:
    """Canonical serialized session state with the given permissions."""
    return json.dumps({"permissions": sorted(permissions)}, separators=(",", ":")).encode()


def request_bytes(**fields: object) -> bytes:
    """Serialize a request object."""
    return json.dumps(fields).encode()


@pytest.fixture
def fs() -> RecordingFilesystem:
    """Recording in-memory filesystem with a small tree."""
    return RecordingFilesystem(
        files={
            "/a.txt": "hello world",
            "/docs/a.txt": "alpha",
            "/docs/b.txt": "beta",
        }
    )


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
