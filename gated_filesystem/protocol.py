"""
Wire types and operation variants for the gated filesystem.

Requests arrive as JSON objects with the fields ``operation``, ``path``,
``content``, ``old_text`` and ``new_text``. Results leave as JSON objects
with ``success``, ``data`` and ``error``. Between the two, every request is
turned into one of a closed set of operation variants, each carrying exactly
the fields its operation needs.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from .exceptions import MissingFieldError, RequestFormatError

# =============================================================================
# Operation Kinds
# =============================================================================


class OperationKind(Enum):
    """Operation names as they appear on the wire."""

    READ_FILE = "read-file"
    LIST_FILES = "list-files"
    WRITE_FILE = "write-file"
    CREATE_DIR = "create-dir"
    DELETE_DIR = "delete-dir"
    DELETE_FILE = "delete-file"
    EDIT_FILE = "edit-file"

    @classmethod
    def from_name(cls, name: str) -> OperationKind | None:
        """Look up a kind by wire name, returning None for unknown names."""
        try:
            return cls(name)
        except ValueError:
            return None


# Operations that may be delivered over the one-way protocol
SEND_OPERATIONS: frozenset[OperationKind] = frozenset(
    {
        OperationKind.WRITE_FILE,
        OperationKind.CREATE_DIR,
        OperationKind.DELETE_FILE,
        OperationKind.DELETE_DIR,
    }
)


# =============================================================================
# Operation Variants
# =============================================================================


@dataclass(frozen=True)
class ReadFile:
    path: str
    kind: ClassVar[OperationKind] = OperationKind.READ_FILE


@dataclass(frozen=True)
class ListFiles:
    path: str
    kind: ClassVar[OperationKind] = OperationKind.LIST_FILES


@dataclass(frozen=True)
class WriteFile:
    path: str
    content: str
    kind: ClassVar[OperationKind] = OperationKind.WRITE_FILE


@dataclass(frozen=True)
class CreateDir:
    path: str
    kind: ClassVar[OperationKind] = OperationKind.CREATE_DIR


@dataclass(frozen=True)
class DeleteDir:
    path: str
    kind: ClassVar[OperationKind] = OperationKind.DELETE_DIR


@dataclass(frozen=True)
class DeleteFile:
    path: str
    kind: ClassVar[OperationKind] = OperationKind.DELETE_FILE


@dataclass(frozen=True)
class EditFile:
    """Replace every occurrence of old_text with new_text in one file."""

    path: str
    old_text: str
    new_text: str
    kind: ClassVar[OperationKind] = OperationKind.EDIT_FILE


Operation = Union[ReadFile, ListFiles, WriteFile, CreateDir, DeleteDir, DeleteFile, EditFile]


# =============================================================================
# Request
# =============================================================================

_STRING_FIELDS = ("operation", "path", "content", "old_text", "new_text")
_REQUIRED_FIELDS = ("operation", "path")


def _is_valid_text(value: str) -> bool:
    """False for strings holding lone surrogates, which have no UTF-8 form."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


@dataclass(frozen=True)
class OperationRequest:
    """A decoded request, before its operation name has been resolved."""

    operation: str
    path: str
    content: str | None = None
    old_text: str | None = None
    new_text: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> OperationRequest:
        """Validate a decoded JSON value.

        Unknown keys are ignored. Optional fields may be absent or null.

        Raises:
            RequestFormatError: If the value is not a valid request object.
        """
        if not isinstance(data, dict):
            raise RequestFormatError(f"expected a JSON object, found {type(data).__name__}")

        for name in _REQUIRED_FIELDS:
            if name not in data:
                raise RequestFormatError(f"missing field `{name}`")

        for name in _STRING_FIELDS:
            value = data.get(name)
            if name in _REQUIRED_FIELDS and value is None:
                raise RequestFormatError(f"invalid type for field `{name}`: expected a string, found null")
            if value is not None and not isinstance(value, str):
                raise RequestFormatError(
                    f"invalid type for field `{name}`: expected a string, found {type(value).__name__}"
                )
            if value is not None and not _is_valid_text(value):
                raise RequestFormatError(f"invalid unicode in field `{name}`: lone surrogate")

        return cls(
            operation=data["operation"],
            path=data["path"],
            content=data.get("content"),
            old_text=data.get("old_text"),
            new_text=data.get("new_text"),
        )

    @classmethod
    def from_bytes(cls, message: bytes) -> OperationRequest:
        """Decode request bytes.

        Raises:
            RequestFormatError: If the bytes are not JSON or not a valid request.
        """
        try:
            data = json.loads(message)
        except ValueError as e:
            raise RequestFormatError(str(e)) from e
        except RecursionError as e:
            raise RequestFormatError("nesting too deep") from e
        return cls.from_dict(data)

    @property
    def kind(self) -> OperationKind | None:
        return OperationKind.from_name(self.operation)

    def to_operation(self) -> Operation:
        """Build the operation variant for this request.

        Raises:
            RequestFormatError: If the operation name is unknown.
            MissingFieldError: If a field the operation requires is absent.
        """
        kind = self.kind
        if kind is None:
            raise RequestFormatError(f"unknown operation `{self.operation}`")

        if kind is OperationKind.READ_FILE:
            return ReadFile(self.path)
        if kind is OperationKind.LIST_FILES:
            return ListFiles(self.path)
        if kind is OperationKind.WRITE_FILE:
            if self.content is None:
                raise MissingFieldError("Content not provided", ("content",))
            return WriteFile(self.path, self.content)
        if kind is OperationKind.CREATE_DIR:
            return CreateDir(self.path)
        if kind is OperationKind.DELETE_DIR:
            return DeleteDir(self.path)
        if kind is OperationKind.DELETE_FILE:
            return DeleteFile(self.path)
        if self.old_text is None or self.new_text is None:
            raise MissingFieldError(
                "Both old_text and new_text must be provided", ("old_text", "new_text")
            )
        return EditFile(self.path, self.old_text, self.new_text)


# =============================================================================
# Result
# =============================================================================


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one request.

    A successful result never carries an error and a failed result never
    carries data. Use ok() and fail() rather than the constructor.
    """

    success: bool
    data: Any = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.success and self.data is not None:
            raise ValueError("failed result cannot carry data")

    @classmethod
    def ok(cls, data: Any = None) -> OperationResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> OperationResult:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"success": self.success, "data": self.data, "error": self.error}

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> OperationResult:
        """Decode a serialized result, as seen by a caller of the actor."""
        raw = json.loads(data)
        return cls(success=raw["success"], data=raw.get("data"), error=raw.get("error"))
