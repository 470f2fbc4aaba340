"""
Custom exceptions for the gated filesystem.

Backends raise FilesystemError for every failed primitive so the dispatcher
can fold the description into an operation result. StateCorruptionError is
the only exception that escapes the dispatcher entry points.
"""


class GatedFilesystemError(Exception):
    """Base exception for all gated filesystem errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FilesystemError(GatedFilesystemError):
    """Raised by a filesystem backend when a primitive operation fails.

    The string form is the human-readable description that ends up verbatim
    in the ``error`` field of an operation result.
    """

    def __init__(self, operation: str, path: str | None = None, cause: Exception | str | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)

        if isinstance(cause, OSError) and cause.strerror:
            message = cause.strerror
        elif cause:
            message = str(cause)
        else:
            message = f"{operation} failed"
        if path:
            message += f": {path}"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class StateCorruptionError(GatedFilesystemError):
    """Raised when serialized session state handed back by the host is invalid.

    Reconstructing permissions from corrupt state would silently change the
    privileges of the session, so this is never recovered from.
    """

    def __init__(self, reason: str):
        super().__init__(f"Corrupted session state: {reason}", {"reason": reason})
        self.reason = reason


class RequestFormatError(GatedFilesystemError):
    """Raised when request bytes cannot be decoded into an operation request."""

    def __init__(self, reason: str):
        super().__init__(reason, {"reason": reason})
        self.reason = reason


class MissingFieldError(GatedFilesystemError):
    """Raised when an operation lacks a field it requires."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()):
        super().__init__(message, {"fields": list(fields)})
        self.fields = fields


class ConfigurationError(GatedFilesystemError):
    """Raised when actor configuration holds invalid values."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid configuration for {field}: {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason
