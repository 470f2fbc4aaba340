"""
Gated Filesystem

Permission-gated filesystem operation dispatcher.

Provides:
- Session state carrying the granted permission set (read, write, delete)
- Request/response and one-way entry protocols over JSON messages
- Seven operations: read-file, list-files, write-file, create-dir,
  delete-dir, delete-file, edit-file
- Pluggable filesystem backends (local disk included)

Usage:

    >>> from gated_filesystem import FilesystemActor, LocalFilesystem
    >>> actor = FilesystemActor(LocalFilesystem("/srv/data"))
    >>> state = actor.init(b'{"permissions": ["read", "write"]}')
    >>> result, state = await actor.handle_request(
    ...     b'{"operation": "write-file", "path": "/notes.txt", "content": "hi"}',
    ...     state,
    ... )
"""

# Access control
from .access import AccessController, AccessDecision, Permission, required_permission

# Actor binding
from .actor import FilesystemActor, create_actor, mount

# Backends
from .backends import FilesystemBackend, LocalFilesystem

# Configuration
from .config import ActorConfig
from .dispatcher import RequestDispatcher

# Exceptions
from .exceptions import (
    ConfigurationError,
    FilesystemError,
    GatedFilesystemError,
    MissingFieldError,
    RequestFormatError,
    StateCorruptionError,
)

# Protocol types
from .protocol import (
    CreateDir,
    DeleteDir,
    DeleteFile,
    EditFile,
    ListFiles,
    Operation,
    OperationKind,
    OperationRequest,
    OperationResult,
    ReadFile,
    WriteFile,
)

# Session state
from .session import DEFAULT_PERMISSIONS, SessionState, initialize_state

__all__ = [
    # Actor
    "FilesystemActor",
    "RequestDispatcher",
    "create_actor",
    "mount",
    # Session
    "SessionState",
    "DEFAULT_PERMISSIONS",
    "initialize_state",
    # Access
    "AccessController",
    "AccessDecision",
    "Permission",
    "required_permission",
    # Protocol
    "OperationKind",
    "OperationRequest",
    "OperationResult",
    "Operation",
    "ReadFile",
    "ListFiles",
    "WriteFile",
    "CreateDir",
    "DeleteDir",
    "DeleteFile",
    "EditFile",
    # Backends
    "FilesystemBackend",
    "LocalFilesystem",
    # Config
    "ActorConfig",
    # Exceptions
    "GatedFilesystemError",
    "FilesystemError",
    "StateCorruptionError",
    "RequestFormatError",
    "MissingFieldError",
    "ConfigurationError",
]

__version__ = "0.1.0"
