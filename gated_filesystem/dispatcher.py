"""
Permission-gated request dispatcher.

Implements the two entry protocols of the filesystem actor:

- handle_request: request/response. Always produces an OperationResult,
  even for malformed input.
- handle_send: one-way. Only mutating operations are performed and every
  failure is swallowed, since the protocol has no reply channel.

Both are single-step transitions (state, message) -> (result?, state). The
session state is decoded, consulted and re-serialized unchanged; nothing is
remembered between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from .access import AccessController
from .backends import FilesystemBackend
from .exceptions import FilesystemError, MissingFieldError, RequestFormatError
from .logging_utils import OperationLoggerAdapter
from .protocol import (
    SEND_OPERATIONS,
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
from .session import SessionState

logger = logging.getLogger(__name__)

UNSUPPORTED_OPERATION = "Operation not supported for request type"

# Called with (error, operation name) for every outcome swallowed by handle_send
SendErrorHook = Callable[[str, str | None], None]


class RequestDispatcher:
    """
    Decision engine of the filesystem actor.

    Parses a request, authorizes it against the session's permissions,
    executes it against the filesystem backend and shapes the outcome into an
    OperationResult.
    """

    def __init__(
        self,
        backend: FilesystemBackend,
        access: AccessController | None = None,
        on_send_error: SendErrorHook | None = None,
    ):
        """Initialize the dispatcher.

        Args:
            backend: Filesystem collaborator performing the primitives.
            access: Access controller, a default one when omitted.
            on_send_error: Optional diagnostic hook for failures swallowed on
                the one-way path. Never affects returned state.
        """
        self.backend = backend
        self.access = access or AccessController()
        self.on_send_error = on_send_error
        self._handlers: dict[OperationKind, Callable[..., Awaitable[OperationResult]]] = {
            OperationKind.READ_FILE: self._read_file,
            OperationKind.LIST_FILES: self._list_files,
            OperationKind.WRITE_FILE: self._write_file,
            OperationKind.CREATE_DIR: self._create_dir,
            OperationKind.DELETE_DIR: self._delete_dir,
            OperationKind.DELETE_FILE: self._delete_file,
            OperationKind.EDIT_FILE: self._edit_file,
        }

    # =========================================================================
    # Entry protocols
    # =========================================================================

    async def handle_request(self, message: bytes, state: bytes) -> tuple[bytes, bytes]:
        """Handle a request/response call.

        Raises:
            StateCorruptionError: If the state bytes are invalid.
        """
        session = SessionState.from_bytes(state)

        try:
            request = OperationRequest.from_bytes(message)
        except RequestFormatError as e:
            logger.info(f"Invalid request format: {e}")
            result = OperationResult.fail(f"Invalid request format: {e}")
        else:
            result = await self.dispatch(session, request)

        return result.to_bytes(), session.to_bytes()

    async def handle_send(self, message: bytes, state: bytes) -> bytes:
        """Handle a one-way call. Returns the unchanged state.

        Raises:
            StateCorruptionError: If the state bytes are invalid.
        """
        session = SessionState.from_bytes(state)

        try:
            request = OperationRequest.from_bytes(message)
        except RequestFormatError as e:
            self._report_send_error(f"Invalid request format: {e}", None)
            return session.to_bytes()

        if request.kind not in SEND_OPERATIONS:
            self._report_send_error(f"Operation not supported for send: {request.operation}", request.operation)
            return session.to_bytes()

        result = await self.dispatch(session, request)
        if not result.success:
            self._report_send_error(result.error or "", request.operation)

        return session.to_bytes()

    # =========================================================================
    # Core
    # =========================================================================

    async def dispatch(self, state: SessionState, request: OperationRequest) -> OperationResult:
        """Authorize and execute one decoded request."""
        kind = request.kind
        if kind is None:
            logger.info(f"Operation not supported: {request.operation}")
            return OperationResult.fail(UNSUPPORTED_OPERATION)

        decision = self.access.check(state, kind)
        if not decision.allowed:
            return OperationResult.fail(decision.denial_message)

        try:
            operation = request.to_operation()
        except MissingFieldError as e:
            logger.info(f"{kind.value} rejected: {e.message}")
            return OperationResult.fail(e.message)

        return await self.execute(operation)

    async def execute(self, operation: Operation) -> OperationResult:
        """Run an already authorized operation against the backend."""
        log = OperationLoggerAdapter.for_operation(logger, operation)
        return await self._handlers[operation.kind](operation, log)

    def _report_send_error(self, error: str, operation: str | None) -> None:
        logger.info(f"Send dropped: {error}")
        if self.on_send_error is not None:
            self.on_send_error(error, operation)

    # =========================================================================
    # Operation handlers
    # =========================================================================

    async def _read_file(self, op: ReadFile, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Reading file: {op.path}")
        try:
            content = await self.backend.read_file(op.path)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to read file: {e}")
        return OperationResult.ok(content.decode("utf-8", errors="replace"))

    async def _list_files(self, op: ListFiles, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Listing files in: {op.path}")
        try:
            entries = await self.backend.list_files(op.path)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to list files: {e}")
        return OperationResult.ok(list(entries))

    async def _write_file(self, op: WriteFile, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Writing file: {op.path}")
        try:
            await self.backend.write_file(op.path, op.content)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to write file: {e}")
        return OperationResult.ok()

    async def _create_dir(self, op: CreateDir, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Creating directory: {op.path}")
        try:
            await self.backend.create_dir(op.path)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to create directory: {e}")
        return OperationResult.ok()

    async def _delete_dir(self, op: DeleteDir, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Deleting directory: {op.path}")
        try:
            await self.backend.delete_dir(op.path)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to delete directory: {e}")
        return OperationResult.ok()

    async def _delete_file(self, op: DeleteFile, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Deleting file: {op.path}")
        try:
            await self.backend.delete_file(op.path)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to delete file: {e}")
        return OperationResult.ok()

    async def _edit_file(self, op: EditFile, log: logging.LoggerAdapter) -> OperationResult:
        log.info(f"Editing file: {op.path}")
        try:
            content = await self.backend.read_file(op.path)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to read file for editing: {e}")

        # Written back even when old_text does not occur
        edited = content.decode("utf-8", errors="replace").replace(op.old_text, op.new_text)
        try:
            await self.backend.write_file(op.path, edited)
        except (FilesystemError, OSError) as e:
            return OperationResult.fail(f"Failed to write edited file: {e}")
        return OperationResult.ok()
