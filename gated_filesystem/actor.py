"""
Host-facing actor binding.

The host instantiates the actor, calls init() once with optional config
bytes, stores the returned state bytes and hands them back on every
subsequent handle_request() or handle_send() call.

Usage:

    >>> actor = create_actor(root_dir="/srv/data", permissions=["read", "write"])
    >>> state = actor.init(actor.config.init_bytes())
    >>> result, state = await actor.handle_request(b'{"operation": "list-files", "path": "/"}', state)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .backends import FilesystemBackend, LocalFilesystem
from .config import ActorConfig
from .dispatcher import RequestDispatcher, SendErrorHook
from .logging_utils import configure_structured_logging
from .session import initialize_state

logger = logging.getLogger(__name__)


class FilesystemActor:
    """Permission-gated filesystem actor."""

    def __init__(
        self,
        backend: FilesystemBackend,
        config: ActorConfig | None = None,
        on_send_error: SendErrorHook | None = None,
    ):
        self.config = config or ActorConfig()
        self.dispatcher = RequestDispatcher(backend, on_send_error=on_send_error)

    @property
    def backend(self) -> FilesystemBackend:
        return self.dispatcher.backend

    def init(self, data: bytes | None = None) -> bytes:
        """Produce the initial session state bytes."""
        logger.info("Initializing")
        return initialize_state(data).to_bytes()

    async def handle_request(self, message: bytes, state: bytes) -> tuple[bytes, bytes]:
        logger.info("Handling request")
        logger.debug(f"Message: {message!r}")
        return await self.dispatcher.handle_request(message, state)

    async def handle_send(self, message: bytes, state: bytes) -> bytes:
        logger.info("Handling send")
        logger.debug(f"Message: {message!r}")
        return await self.dispatcher.handle_send(message, state)


def create_actor(**config: Any) -> FilesystemActor:
    """Factory function for creating an actor over the local disk.

    Args:
        **config: Settings as accepted by ActorConfig.from_dict, plus an
            optional ``on_send_error`` hook.

    Returns:
        Configured FilesystemActor instance.
    """
    on_send_error = config.pop("on_send_error", None)
    if isinstance(config.get("root_dir"), Path):
        config["root_dir"] = str(config["root_dir"])

    actor_config = ActorConfig.from_dict(config)
    if actor_config.structured_logging:
        configure_structured_logging(actor_config.log_level)
    else:
        logging.getLogger("gated_filesystem").setLevel(actor_config.log_level)

    backend = LocalFilesystem(actor_config.root_dir)
    return FilesystemActor(backend, actor_config, on_send_error=on_send_error)


def mount(coordinator: Any = None, config: dict[str, Any] | None = None) -> FilesystemActor:
    """Standard module entry point.

    Args:
        coordinator: Host coordinator instance (unused, for protocol compliance).
        config: Actor configuration dictionary.

    Returns:
        Configured FilesystemActor instance.
    """
    config = config or {}
    return create_actor(**config)
