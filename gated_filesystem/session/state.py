"""
Session state threaded through every dispatcher call.

The state holds the permission set granted when the actor was initialized.
It is a frozen value: handlers receive it, consult it, and hand back a
freshly serialized copy of the same value.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..access.permissions import Permission
from ..exceptions import StateCorruptionError

logger = logging.getLogger(__name__)

# Fallback when initialization config is absent or unreadable: least privilege
DEFAULT_PERMISSIONS: frozenset[str] = frozenset({Permission.READ.value})


def _parse_permissions(raw: Any) -> frozenset[str] | None:
    """Extract the permission list from a decoded config or state object."""
    if not isinstance(raw, dict):
        return None
    permissions = raw.get("permissions")
    if not isinstance(permissions, list):
        return None
    if not all(isinstance(label, str) for label in permissions):
        return None
    return frozenset(permissions)


@dataclass(frozen=True)
class SessionState:
    """Granted permissions for the lifetime of one actor instance."""

    permissions: frozenset[str] = field(default_factory=lambda: DEFAULT_PERMISSIONS)

    @classmethod
    def of(cls, permissions: Iterable[Permission | str]) -> SessionState:
        """Build a state from labels or Permission members."""
        return cls(
            frozenset(p.value if isinstance(p, Permission) else p for p in permissions)
        )

    def has(self, permission: Permission | str) -> bool:
        """Return True if the permission is granted."""
        label = permission.value if isinstance(permission, Permission) else permission
        return label in self.permissions

    def to_dict(self) -> dict[str, Any]:
        return {"permissions": sorted(self.permissions)}

    def to_bytes(self) -> bytes:
        """Canonical serialized form, re-derived from the parsed value."""
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> SessionState:
        """Deserialize state handed back by the host.

        Raises:
            StateCorruptionError: If the bytes are not a valid state object.
        """
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise StateCorruptionError(str(e)) from e
        except RecursionError as e:
            raise StateCorruptionError("nesting too deep") from e

        permissions = _parse_permissions(raw)
        if permissions is None:
            raise StateCorruptionError("expected an object with a `permissions` list of strings")
        return cls(permissions)


def initialize_state(config: bytes | None) -> SessionState:
    """Create the session state from optional initialization bytes.

    Config of the form ``{"permissions": ["read", "write"]}`` grants exactly
    those labels. Missing or unreadable config falls back to
    DEFAULT_PERMISSIONS; this function never raises.

    Args:
        config: Raw initialization bytes supplied by the host, if any

    Returns:
        The session state for the actor's lifetime
    """
    if config is None:
        logger.info("No initialization config, using default permissions")
        return SessionState(DEFAULT_PERMISSIONS)

    try:
        raw = json.loads(config)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Unreadable initialization config, using default permissions: {e}")
        return SessionState(DEFAULT_PERMISSIONS)

    permissions = _parse_permissions(raw)
    if permissions is None:
        logger.warning("Initialization config has no permission list, using default permissions")
        return SessionState(DEFAULT_PERMISSIONS)

    logger.info(f"Permissions: {sorted(permissions)}")
    return SessionState(permissions)
