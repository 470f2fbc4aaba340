"""Access control module for filesystem operations."""

from .controller import AccessController
from .permissions import REQUIRED_PERMISSIONS, AccessDecision, Permission, required_permission

__all__ = [
    "AccessController",
    "AccessDecision",
    "Permission",
    "REQUIRED_PERMISSIONS",
    "required_permission",
]
