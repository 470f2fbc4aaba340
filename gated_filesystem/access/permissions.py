"""Permission types for access control."""

from dataclasses import dataclass
from enum import Enum

from ..protocol import OperationKind


class Permission(Enum):
    """Well-known permission labels.

    Sessions may hold other labels too; they are kept but grant nothing.
    """

    READ = "read"
    WRITE = "write"
    DELETE = "delete"

    @property
    def verb(self) -> str:
        """Capitalized label used in denial messages."""
        return self.value.capitalize()


REQUIRED_PERMISSIONS: dict[OperationKind, Permission] = {
    OperationKind.READ_FILE: Permission.READ,
    OperationKind.LIST_FILES: Permission.READ,
    OperationKind.WRITE_FILE: Permission.WRITE,
    OperationKind.CREATE_DIR: Permission.WRITE,
    OperationKind.EDIT_FILE: Permission.WRITE,
    OperationKind.DELETE_FILE: Permission.DELETE,
    OperationKind.DELETE_DIR: Permission.DELETE,
}


def required_permission(kind: OperationKind) -> Permission:
    """Permission a session must hold to perform an operation of this kind."""
    return REQUIRED_PERMISSIONS[kind]


@dataclass(frozen=True)
class AccessDecision:
    """Result of an access control check."""

    allowed: bool
    reason: str
    permission_level: Permission | None = None

    @property
    def denial_message(self) -> str | None:
        """Error text for a denied decision, None when allowed."""
        if self.allowed or self.permission_level is None:
            return None
        return f"{self.permission_level.verb} permission denied"
