"""Access control for filesystem operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..protocol import OperationKind
from .permissions import AccessDecision, required_permission

if TYPE_CHECKING:
    from ..session import SessionState

logger = logging.getLogger(__name__)


class AccessController:
    """Centralized permission check for the dispatcher.

    A session is allowed an operation exactly when its permission set
    contains the label the operation kind requires. Permissions never change
    during a call, so the controller keeps no state of its own.
    """

    def check(self, state: SessionState, kind: OperationKind) -> AccessDecision:
        """Check whether a session may perform an operation.

        Args:
            state: Session whose granted permissions are consulted
            kind: Operation being attempted

        Returns:
            AccessDecision carrying the required permission level
        """
        required = required_permission(kind)

        context = {"operation": kind.value, "permission": required.value}

        if state.has(required):
            logger.debug(f"{kind.value}: {required.value} permission granted", extra={**context, "decision": "granted"})
            return AccessDecision(allowed=True, reason="granted", permission_level=required)

        logger.info(f"{required.verb} permission denied for {kind.value}", extra={**context, "decision": "denied"})
        return AccessDecision(allowed=False, reason="missing_permission", permission_level=required)
