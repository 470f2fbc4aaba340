"""Session state for the gated filesystem actor."""

from .state import DEFAULT_PERMISSIONS, SessionState, initialize_state

__all__ = ["DEFAULT_PERMISSIONS", "SessionState", "initialize_state"]
