"""Session-based authentication and ownership checks for postfeed."""

from .access_control import is_resource_owner
from .context import ANONYMOUS, AuthContext
from .session import get_auth_context_from_request

__all__ = [
    "ANONYMOUS",
    "AuthContext",
    "get_auth_context_from_request",
    "is_resource_owner",
]
