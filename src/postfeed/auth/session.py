"""Resolve the caller from the signed session cookie."""

from __future__ import annotations

from starlette.requests import HTTPConnection

from ..config import settings
from ..logging import get_logger
from .context import ANONYMOUS, AuthContext

logger = get_logger(__name__)


def get_auth_context_from_request(request: HTTPConnection | None) -> AuthContext:
    """
    Build an AuthContext from ``request.session``.

    The session is written by the login flow and signed by starlette's
    SessionMiddleware; this only reads it. Missing middleware, a missing key
    or a malformed value all yield an anonymous context.
    """
    if request is None or "session" not in request.scope:
        return ANONYMOUS

    raw_user_id = request.session.get(settings.session_user_key)
    if raw_user_id is None:
        return ANONYMOUS

    try:
        user_id = int(raw_user_id)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed session user id", raw_user_id=repr(raw_user_id))
        return ANONYMOUS

    return AuthContext(user_id=user_id)
