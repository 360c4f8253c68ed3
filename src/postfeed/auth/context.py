"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthContext:
    """Who is calling, as read from the request session."""

    user_id: int | None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


ANONYMOUS = AuthContext(user_id=None)
