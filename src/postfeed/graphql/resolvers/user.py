from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...dbmodels import Users

if TYPE_CHECKING:
    from ..types.user import User


def user_to_graphql(user: Users) -> User:
    """Convert a SQLAlchemy user to its GraphQL type."""
    from ..types.user import User as UserType

    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
