"""
Post GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from .user import User


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: strawberry.ID
    title: str
    text: str
    user_id: int
    created_at: datetime
    updated_at: datetime

    @strawberry.field
    def text_snippet(self) -> str:
        """Get the opening characters of the post body."""
        from ..resolvers.post import resolve_text_snippet

        return resolve_text_snippet(self)

    @strawberry.field
    async def user(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:  # noqa: E501
        """Get the author of this post."""
        from ..resolvers.post import resolve_post_user

        return await resolve_post_user(self, info)


@strawberry.type
class PaginatedPosts:
    """One page of the post feed, newest first."""

    total_count: int
    cursor: str | None
    has_more: bool
    paginated_posts: list[Post]
