"""
Root GraphQL query definitions
"""

import strawberry

from ..types.post import PaginatedPosts, Post


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="getPosts")
    async def get_posts(
        self, info: strawberry.Info, limit: int, cursor: str | None = None
    ) -> PaginatedPosts | None:
        """Get a page of posts, newest first. Pass the returned cursor to get older posts."""
        from ..resolvers.post import resolve_posts

        return await resolve_posts(info, limit, cursor)

    @strawberry.field(name="getPost")
    async def get_post(self, info: strawberry.Info, id: strawberry.ID) -> Post | None:
        """Get a post by ID."""
        from ..resolvers.post import resolve_post_by_id

        return await resolve_post_by_id(info, id)
