"""
Root GraphQL mutation definitions
"""

import strawberry

from ..access_control import IsAuthenticated
from ..types.responses import PostMutationResponse


# Input types for mutations
@strawberry.input
class CreatePostInput:
    """Input for creating a new post."""

    title: str
    text: str


@strawberry.input
class UpdatePostInput:
    """Input for updating a post."""

    id: strawberry.ID
    title: str
    text: str


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createPost")
    async def create_post(
        self, info: strawberry.Info, create_post_input: CreatePostInput
    ) -> PostMutationResponse:
        """Create a new post owned by the signed-in user."""
        from ..resolvers.post import create_post

        return await create_post(info, create_post_input)

    @strawberry.mutation(name="updatePost")
    async def update_post(
        self, info: strawberry.Info, update_post_input: UpdatePostInput
    ) -> PostMutationResponse:
        """Update the title and text of a post."""
        from ..resolvers.post import update_post

        return await update_post(info, update_post_input)

    @strawberry.mutation(name="deletePost", permission_classes=[IsAuthenticated])
    async def delete_post(self, info: strawberry.Info, id: strawberry.ID) -> PostMutationResponse:
        """Delete a post."""
        from ..resolvers.post import delete_post

        return await delete_post(info, id)
