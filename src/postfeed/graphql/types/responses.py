"""
Mutation response GraphQL type definitions
"""

import strawberry

from .post import Post


@strawberry.interface
class MutationResponse:
    """Outcome shared by every mutation: an HTTP-like code, a flag and a message."""

    code: int
    success: bool
    message: str | None = None


@strawberry.type
class PostMutationResponse(MutationResponse):
    post: Post | None = None
