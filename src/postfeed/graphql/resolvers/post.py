from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...config import settings
from ...database.connection import get_async_session
from ...dbmodels import Posts
from ...logging import get_logger
from ...posts.service import MSG_NOT_FOUND, NOT_FOUND, MutationResult, PostService
from ..access_control import get_auth_context_from_info

if TYPE_CHECKING:
    from ..mutations.root import CreatePostInput, UpdatePostInput
    from ..types.post import PaginatedPosts, Post
    from ..types.responses import PostMutationResponse
    from ..types.user import User

logger = get_logger(__name__)


def parse_post_id(id: strawberry.ID | str | int) -> int | None:
    """Convert a GraphQL ID to a post primary key, or None if it cannot be one."""
    try:
        return int(id)
    except (TypeError, ValueError):
        return None


def post_to_graphql(post: Posts) -> Post:
    """Convert a SQLAlchemy post to its GraphQL type."""
    from ..types.post import Post as PostType

    return PostType(
        id=strawberry.ID(str(post.id)),
        title=post.title,
        text=post.text,
        user_id=post.user_id,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def to_mutation_response(result: MutationResult) -> PostMutationResponse:
    from ..types.responses import PostMutationResponse

    return PostMutationResponse(
        code=result.code,
        success=result.success,
        message=result.message,
        post=post_to_graphql(result.post) if result.post is not None else None,
    )


# Query resolvers
async def resolve_posts(
    info: strawberry.Info, limit: int, cursor: str | None = None
) -> PaginatedPosts | None:
    """
    Resolve one page of the post feed.

    The page size is capped at ``settings.posts_max_page_size``; returns None
    when the feed cannot be read or the cursor is malformed.
    """
    async with get_async_session() as session:
        page = await PostService(session).get_posts(limit, cursor)

    if page is None:
        return None

    from ..types.post import PaginatedPosts as PaginatedPostsType

    return PaginatedPostsType(
        total_count=page.total_count,
        cursor=page.cursor,
        has_more=page.has_more,
        paginated_posts=[post_to_graphql(post) for post in page.posts],
    )


async def resolve_post_by_id(info: strawberry.Info, id: strawberry.ID) -> Post | None:
    post_id = parse_post_id(id)
    if post_id is None:
        logger.info("Post lookup with malformed id", post_id=str(id))
        return None

    async with get_async_session() as session:
        post = await PostService(session).get_post(post_id)

    return post_to_graphql(post) if post is not None else None


# Post field resolvers
def resolve_text_snippet(post: Post) -> str:
    return post.text[: settings.text_snippet_length]


async def resolve_post_user(post: Post, info: strawberry.Info) -> User | None:
    """Resolve the author of a post through the request's user loader."""
    user = await info.context["loaders"].user_loader.load(post.user_id)
    if user is None:
        logger.warning("Post author not found", post_id=str(post.id), user_id=post.user_id)
        return None

    from .user import user_to_graphql

    return user_to_graphql(user)


# Mutation resolvers
async def create_post(info: strawberry.Info, input: CreatePostInput) -> PostMutationResponse:
    """
    Create a new post.

    The caller from the session becomes the owner of the post.
    """
    auth_context = get_auth_context_from_info(info)

    async with get_async_session() as session:
        result = await PostService(session).create_post(
            input.title, input.text, auth_context.user_id
        )

    return to_mutation_response(result)


async def update_post(info: strawberry.Info, input: UpdatePostInput) -> PostMutationResponse:
    """
    Update the title and text of an existing post.

    Only the post owner can update it.
    """
    post_id = parse_post_id(input.id)
    if post_id is None:
        return to_mutation_response(
            MutationResult(code=NOT_FOUND, success=False, message=MSG_NOT_FOUND)
        )

    auth_context = get_auth_context_from_info(info)

    async with get_async_session() as session:
        result = await PostService(session).update_post(
            post_id, input.title, input.text, auth_context.user_id
        )

    return to_mutation_response(result)


async def delete_post(info: strawberry.Info, id: strawberry.ID) -> PostMutationResponse:
    """
    Delete a post.

    Only the post owner can delete it. The response carries the deleted post.
    """
    post_id = parse_post_id(id)
    if post_id is None:
        return to_mutation_response(
            MutationResult(code=NOT_FOUND, success=False, message=MSG_NOT_FOUND)
        )

    auth_context = get_auth_context_from_info(info)

    async with get_async_session() as session:
        result = await PostService(session).delete_post(post_id, auth_context.user_id)

    return to_mutation_response(result)
