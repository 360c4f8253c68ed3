"""
Post access service.

Every operation runs inside its own error boundary: domain outcomes (not
found, not the owner) come back as structured results, and any store failure
is rolled back, logged and turned into a 500 result (or ``None`` for reads).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.access_control import is_resource_owner
from ..config import settings
from ..dbmodels import Posts
from ..logging import get_logger
from . import repository
from .pagination import (
    InvalidCursorError,
    PageAfter,
    build_page_query,
    compute_has_more,
    encode_cursor,
)

logger = get_logger(__name__)

# Response codes
SUCCESS = 200
NOT_FOUND = 400
UNAUTHORIZED = 401
SERVER_ERROR = 500

MSG_CREATED = "Post created successfully"
MSG_UPDATED = "Post updated successfully"
MSG_DELETED = "Post deleted successfully"
MSG_NOT_FOUND = "Post not found"
MSG_NOT_OWNER = "You are not allowed to modify this post"
MSG_NOT_AUTHENTICATED = "You must be signed in to create a post"


@dataclass
class MutationResult:
    code: int
    success: bool
    message: str
    post: Posts | None = None


@dataclass
class PostPage:
    total_count: int
    posts: list[Posts] = field(default_factory=list)
    cursor: str | None = None
    has_more: bool = False


def server_error(error: Exception) -> MutationResult:
    return MutationResult(
        code=SERVER_ERROR, success=False, message=f"Server Internal Error {error}"
    )


class PostService:
    """Reads and writes posts for one request, on one session."""

    def __init__(self, session: AsyncSession, max_page_size: int | None = None):
        self.session = session
        self.max_page_size = (
            settings.posts_max_page_size if max_page_size is None else max_page_size
        )

    async def create_post(self, title: str, text: str, caller_id: int | None) -> MutationResult:
        """Create a post owned by the caller."""
        if caller_id is None:
            return MutationResult(code=UNAUTHORIZED, success=False, message=MSG_NOT_AUTHENTICATED)

        try:
            post = await repository.create_post(
                self.session, title=title, text=text, user_id=caller_id
            )
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create post", user_id=caller_id, error=str(e))
            return server_error(e)

        logger.info("Post created", post_id=post.id, user_id=caller_id)
        return MutationResult(code=SUCCESS, success=True, message=MSG_CREATED, post=post)

    async def get_posts(self, limit: int, cursor: str | None = None) -> PostPage | None:
        """
        Return one page of the feed, newest first.

        ``total_count`` is recomputed on every call, so it may disagree with
        the page under concurrent writes.
        """
        try:
            query = build_page_query(limit, cursor, self.max_page_size)
            total_count = await repository.count_posts(self.session)

            oldest = None
            if isinstance(query, PageAfter):
                oldest = await repository.get_oldest_post(self.session)

            posts = list(await repository.find_posts(self.session, query))
        except InvalidCursorError as e:
            logger.warning("Rejected post feed cursor", cursor=cursor, error=str(e))
            return None
        except Exception as e:
            logger.error("Failed to load post feed", limit=limit, cursor=cursor, error=str(e))
            return None

        return PostPage(
            total_count=total_count,
            posts=posts,
            cursor=encode_cursor(posts[-1].created_at) if posts else None,
            has_more=compute_has_more(query, posts, total_count, oldest),
        )

    async def get_post(self, post_id: int) -> Posts | None:
        try:
            return await repository.get_post(self.session, post_id)
        except Exception as e:
            logger.error("Failed to load post", post_id=post_id, error=str(e))
            return None

    async def update_post(
        self, post_id: int, title: str, text: str, caller_id: int | None
    ) -> MutationResult:
        """Overwrite title and text; only the owner may do this."""
        try:
            post = await repository.get_post(self.session, post_id)
            denied = self._check_post_access(post, caller_id)
            if denied is not None:
                return denied

            post.title = title
            post.text = text
            await repository.save_post(self.session, post)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update post", post_id=post_id, error=str(e))
            return server_error(e)

        logger.info("Post updated", post_id=post_id, user_id=caller_id)
        return MutationResult(code=SUCCESS, success=True, message=MSG_UPDATED, post=post)

    async def delete_post(self, post_id: int, caller_id: int | None) -> MutationResult:
        """Delete a post; only the owner may do this. Returns the deleted post."""
        try:
            post = await repository.get_post(self.session, post_id)
            denied = self._check_post_access(post, caller_id)
            if denied is not None:
                return denied

            await repository.delete_post(self.session, post_id)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete post", post_id=post_id, error=str(e))
            return server_error(e)

        logger.info("Post deleted", post_id=post_id, user_id=caller_id)
        return MutationResult(code=SUCCESS, success=True, message=MSG_DELETED, post=post)

    def _check_post_access(self, post: Posts | None, caller_id: int | None) -> MutationResult | None:
        if post is None:
            return MutationResult(code=NOT_FOUND, success=False, message=MSG_NOT_FOUND)
        if not is_resource_owner(post.user_id, caller_id):
            logger.info("Post access denied", post_id=post.id, user_id=caller_id)
            return MutationResult(code=UNAUTHORIZED, success=False, message=MSG_NOT_OWNER)
        return None
