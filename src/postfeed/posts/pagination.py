"""Cursor pagination for the post feed.

Posts are paged newest first on ``created_at``. A cursor is the ISO-8601
creation timestamp of the last post on the previous page; the next page holds
posts created strictly before it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..dbmodels import Posts


class InvalidCursorError(ValueError):
    """Raised when a client-supplied cursor is not a creation timestamp."""


@dataclass(frozen=True)
class FirstPage:
    """The newest ``limit`` posts."""

    limit: int


@dataclass(frozen=True)
class PageAfter:
    """Up to ``limit`` posts created strictly before ``before``."""

    limit: int
    before: datetime


PostPageQuery = FirstPage | PageAfter


def encode_cursor(created_at: datetime) -> str:
    return created_at.isoformat()


def decode_cursor(cursor: str) -> datetime:
    try:
        return datetime.fromisoformat(cursor)
    except (TypeError, ValueError) as e:
        raise InvalidCursorError(f"Invalid cursor: {cursor!r}") from e


def effective_limit(requested: int, max_page_size: int) -> int:
    """Clamp the requested page size to ``[0, max_page_size]``."""
    return max(0, min(requested, max_page_size))


def build_page_query(limit: int, cursor: str | None, max_page_size: int) -> PostPageQuery:
    page_size = effective_limit(limit, max_page_size)
    if not cursor:
        return FirstPage(limit=page_size)
    return PageAfter(limit=page_size, before=decode_cursor(cursor))


def compute_has_more(
    query: PostPageQuery,
    page: Sequence[Posts],
    total_count: int,
    oldest: Posts | None,
) -> bool:
    """Decide whether older posts exist beyond ``page``.

    First page: more exist unless the page already holds every post.
    After a cursor: more exist unless the page ends on the globally oldest post.
    An empty page never has more.
    """
    if not page:
        return False
    if isinstance(query, FirstPage):
        return len(page) != total_count
    if oldest is None:
        return False
    return page[-1].created_at != oldest.created_at
