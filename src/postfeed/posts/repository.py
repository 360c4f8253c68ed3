"""Repository helpers for post persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Posts, utcnow
from .pagination import FirstPage, PageAfter, PostPageQuery


async def create_post(session: AsyncSession, *, title: str, text: str, user_id: int) -> Posts:
    post = Posts()
    post.title = title
    post.text = text
    post.user_id = user_id
    session.add(post)
    await session.flush()
    return post


async def get_post(session: AsyncSession, post_id: int) -> Posts | None:
    stmt = select(Posts).where(Posts.id == post_id)
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def find_posts(session: AsyncSession, query: PostPageQuery) -> Sequence[Posts]:
    """Return one page of posts, newest first."""
    stmt = select(Posts).order_by(Posts.created_at.desc()).limit(query.limit)
    if isinstance(query, PageAfter):
        stmt = stmt.where(Posts.created_at < query.before)
    elif not isinstance(query, FirstPage):
        raise TypeError(f"Unsupported page query: {type(query).__name__}")
    res = await session.execute(stmt)
    return res.scalars().all()


async def get_oldest_post(session: AsyncSession) -> Posts | None:
    stmt = select(Posts).order_by(Posts.created_at.asc()).limit(1)
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def count_posts(session: AsyncSession) -> int:
    res = await session.execute(select(func.count()).select_from(Posts))
    return res.scalar_one()


async def save_post(session: AsyncSession, post: Posts) -> Posts:
    post.updated_at = utcnow()
    session.add(post)
    await session.flush()
    return post


async def delete_post(session: AsyncSession, post_id: int) -> None:
    await session.execute(delete(Posts).where(Posts.id == post_id))
