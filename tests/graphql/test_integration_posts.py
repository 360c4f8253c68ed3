"""
Integration tests executing post operations through the GraphQL schema.

Each test runs one root field per operation: the test engine shares a single
SQLite connection, so concurrently resolved root fields would overlap sessions.
"""

from typing import Any

import pytest

from postfeed.graphql.schema import get_context, schema

from ..factories import load_post, make_request, seed_posts

CREATE_POST = """
mutation CreatePost($input: CreatePostInput!) {
  createPost(createPostInput: $input) {
    code
    success
    message
    post { id title text userId }
  }
}
"""

UPDATE_POST = """
mutation UpdatePost($input: UpdatePostInput!) {
  updatePost(updatePostInput: $input) {
    code
    success
    message
    post { id title text }
  }
}
"""

DELETE_POST = """
mutation DeletePost($id: ID!) {
  deletePost(id: $id) {
    code
    success
    message
    post { id title }
  }
}
"""

GET_POSTS = """
query GetPosts($limit: Int!, $cursor: String) {
  getPosts(limit: $limit, cursor: $cursor) {
    totalCount
    cursor
    hasMore
    paginatedPosts { id title createdAt textSnippet }
  }
}
"""

GET_POST = """
query GetPost($id: ID!) {
  getPost(id: $id) {
    id
    title
    textSnippet
    user { id username }
  }
}
"""


async def execute(query: str, variables: dict[str, Any], user_id: int | None = None):
    context = await get_context(make_request(user_id=user_id))
    return await schema.execute(query, variable_values=variables, context_value=context)


@pytest.mark.integration
class TestPostMutations:
    @pytest.mark.asyncio
    async def test_create_post_owned_by_session_user(self, users):
        result = await execute(
            CREATE_POST,
            {"input": {"title": "Hello", "text": "Hello world"}},
            user_id=users["alice"],
        )

        assert result.errors is None
        payload = result.data["createPost"]
        assert payload["code"] == 200
        assert payload["success"] is True
        assert payload["post"]["userId"] == users["alice"]
        assert payload["post"]["title"] == "Hello"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, users):
        created = await execute(
            CREATE_POST,
            {"input": {"title": "Original", "text": "By alice"}},
            user_id=users["alice"],
        )
        post_id = created.data["createPost"]["post"]["id"]

        result = await execute(
            UPDATE_POST,
            {"input": {"id": post_id, "title": "Changed", "text": "By bob"}},
            user_id=users["bob"],
        )

        assert result.errors is None
        assert result.data["updatePost"]["code"] == 401
        assert result.data["updatePost"]["post"] is None
        assert (await load_post(int(post_id))).title == "Original"

    @pytest.mark.asyncio
    async def test_owner_updates(self, users):
        [post_id] = await seed_posts(users["alice"], 1)

        result = await execute(
            UPDATE_POST,
            {"input": {"id": str(post_id), "title": "Edited", "text": "Edited body"}},
            user_id=users["alice"],
        )

        payload = result.data["updatePost"]
        assert payload["code"] == 200
        assert payload["post"]["title"] == "Edited"
        assert (await load_post(post_id)).text == "Edited body"

    @pytest.mark.asyncio
    async def test_update_unknown_post_is_not_found(self, users):
        result = await execute(
            UPDATE_POST,
            {"input": {"id": "777", "title": "x", "text": "y"}},
            user_id=users["alice"],
        )
        assert result.data["updatePost"]["code"] == 400

    @pytest.mark.asyncio
    async def test_delete_requires_authentication(self, users):
        [post_id] = await seed_posts(users["alice"], 1)

        result = await execute(DELETE_POST, {"id": str(post_id)})

        assert result.errors is not None
        assert result.errors[0].message == "Not authenticated to perform GraphQL operations"
        assert await load_post(post_id) is not None

    @pytest.mark.asyncio
    async def test_delete_by_non_owner_is_unauthorized(self, users):
        [post_id] = await seed_posts(users["alice"], 1)

        result = await execute(DELETE_POST, {"id": str(post_id)}, user_id=users["bob"])

        assert result.data["deletePost"]["code"] == 401
        assert await load_post(post_id) is not None

    @pytest.mark.asyncio
    async def test_delete_unknown_post_is_not_found(self, users):
        result = await execute(DELETE_POST, {"id": "31337"}, user_id=users["bob"])
        assert result.data["deletePost"]["code"] == 400

    @pytest.mark.asyncio
    async def test_owner_deletes(self, users):
        [post_id] = await seed_posts(users["alice"], 1)

        result = await execute(DELETE_POST, {"id": str(post_id)}, user_id=users["alice"])

        payload = result.data["deletePost"]
        assert payload["code"] == 200
        assert payload["post"] == {"id": str(post_id), "title": "Post 0"}
        assert await load_post(post_id) is None


@pytest.mark.integration
class TestPostQueries:
    @pytest.mark.asyncio
    async def test_feed_pages_through_cursor(self, users):
        await seed_posts(users["alice"], 15)

        first = await execute(GET_POSTS, {"limit": 10})
        assert first.errors is None
        page = first.data["getPosts"]
        assert page["totalCount"] == 15
        assert len(page["paginatedPosts"]) == 10
        assert page["hasMore"] is True
        assert page["paginatedPosts"][0]["title"] == "Post 14"

        second = await execute(GET_POSTS, {"limit": 10, "cursor": page["cursor"]})
        page = second.data["getPosts"]
        assert len(page["paginatedPosts"]) == 5
        assert page["hasMore"] is False
        assert page["paginatedPosts"][-1]["title"] == "Post 0"

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, users):
        await seed_posts(users["alice"], 12)

        result = await execute(GET_POSTS, {"limit": 20})
        assert len(result.data["getPosts"]["paginatedPosts"]) == 10

    @pytest.mark.asyncio
    async def test_malformed_cursor_is_null(self, users):
        await seed_posts(users["alice"], 2)

        result = await execute(GET_POSTS, {"limit": 5, "cursor": "garbage"})
        assert result.errors is None
        assert result.data["getPosts"] is None

    @pytest.mark.asyncio
    async def test_get_post_with_author_and_snippet(self, users):
        [post_id] = await seed_posts(users["bob"], 1)

        result = await execute(GET_POST, {"id": str(post_id)})

        assert result.errors is None
        post = result.data["getPost"]
        assert post["id"] == str(post_id)
        assert post["textSnippet"] == "Body of post 0"
        assert post["user"] == {"id": str(users["bob"]), "username": "bob"}

    @pytest.mark.asyncio
    async def test_get_missing_post_is_null(self, database):
        result = await execute(GET_POST, {"id": "1"})
        assert result.errors is None
        assert result.data["getPost"] is None
