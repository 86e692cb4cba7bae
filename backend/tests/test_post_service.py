"""
Inkwell Backend - Post Service Unit Tests
===========================================

What:  Tests for PostService CRUD and author resolution.
How:   In-memory SQLite database; a mocked session for store failures.
"""

import logging
import uuid

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.exceptions import AuthorNotFoundError, DatabaseError, NotFoundError
from app.models.post import Post
from app.schemas.post import PostCreate, PostUpdate
from app.services.post_service import PostService
from app.services.user_service import UserService


async def count_posts(db) -> int:
    result = await db.execute(select(func.count(Post.id)))
    return result.scalar_one()


@pytest.fixture
def service():
    return PostService()


@pytest.fixture
def new_post(sample_post):
    def build(author: str = "alice", **overrides) -> PostCreate:
        return PostCreate(**{**sample_post, "author": author, **overrides})
    return build


@pytest_asyncio.fixture
async def alice(db_session):
    return await UserService().register(db_session, username="alice", email="a@x.com", password="pw")


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, service, db_session, alice, new_post):
        created = await service.create_post(db_session, new_post())

        fetched = await service.get_post(db_session, created.id)

        assert fetched.id == created.id
        assert fetched.title == "First light"
        assert fetched.image_url == "https://images.example.com/first-light.jpg"
        assert fetched.highlight == "Notes from an early morning walk."
        assert fetched.content == "The harbor was quiet and the gulls were not."
        assert fetched.author == "alice"

    @pytest.mark.asyncio
    async def test_stores_author_id_not_username(self, service, db_session, alice, new_post):
        created = await service.create_post(db_session, new_post())

        post = await db_session.get(Post, created.id)

        assert post.author_id == alice.id

    @pytest.mark.asyncio
    async def test_unknown_author_creates_nothing(self, service, db_session, alice, new_post):
        with pytest.raises(AuthorNotFoundError) as exc_info:
            await service.create_post(db_session, new_post(author="mallory"))

        assert exc_info.value.message == "User not found"
        assert await count_posts(db_session) == 0


class TestRead:

    @pytest.mark.asyncio
    async def test_list_resolves_each_author(self, service, db_session, alice, new_post):
        await UserService().register(db_session, username="bob", email="b@y.com", password="pw")
        await service.create_post(db_session, new_post(title="one"))
        await service.create_post(db_session, new_post(author="bob", title="two"))

        posts = await service.list_posts(db_session)

        assert {(p.title, p.author) for p in posts} == {("one", "alice"), ("two", "bob")}

    @pytest.mark.asyncio
    async def test_list_is_oldest_first(self, service, db_session, alice, new_post):
        titles = [f"post {n}" for n in range(12)]
        for title in titles:
            await service.create_post(db_session, new_post(title=title))

        posts = await service.list_posts(db_session)

        assert [p.title for p in posts] == titles

    @pytest.mark.asyncio
    async def test_list_empty(self, service, db_session):
        assert await service.list_posts(db_session) == []

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, service, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_post(db_session, uuid.uuid4())
        assert exc_info.value.message == "Blog not found"

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, service, db_session):
        with pytest.raises(NotFoundError):
            await service.get_post(db_session, "not-a-uuid")

    @pytest.mark.asyncio
    async def test_get_accepts_string_id(self, service, db_session, alice, new_post):
        created = await service.create_post(db_session, new_post())

        fetched = await service.get_post(db_session, str(created.id))

        assert fetched.id == created.id


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_replaces_fields_keeps_author(self, service, db_session, alice, new_post):
        created = await service.create_post(db_session, new_post())
        changes = PostUpdate(
            title="Second light",
            imageUrl="https://images.example.com/second.jpg",
            highlight="Revisited.",
            content="The gulls came back.",
        )

        updated = await service.update_post(db_session, created.id, changes)
        fetched = await service.get_post(db_session, created.id)

        for view in (updated, fetched):
            assert view.title == "Second light"
            assert view.image_url == "https://images.example.com/second.jpg"
            assert view.highlight == "Revisited."
            assert view.content == "The gulls came back."
            assert view.author == "alice"

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, service, db_session, sample_post):
        with pytest.raises(NotFoundError):
            await service.update_post(db_session, uuid.uuid4(), PostUpdate(**sample_post))


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, service, db_session, alice, new_post):
        created = await service.create_post(db_session, new_post())

        await service.delete_post(db_session, created.id)

        with pytest.raises(NotFoundError):
            await service.get_post(db_session, created.id)
        assert await count_posts(db_session) == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, service, db_session):
        with pytest.raises(NotFoundError):
            await service.delete_post(db_session, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_delete_twice(self, service, db_session, alice, new_post):
        created = await service.create_post(db_session, new_post())
        await service.delete_post(db_session, created.id)

        with pytest.raises(NotFoundError):
            await service.delete_post(db_session, created.id)


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_list_wraps_store_error(self, service, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await service.list_posts(mock_db_session)

        assert exc_info.value.context == {"operation": "list_posts"}

    @pytest.mark.asyncio
    async def test_create_wraps_store_error(self, service, mock_db_session, new_post):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        with pytest.raises(DatabaseError):
            await service.create_post(mock_db_session, new_post())
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_wraps_store_error(self, service, mock_db_session, sample_post):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )
        post_id = uuid.uuid4()

        with pytest.raises(DatabaseError) as exc_info:
            await service.update_post(mock_db_session, post_id, PostUpdate(**sample_post))

        assert exc_info.value.context == {"operation": "update_post", "post_id": str(post_id)}
        mock_db_session.flush.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_logs_store_error_with_traceback(self, service, mock_db_session, caplog):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        with caplog.at_level(logging.ERROR, logger="app.services.post_service"):
            with pytest.raises(DatabaseError):
                await service.get_post(mock_db_session, uuid.uuid4())

        [record] = caplog.records
        assert record.exc_info is not None
