"""
Inkwell Backend - Database Lifecycle Tests
============================================

What:  init_engine / get_db_session / dispose_engine against in-memory SQLite.
"""

import pytest
from sqlalchemy import Text, text

from app import database
from app.models.post import Post
from app.models.user import User


@pytest.mark.asyncio
async def test_session_requires_initialized_engine():
    await database.dispose_engine()

    with pytest.raises(RuntimeError):
        await database.get_db_session().__anext__()


@pytest.mark.asyncio
async def test_engine_lifecycle_creates_tables_and_commits():
    await database.init_engine("sqlite+aiosqlite://", create_tables=True)
    try:
        sessions = database.get_db_session()
        session = await sessions.__anext__()
        result = await session.execute(text("SELECT count(*) FROM users"))
        assert result.scalar_one() == 0

        # Exhausting the generator runs the commit/close path
        with pytest.raises(StopAsyncIteration):
            await sessions.__anext__()
    finally:
        await database.dispose_engine()

    assert database.engine is None
    assert database.async_session_factory is None


@pytest.mark.asyncio
async def test_session_rolls_back_on_error():
    await database.init_engine("sqlite+aiosqlite://", create_tables=True)
    try:
        sessions = database.get_db_session()
        session = await sessions.__anext__()
        await session.execute(
            text(
                "INSERT INTO users (id, username, email, password_hash, created_at) "
                "VALUES ('00000000000000000000000000000001', 'alice', 'a@x.com', 'h', CURRENT_TIMESTAMP)"
            )
        )

        with pytest.raises(ValueError):
            await sessions.athrow(ValueError("handler failed"))

        result = await session.execute(text("SELECT count(*) FROM users"))
        assert result.scalar_one() == 0
    finally:
        await database.dispose_engine()


@pytest.mark.parametrize(
    "column",
    [
        Post.__table__.c.title,
        Post.__table__.c.image_url,
        Post.__table__.c.highlight,
        Post.__table__.c.content,
        User.__table__.c.username,
        User.__table__.c.email,
    ],
    ids=lambda c: f"{c.table.name}.{c.name}",
)
def test_display_columns_have_no_length_cap(column):
    # SQLite ignores VARCHAR lengths; PostgreSQL would reject longer values
    assert isinstance(column.type, Text)
    assert column.type.length is None
