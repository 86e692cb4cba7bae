"""
Inkwell Backend - Post Service (Content Store)
================================================

What:  CRUD operations on blog posts, with author reference resolution.
How:   Async methods taking the request's AsyncSession explicitly and
       returning PostResponse views.
Who:   Called by the post route handlers.

Author references:
    create_post() receives the author as a username and stores the user's id.
    Reads join the users table and put the username back in the `author`
    field of the view. The stored id is never re-validated after creation.

Error Handling:
    Missing posts raise NotFoundError, unknown authors AuthorNotFoundError.
    SQLAlchemy errors are logged and wrapped in DatabaseError so no driver
    detail reaches the client.
"""

import logging
from typing import List, Union
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.exceptions import AuthorNotFoundError, DatabaseError, NotFoundError
from app.models.post import Post
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

PostId = Union[str, UUID]


def _not_found(post_id: PostId) -> NotFoundError:
    return NotFoundError(resource="blog", resource_id=str(post_id), message="Blog not found")


def _parse_id(post_id: PostId) -> UUID:
    """A string that is not a UUID cannot name any post."""
    if isinstance(post_id, UUID):
        return post_id
    try:
        return UUID(str(post_id))
    except ValueError:
        raise _not_found(post_id) from None


def _to_response(post: Post, author_username: str) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        image_url=post.image_url,
        highlight=post.highlight,
        content=post.content,
        author=author_username,
    )


class PostService:
    """
    Business logic layer for blog posts.

    Responsibilities:
        - create_post(): resolve author username, persist post
        - list_posts(): all posts, oldest first, authors resolved
        - get_post(): one post by id, author resolved
        - update_post(): replace the four display fields
        - delete_post(): remove by id
    """

    async def create_post(self, db: AsyncSession, data: PostCreate) -> PostResponse:
        """
        Create a post owned by the user named in `data.author`.

        Raises:
            AuthorNotFoundError: no user has that username; nothing is written
            DatabaseError: Query execution failed
        """
        try:
            author = await user_service.get_by_username(db, data.author)
            if author is None:
                logger.info("Post rejected: unknown author '%s'", data.author)
                raise AuthorNotFoundError(username=data.author)

            post = Post(
                title=data.title,
                image_url=data.image_url,
                highlight=data.highlight,
                content=data.content,
                author_id=author.id,
            )
            db.add(post)
            await db.flush()  # Assigns defaults without committing
            logger.info("Post created: %s by %s", post.id, author.username)
            return _to_response(post, author.username)

        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_post"})

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        Return every post with its author's username.

        Query plan:
            SELECT posts.*, users.* FROM posts JOIN users ON users.id = posts.author_id
            ORDER BY posts.created_at, posts.id
        """
        try:
            result = await db.execute(
                select(Post)
                .options(joinedload(Post.author))
                .order_by(Post.created_at, Post.id)
            )
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_posts"})

        return [_to_response(post, post.author.username) for post in posts]

    async def _load(self, db: AsyncSession, post_id: PostId) -> Post:
        """Fetch one post with its author eagerly loaded, or raise NotFoundError."""
        pid = _parse_id(post_id)
        result = await db.execute(
            select(Post).options(joinedload(Post.author)).where(Post.id == pid)
        )
        post = result.scalar_one_or_none()
        if post is None:
            raise _not_found(post_id)
        return post

    async def get_post(self, db: AsyncSession, post_id: PostId) -> PostResponse:
        """
        Retrieve a single post by id.

        Raises:
            NotFoundError: no post has that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            post = await self._load(db, post_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "get_post", "post_id": str(post_id)})

        return _to_response(post, post.author.username)

    async def update_post(
        self, db: AsyncSession, post_id: PostId, data: PostUpdate
    ) -> PostResponse:
        """
        Replace title, image URL, highlight and content of a post.

        The author reference is left untouched.

        Raises:
            NotFoundError: no post has that id
            DatabaseError: Query execution failed
        """
        try:
            post = await self._load(db, post_id)
            post.title = data.title
            post.image_url = data.image_url
            post.highlight = data.highlight
            post.content = data.content
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "update_post", "post_id": str(post_id)})

        logger.info("Post updated: %s", post.id)
        return _to_response(post, post.author.username)

    async def delete_post(self, db: AsyncSession, post_id: PostId) -> None:
        """
        Delete a post by id in a single statement.

        Raises:
            NotFoundError: no post has that id
            DatabaseError: Query execution failed
        """
        pid = _parse_id(post_id)
        try:
            result = await db.execute(delete(Post).where(Post.id == pid))
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "delete_post", "post_id": str(post_id)})

        if result.rowcount == 0:
            raise _not_found(post_id)
        logger.info("Post deleted: %s", pid)


post_service = PostService()
