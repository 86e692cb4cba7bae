"""
Inkwell Backend - Blog Post Route Handlers
============================================

What:  Create, list, read, update and delete blog posts.
How:   Each handler delegates to PostService. NotFoundError,
       AuthorNotFoundError and DatabaseError propagate to the global
       exception handlers registered in main.py.

Route Inventory:
    POST   /api/posts         create (author given by username) → 201
    GET    /api/blogs         list all posts
    GET    /api/blog/{id}     one post
    PUT    /api/blog/{id}     replace display fields
    DELETE /api/blog/{id}     delete
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.post import (
    ErrorResponse,
    MessageResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    PostUpdateResponse,
)
from app.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])

_server_error = {500: {"description": "Server error", "model": ErrorResponse}}
_blog_not_found = {404: {"description": "Blog not found", "model": MessageResponse}}


@router.post(
    "/posts",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={
        404: {"description": "Author username not found", "model": ErrorResponse},
        **_server_error,
    },
    summary="Create a blog post",
)
async def create_post(
    body: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Create a post. `author` must be the username of an existing user."""
    await post_service.create_post(db, body)
    return MessageResponse(message="Blog post created successfully")


@router.get(
    "/blogs",
    response_model=List[PostResponse],
    responses=_server_error,
    summary="List all blog posts",
)
async def list_posts(db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    return await post_service.list_posts(db)


@router.get(
    "/blog/{post_id}",
    response_model=PostResponse,
    responses={**_blog_not_found, **_server_error},
    summary="Get a single blog post",
)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    """
    Get one post with its author's username.

    `post_id` is taken as a plain string: an id that is not a UUID
    simply matches no post and answers 404, like any other unknown id.
    """
    return await post_service.get_post(db, post_id)


@router.put(
    "/blog/{post_id}",
    response_model=PostUpdateResponse,
    responses={**_blog_not_found, **_server_error},
    summary="Update a blog post",
)
async def update_post(
    post_id: str,
    body: PostUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PostUpdateResponse:
    blog = await post_service.update_post(db, post_id, body)
    return PostUpdateResponse(message="Blog updated successfully", blog=blog)


@router.delete(
    "/blog/{post_id}",
    response_model=MessageResponse,
    responses={**_blog_not_found, **_server_error},
    summary="Delete a blog post",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await post_service.delete_post(db, post_id)
    return MessageResponse(message="Blog deleted successfully")
