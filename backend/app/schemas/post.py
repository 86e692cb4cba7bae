"""
Inkwell Backend - Post Request/Response Schemas
=================================================

What:  Pydantic models defining the blog post API contract.
How:   FastAPI validates request bodies against these models and serializes
       responses by alias, so `image_url` travels as `imageUrl`.

Schemas are separate from the SQLAlchemy models: the stored post holds an
`author_id`, while every response carries the author's username instead.
"""

import uuid

from pydantic import BaseModel, Field


class PostFields(BaseModel):
    """The four display fields shared by create, update and read."""
    title: str = Field(description="Post title")
    image_url: str = Field(alias="imageUrl", description="URL of the cover image")
    highlight: str = Field(description="Short teaser shown in listings")
    content: str = Field(description="Full post body")

    model_config = {"populate_by_name": True}


class PostCreate(PostFields):
    """
    Body of POST /api/posts.

    `author` is a username, resolved to the user's id before storing.
    """
    author: str = Field(description="Username of an existing user")


class PostUpdate(PostFields):
    """Body of PUT /api/blog/{id}. The author cannot be changed."""


class PostResponse(PostFields):
    """
    A stored post as returned to clients.

    Returned by GET /api/blogs (as array items), GET /api/blog/{id},
    and inside the PUT /api/blog/{id} response.
    """
    id: uuid.UUID = Field(description="Opaque post identifier")
    author: str = Field(description="Username of the post's author")


class PostUpdateResponse(BaseModel):
    message: str
    blog: PostResponse


# ══════════════════════════════════════════════════════════════════════════
# Generic bodies
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """{"message": ...} used for success notices and post-not-found."""
    message: str


class ErrorResponse(BaseModel):
    """{"error": ...} used for author-not-found and server errors."""
    error: str


class HealthResponse(BaseModel):
    """
    Health check response showing service and dependency status.

    Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
