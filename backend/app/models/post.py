"""
Inkwell Backend - Post SQLAlchemy Model
=========================================

What:  ORM model for the `posts` table (blog posts).
Who:   Used by PostService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: opaque, non-sequential identifier
    - title, image_url, highlight, content: display strings, no constraints
      beyond NOT NULL
    - author_id: foreign key to users.id; set once at creation
    - created_at: UTC timestamp; listing orders by it (insertion order)

    Index on created_at:
        Backs the ORDER BY of the "all posts" listing.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.user import User


class Post(Base):
    """
    A blog post written by one user.

    Lifecycle:
        1. Created with the author resolved from a username
        2. Display fields replaced in place by updates (author never changes)
        3. Deleted by id

    Query Patterns:
        - List all posts: SELECT ... JOIN users ORDER BY created_at
        - Get single post: SELECT ... WHERE id = :uuid (primary key)
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque post identifier",
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Stored as a URL string; images live elsewhere (CDN, object storage)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    # Short teaser shown on the listing page
    highlight: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", name="fk_posts_author_id_users"),
        nullable=False,
        comment="Author reference; validated only at creation",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this post was created (UTC)",
    )

    author: Mapped[User] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_posts_created_at", created_at),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', author_id={self.author_id})>"
