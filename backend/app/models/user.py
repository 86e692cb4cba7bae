"""
Inkwell Backend - User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table (registered identities).
Who:   Used by UserService for registration/login and by PostService to
       resolve post authors.

Table Design:
    - UUID primary key, generated in Python on insert
    - username, email: each carries a UNIQUE constraint so the database
      itself rejects a duplicate that slips past the service pre-check
    - password_hash: bcrypt output, never the plaintext
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """
    A registered identity.

    Lifecycle: created on registration, never mutated, never deleted
    through the API.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque identifier referenced by posts.author_id",
    )

    username: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Display name; unique across users",
    )

    email: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Login identifier; unique across users",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the password",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
