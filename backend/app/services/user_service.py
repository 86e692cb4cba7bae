"""
Inkwell Backend - User Service (Identity Store)
=================================================

What:  Registration, login and author lookup for user records.
How:   Plain async methods that take the request's AsyncSession explicitly.
Who:   Called by the auth routes and by PostService (author resolution).

Uniqueness:
    register() first looks for any user holding the username OR the email.
    Two concurrent registrations can both pass that check; the UNIQUE
    constraints on users.username / users.email then reject the second
    insert, which is reported as the same ConflictError.

Password hashing runs through starlette's thread pool: bcrypt at cost 10
takes tens of milliseconds of CPU and would otherwise stall the event loop.
"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import ConflictError, DatabaseError, InvalidCredentialsError
from app.models.user import User
from app.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for user records.

    Responsibilities:
        - register(): create a user with a hashed password, enforcing uniqueness
        - authenticate(): check an email/password pair, return the username
        - get_by_username(): resolve a username to a user (post authorship)
    """

    async def register(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
    ) -> User:
        """
        Create a new user.

        Args:
            db: Async database session
            username: Desired display name
            email: Login identifier
            password: Plain text password (hashed before storage)

        Returns:
            The persisted User (id assigned)

        Raises:
            ConflictError: username or email already taken; nothing is written
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(
                select(User)
                .where(or_(User.email == email, User.username == username))
                .limit(1)
            )
            if result.scalar_one_or_none() is not None:
                logger.info("Registration rejected: username or email already in use")
                raise ConflictError(context={"username": username})

            password_hash = await run_in_threadpool(
                hash_password, password, settings.bcrypt_rounds
            )
            user = User(username=username, email=email, password_hash=password_hash)
            db.add(user)
            await db.flush()  # Unique constraints are checked here
            logger.info("User registered: %s (%s)", user.username, user.id)
            return user

        except IntegrityError as e:
            await db.rollback()
            logger.warning("Registration lost a uniqueness race: %s", type(e.orig).__name__)
            raise ConflictError(context={"username": username, "source": "constraint"})
        except SQLAlchemyError as e:
            logger.error("Database error during registration: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "register"})

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> str:
        """
        Check credentials and return the user's username.

        Unknown email and wrong password raise the same InvalidCredentialsError;
        the distinguishing reason is only kept in the exception context.

        Raises:
            InvalidCredentialsError: no such email, or password mismatch
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "authenticate"})

        if user is None:
            raise InvalidCredentialsError(context={"reason": "unknown_email"})

        matches = await run_in_threadpool(verify_password, password, user.password_hash)
        if not matches:
            raise InvalidCredentialsError(context={"reason": "password_mismatch"})

        logger.info("User logged in: %s", user.username)
        return user.username

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        """Return the user with this username, or None. Store errors propagate."""
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()


user_service = UserService()
