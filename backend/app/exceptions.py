"""
Inkwell Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the outcomes a request can have
       besides plain success.
How:   Each exception carries a user-safe message and an optional context
       dict. Global exception handlers (registered in main.py) or the auth
       routes turn them into the JSON bodies clients expect.
Who:   Raised by services; caught by routes and global handlers.

Exception Hierarchy:
    InkwellError (base)
    ├── ConflictError             → 200 {error, registered: false}
    ├── InvalidCredentialsError   → 200 {loggedIn: false, error}
    ├── AuthorNotFoundError       → 404 {error}
    ├── NotFoundError             → 404 {message}
    └── DatabaseError             → 500 {error}
"""

from typing import Any, Dict, Optional


class InkwellError(Exception):
    """
    Base exception for all Inkwell application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConflictError(InkwellError):
    """
    Raised when registration collides with an existing username or email.

    The message never says which of the two fields collided.
    """

    def __init__(
        self,
        message: str = "Email or username already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(InkwellError):
    """
    Raised when login fails.

    Unknown email and wrong password raise this with the same message,
    so a caller cannot tell which part was wrong. The cause goes in
    context for server-side logs only.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorNotFoundError(InkwellError):
    """
    Raised when a post names an author username that no user has.

    HTTP: 404 Not Found, body {"error": "User not found"}
    """

    def __init__(
        self,
        username: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if username is not None:
            ctx["username"] = username
        super().__init__(message="User not found", context=ctx)
        self.username = username


class NotFoundError(InkwellError):
    """
    Raised when a requested resource does not exist.

    The ORM returns None for missing rows; services convert that into
    this exception so routes stay free of None checks.
    HTTP: 404 Not Found, body {"message": "Blog not found"}
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"{resource.capitalize()} not found",
            context=ctx,
        )


class DatabaseError(InkwellError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic. Details
    (statement, constraint name, driver error) stay in the server log.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
