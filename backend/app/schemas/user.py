"""
Inkwell Backend - Auth Request/Response Schemas
=================================================

What:  Pydantic models for the registration and login contract.
How:   Python attributes are snake_case; wire names are set with aliases
       (`loggedIn`) so existing frontends keep working. FastAPI serializes
       response models by alias.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Body of POST /api/register."""
    email: str = Field(description="Login identifier; must not belong to another user")
    password: str = Field(description="Plain text password; only its bcrypt hash is stored")
    username: str = Field(description="Display name; must not belong to another user")


class RegisterResponse(BaseModel):
    """
    Result of a registration attempt.

    Success: {message, redirect, registered: true}
    Conflict: {error, registered: false}
    """
    registered: bool
    message: Optional[str] = None
    redirect: Optional[str] = None
    error: Optional[str] = None


class LoginRequest(BaseModel):
    """Body of POST /api/login."""
    email: str
    password: str


class LoginResponse(BaseModel):
    """
    Result of a login attempt.

    No token or cookie is issued; a successful login only reports the
    username for the client to keep.
    """
    logged_in: bool = Field(alias="loggedIn")
    redirect: Optional[str] = None
    username: Optional[str] = None
    error: Optional[str] = None

    model_config = {"populate_by_name": True}
