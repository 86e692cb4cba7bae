"""
Inkwell Backend - Auth Route Handlers
=======================================

What:  POST /api/register and POST /api/login.
How:   Delegate to UserService; translate the expected failures
       (ConflictError, InvalidCredentialsError) into 200 responses with
       `registered: false` / `loggedIn: false` flags, which is what the
       frontend checks.

Login is stateless: no cookie or token is set.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import ConflictError, DatabaseError, InvalidCredentialsError
from app.middleware.request_id import request_id_var
from app.schemas.post import ErrorResponse
from app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    """
    Create a user account.

    A taken username or email answers 200 with `registered: false` and
    does not say which of the two was taken.
    """
    try:
        await user_service.register(
            db,
            username=body.username,
            email=body.email,
            password=body.password,
        )
    except ConflictError as e:
        return RegisterResponse(registered=False, error=e.message)

    return RegisterResponse(
        registered=True,
        message="User registered successfully",
        redirect="/login",
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    summary="Check an email/password pair",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Verify credentials.

    Success: {loggedIn: true, redirect: "/", username}
    Failure: {loggedIn: false, error: "Invalid credentials"}, identical for
    an unknown email and a wrong password.
    """
    try:
        username = await user_service.authenticate(db, email=body.email, password=body.password)
    except InvalidCredentialsError as e:
        logger.info("Login failed (%s)", e.context.get("reason", "unknown"))
        return LoginResponse(logged_in=False, error=e.message)
    except DatabaseError as e:
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), e.message, e.context)
        return _login_server_error()
    except Exception as e:
        logger.error("[%s] Login failed: %s", request_id_var.get(""), str(e), exc_info=True)
        return _login_server_error()

    return LoginResponse(logged_in=True, redirect="/", username=username)


def _login_server_error() -> JSONResponse:
    # Login clients read `loggedIn` even on server errors
    return JSONResponse(
        status_code=500,
        content={"loggedIn": False, "error": "Server error"},
    )
