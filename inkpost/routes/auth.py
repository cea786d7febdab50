"""Authentication routes for the admin session."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from inkpost.configs.settings import LOGIN_ERROR
from inkpost.dependencies import (
    AdminDep,
    AuthServiceDep,
    BearerTokenDep,
    OptionalBearerTokenDep,
)
from inkpost.errors.auth import InvalidCredentialsError
from inkpost.managers import limiter
from inkpost.schemas.auth import SessionStatus, Token

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=Token,
    summary="Login for access token",
    description="Authenticate the admin with e-mail and password to obtain an access token.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "expires_at": "2025-01-02T10:00:00Z",
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": LOGIN_ERROR}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
    },
    operation_id="auth_login",
)
@limiter.limit("5/minute")
async def login_for_access_token(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    auth_service: AuthServiceDep,
) -> Token:
    """
    Login with e-mail and password.

    Parameters
    ----------
    request : Request
        Current request context.
    form_data : OAuth2PasswordRequestForm
        Form data; ``username`` carries the admin e-mail.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    Token
        Access token object.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    """
    token = await auth_service.login(form_data.username, form_data.password)
    if token is None:
        raise InvalidCredentialsError
    return token


@router.post(
    "/logout",
    status_code=HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Revoke the presented access token.",
    responses={
        204: {"description": "Token revoked"},
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Not authenticated"}}},
        },
    },
    operation_id="auth_logout",
)
@limiter.limit("20/minute")
async def logout(
    request: Request,
    token: BearerTokenDep,
    admin: AdminDep,
    auth_service: AuthServiceDep,
) -> Response:
    """
    Revoke the current admin token.

    Parameters
    ----------
    request : Request
        Current request context.
    token : str
        Bearer token to revoke.
    admin : Identity
        Authenticated admin.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    Response
        Empty 204 response.
    """
    await auth_service.logout(token)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get(
    "/session",
    response_class=ORJSONResponse,
    response_model=SessionStatus,
    summary="Current session",
    description="Report whether the presented token belongs to an active admin session.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "authenticated": True,
                        "identity": {
                            "email": "admin@example.com",
                            "jti": "9b1deb4d3b7d4bad9bdd2b0d7b3dcb6d",
                            "expires_at": "2025-01-02T10:00:00Z",
                        },
                    },
                },
            },
        },
    },
    operation_id="auth_session",
)
@limiter.limit("60/minute")
async def read_session(
    request: Request,
    token: OptionalBearerTokenDep,
    auth_service: AuthServiceDep,
) -> SessionStatus:
    """Return the session state for the presented bearer token, if any."""
    return await auth_service.session(token)
