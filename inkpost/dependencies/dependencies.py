"""Application dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from inkpost.clients.ai_client import AiClient
from inkpost.db import get_session
from inkpost.managers.token_blacklist import get_token_blacklist
from inkpost.repositories import PostRepository
from inkpost.schemas.auth import Identity
from inkpost.schemas.post import QueryState, RequestContext
from inkpost.services.auth import AuthService
from inkpost.services.image import ImageService
from inkpost.services.query import QueryEngine

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_auth_service() -> AuthService:
    """Dependency to get the admin AuthService bound to the shared blacklist."""
    return AuthService(token_blacklist=get_token_blacklist())


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_optional_identity(
    request: Request,
    token: Annotated[str | None, Depends(optional_oauth2_scheme)],
    auth_service: AuthServiceDep,
) -> Identity | None:
    """
    Resolve the signed-in admin if a valid bearer token was sent.

    A verified admin is also stored on ``request.state.admin`` for the
    rate limiter key.

    Parameters
    ----------
    request : Request
        Current request.
    token : str | None
        Bearer token, if any.
    auth_service : AuthService
        Identity provider.

    Returns
    -------
    Identity | None
        The admin, or None for anonymous readers.
    """
    identity = await auth_service.current_identity(token)
    request.state.admin = identity
    return identity


async def get_current_admin(
    request: Request,
    token: Annotated[str, Depends(oauth2_scheme)],
    auth_service: AuthServiceDep,
) -> Identity:
    """
    Require an authenticated admin.

    Parameters
    ----------
    request : Request
        Current request.
    token : str
        Bearer token.
    auth_service : AuthService
        Identity provider.

    Returns
    -------
    Identity
        Current admin.

    Raises
    ------
    HTTPException
        401 if the token is invalid, expired or revoked.
    """
    identity = await auth_service.current_identity(token)
    if identity is None:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.admin = identity
    return identity


OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
AdminDep = Annotated[Identity, Depends(get_current_admin)]
BearerTokenDep = Annotated[str, Depends(oauth2_scheme)]
OptionalBearerTokenDep = Annotated[str | None, Depends(optional_oauth2_scheme)]


def get_post_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostRepository:
    """
    Resolve the `PostRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostRepository
        Repository instance bound to the session.
    """
    return PostRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


def get_query_engine(repo: PostRepoDep) -> QueryEngine:
    return QueryEngine(repo)


QueryEngineDep = Annotated[QueryEngine, Depends(get_query_engine)]


def get_query_state(
    q: Annotated[str | None, Query(description="Free-text search")] = None,
    tag: Annotated[str | None, Query(description="Exact tag filter")] = None,
    page: Annotated[str | None, Query(description="1-based page number")] = None,
) -> QueryState:
    """
    Dependency to build the listing's `QueryState` from URL parameters.

    ``page`` is accepted as raw text so that a malformed value falls back
    to the first page instead of failing validation.
    """
    return QueryState.from_params(q=q, tag=tag, page=page)


QueryStateDep = Annotated[QueryState, Depends(get_query_state)]


def get_request_context(
    query_state: QueryStateDep,
    identity: OptionalIdentityDep,
) -> RequestContext:
    """Snapshot the query state and identity for one request."""
    return RequestContext(query_state=query_state, identity=identity)


RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]


def get_ai_client_state(request: Request) -> AiClient:
    return request.app.state.ai_client


AiDep = Annotated[AiClient, Depends(get_ai_client_state)]


def get_image_service(request: Request) -> ImageService:
    """Dependency to get the ImageService backed by the app's image host."""
    return ImageService(storage=getattr(request.app.state, "image_storage", None))


ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
