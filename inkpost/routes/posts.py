"""
Post Routes.

Provides the public listing (search, tag filter, pagination), single post
reads, and the admin-only authoring endpoints.

Summary
-------
Endpoints include:
  - List posts with search, tag filter and pagination
  - Tag vocabulary with toggle links
  - Get post by id
  - Create, update and delete posts (admin)
  - Upload a cover image (admin)

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples.
Requests carrying a bearer token get a higher limit than anonymous readers.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, File, HTTPException, Request, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from inkpost.configs import file_logger, settings
from inkpost.configs.settings import CREATE_POST_ERROR, DELETE_POST_ERROR, UPDATE_POST_ERROR
from inkpost.dependencies import (
    AdminDep,
    ImageServiceDep,
    PostRepoDep,
    QueryEngineDep,
    QueryStateDep,
    RequestContextDep,
)
from inkpost.errors.database import DatabaseError
from inkpost.managers import limiter
from inkpost.schemas.post import (
    ImageUploadResponse,
    PostCreate,
    PostPage,
    PostResponse,
    PostUpdate,
    TagLink,
    TagVocabularyResponse,
)
from inkpost.services.pagination import paginate, tag_toggle_url
from inkpost.utils.helpers import host

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}
UNAUTHORIZED_RESPONSE = {
    "description": "Not authenticated",
    "content": {"application/json": {"example": {"detail": "Not authenticated"}}},
}
NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post not found"}}},
}

POST_EXAMPLE = {
    "id": "3f2b8c1e9a7d4e56b0c1d2e3f4a5b6c7",
    "title": "Go Basics",
    "content": "# Go Basics\n\nGoroutines are cheap...",
    "excerpt": "A first look at goroutines and channels.",
    "imageUrl": None,
    "tags": ["go", "tutorial"],
    "createdAt": "2025-01-01T10:00:00Z",
    "updatedAt": "2025-01-01T10:00:00Z",
}


def public_limit(key: str) -> str:
    return "120/minute" if key.startswith("admin:") else "60/minute"


def listing_path(request: Request) -> str:
    """Path of the public listing, used as the base of every navigation link."""
    return str(request.app.url_path_for("list_posts"))


def post_not_found(post_id: str) -> HTTPException:
    return HTTPException(status_code=HTTP_404_NOT_FOUND, detail=f"Post with ID {post_id} not found")


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostPage,
    summary="List posts",
    description=(
        "List posts newest first. `tag` filters by exact tag (case-insensitive), "
        "`q` searches title, content, excerpt and tags; both may be combined. "
        f"Results are paged {settings.POSTS_PER_PAGE} per page."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "posts": [POST_EXAMPLE],
                        "total": 1,
                        "page": 1,
                        "pageSize": 9,
                        "totalPages": 1,
                        "pageWindow": [1],
                        "previousDisabled": True,
                        "nextDisabled": True,
                        "previousUrl": None,
                        "nextUrl": None,
                        "links": [{"label": "1", "page": 1, "url": "/posts", "active": True}],
                        "searchText": "",
                        "activeTag": None,
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_list",
)
@limiter.limit(public_limit)
async def list_posts(
    request: Request,
    engine: QueryEngineDep,
    context: RequestContextDep,
) -> PostPage:
    """
    List posts for the public landing page.

    Parameters
    ----------
    request : Request
        Current request context.
    engine : QueryEngine
        Query engine over a fresh snapshot.
    context : RequestContext
        Query state and identity of this request.

    Returns
    -------
    PostPage
        Visible slice plus navigation state.
    """
    results = await engine.run(context)
    return paginate(
        results,
        context.query_state,
        base_url=listing_path(request),
        params=request.query_params.multi_items(),
    )


@router.get(
    "/tags",
    response_class=ORJSONResponse,
    response_model=TagVocabularyResponse,
    summary="List tags",
    description=(
        "Sorted, distinct tags across all posts. Each entry links to the listing "
        "with that tag toggled and the page reset."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "tags": [
                            {"name": "go", "active": True, "url": "/posts"},
                            {"name": "tutorial", "active": False, "url": "/posts?tag=tutorial"},
                        ],
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_tags",
)
@limiter.limit(public_limit)
async def list_tags(
    request: Request,
    engine: QueryEngineDep,
    query_state: QueryStateDep,
) -> TagVocabularyResponse:
    """
    Return the tag vocabulary with toggle links.

    Parameters
    ----------
    request : Request
        Current request context.
    engine : QueryEngine
        Query engine over a fresh snapshot.
    query_state : QueryState
        Current listing state; the active tag is marked.

    Returns
    -------
    TagVocabularyResponse
        Tags in ascending order.
    """
    base_url = listing_path(request)
    params = request.query_params.multi_items()
    return TagVocabularyResponse(
        tags=[
            TagLink(
                name=tag,
                active=tag == query_state.active_tag,
                url=tag_toggle_url(base_url, params, tag, query_state.active_tag),
            )
            for tag in await engine.tag_vocabulary()
        ],
    )


@router.post(
    "/images",
    response_class=ORJSONResponse,
    response_model=ImageUploadResponse,
    status_code=HTTP_201_CREATED,
    summary="Upload a cover image",
    description="Upload a JPEG, PNG, WebP or GIF image and return its public URL.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {"url": "https://res.cloudinary.com/demo/image/upload/go.png"},
                },
            },
        },
        401: UNAUTHORIZED_RESPONSE,
        413: {
            "description": "Image too large",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Your image is too large. Please use an image smaller than 10MB.",
                    },
                },
            },
        },
        415: {
            "description": "Unsupported image type",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "This image format isn't supported. Please use JPEG, PNG, WebP or GIF images.",
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_upload_image",
)
@limiter.limit("10/minute")
async def upload_image(
    request: Request,
    file: Annotated[UploadFile, File(description="Image file")],
    admin: AdminDep,
    images: ImageServiceDep,
) -> ImageUploadResponse:
    """
    Upload a cover image for a post.

    Parameters
    ----------
    request : Request
        Current request context.
    file : UploadFile
        Multipart image upload.
    admin : Identity
        Authenticated admin.
    images : ImageService
        Validating upload service.

    Returns
    -------
    ImageUploadResponse
        Public URL of the stored image.
    """
    url = await images.upload_file(file)
    logger.info(f"Cover image uploaded from ip: {host(request)}")
    return ImageUploadResponse(url=url)


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by ID",
    description="Retrieve a single post by its identifier.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="posts_get_by_id",
)
@limiter.limit(public_limit)
async def get_post(
    request: Request,
    post_id: str,
    repo: PostRepoDep,
) -> PostResponse:
    """
    Get post by ID.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : str
        Post identifier.
    repo : PostRepository
        Repository dependency.

    Returns
    -------
    PostResponse
        Post data.

    Raises
    ------
    HTTPException
        If the post does not exist.
    """
    db_post = await repo.get_by_id(post_id)
    if not db_post:
        raise post_not_found(post_id)
    return PostResponse.model_validate(db_post)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new post",
    description="Create a post. A blank excerpt is derived from the content.",
    responses={
        201: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        401: UNAUTHORIZED_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
        500: {
            "description": "Store failure",
            "content": {"application/json": {"example": {"detail": CREATE_POST_ERROR}}},
        },
    },
    operation_id="posts_create",
)
@limiter.limit("30/minute")
async def create_post(
    request: Request,
    post: Annotated[
        PostCreate,
        Body(
            examples={
                "basic": {
                    "summary": "Basic post creation",
                    "value": {
                        "title": "Go Basics",
                        "content": "# Go Basics\n\nGoroutines are lightweight threads...",
                        "excerpt": "",
                        "imageUrl": "",
                        "tags": "go, tutorial",
                    },
                },
            },
        ),
    ],
    repo: PostRepoDep,
    admin: AdminDep,
) -> PostResponse:
    """
    Create a new post.

    Parameters
    ----------
    request : Request
        Current request context.
    post : PostCreate
        Validated authoring form.
    repo : PostRepository
        Repository dependency.
    admin : Identity
        Authenticated admin.

    Returns
    -------
    PostResponse
        Created post.

    Raises
    ------
    HTTPException
        500 if the store rejects the insert.
    """
    try:
        db_post = await repo.create(post)
    except DatabaseError as e:
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CREATE_POST_ERROR,
        ) from e
    return PostResponse.model_validate(db_post)


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description="Merge the provided fields into an existing post.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        401: UNAUTHORIZED_RESPONSE,
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
        500: {
            "description": "Store failure",
            "content": {"application/json": {"example": {"detail": UPDATE_POST_ERROR}}},
        },
    },
    operation_id="posts_update",
)
@limiter.limit("30/minute")
async def update_post(
    request: Request,
    post_id: str,
    post_update: PostUpdate,
    repo: PostRepoDep,
    admin: AdminDep,
) -> PostResponse:
    """
    Update an existing post.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : str
        Post identifier.
    post_update : PostUpdate
        Fields to merge.
    repo : PostRepository
        Repository dependency.
    admin : Identity
        Authenticated admin.

    Returns
    -------
    PostResponse
        Updated post.

    Raises
    ------
    HTTPException
        404 if missing, 500 if the update failed.
    """
    if not await repo.get_by_id(post_id):
        raise post_not_found(post_id)

    db_post = await repo.update(post_id, post_update)
    if db_post is None:
        raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=UPDATE_POST_ERROR)
    return PostResponse.model_validate(db_post)


@router.delete(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a post",
    description="Delete a post permanently.",
    responses={
        204: {"description": "Post deleted"},
        401: UNAUTHORIZED_RESPONSE,
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
        500: {
            "description": "Store failure",
            "content": {"application/json": {"example": {"detail": DELETE_POST_ERROR}}},
        },
    },
    operation_id="posts_delete",
)
@limiter.limit("30/minute")
async def delete_post(
    request: Request,
    post_id: str,
    repo: PostRepoDep,
    admin: AdminDep,
) -> Response:
    """
    Delete a post.

    Parameters
    ----------
    request : Request
        Current request context.
    post_id : str
        Post identifier.
    repo : PostRepository
        Repository dependency.
    admin : Identity
        Authenticated admin.

    Returns
    -------
    Response
        Empty 204 response.

    Raises
    ------
    HTTPException
        404 if missing, 500 if the delete failed.
    """
    if not await repo.get_by_id(post_id):
        raise post_not_found(post_id)

    if not await repo.remove(post_id):
        raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=DELETE_POST_ERROR)

    logger.info(f"Post {post_id} deleted by admin from ip: {host(request)}")
    return Response(status_code=HTTP_204_NO_CONTENT)
