from inkpost.dependencies.dependencies import (
    AdminDep,
    AiDep,
    AuthServiceDep,
    BearerTokenDep,
    ImageServiceDep,
    OptionalBearerTokenDep,
    OptionalIdentityDep,
    PostRepoDep,
    QueryEngineDep,
    QueryStateDep,
    RequestContextDep,
    get_ai_client_state,
    get_auth_service,
    get_current_admin,
    get_image_service,
    get_optional_identity,
    get_post_repository,
    get_query_engine,
    get_query_state,
    get_request_context,
)

__all__ = [
    "AdminDep",
    "AiDep",
    "AuthServiceDep",
    "BearerTokenDep",
    "ImageServiceDep",
    "OptionalBearerTokenDep",
    "OptionalIdentityDep",
    "PostRepoDep",
    "QueryEngineDep",
    "QueryStateDep",
    "RequestContextDep",
    "get_ai_client_state",
    "get_auth_service",
    "get_current_admin",
    "get_image_service",
    "get_optional_identity",
    "get_post_repository",
    "get_query_engine",
    "get_query_state",
    "get_request_context",
]
