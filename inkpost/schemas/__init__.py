from inkpost.schemas.ai import GeneratedPost, GenerateRequest, SummarizeRequest, SummaryResponse
from inkpost.schemas.auth import Identity, SessionStatus, Token, TokenData
from inkpost.schemas.health import HealthCheckResponse, ServicesStatus
from inkpost.schemas.post import (
    ImageUploadResponse,
    PageLink,
    PostCreate,
    PostPage,
    PostResponse,
    PostUpdate,
    QueryState,
    RequestContext,
    TagLink,
    TagVocabularyResponse,
)

__all__ = [
    "GenerateRequest",
    "GeneratedPost",
    "HealthCheckResponse",
    "Identity",
    "ImageUploadResponse",
    "PageLink",
    "PostCreate",
    "PostPage",
    "PostResponse",
    "PostUpdate",
    "QueryState",
    "RequestContext",
    "ServicesStatus",
    "SessionStatus",
    "SummarizeRequest",
    "SummaryResponse",
    "TagLink",
    "TagVocabularyResponse",
    "Token",
    "TokenData",
]
