from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from inkpost.configs import file_logger
from inkpost.dependencies import AdminDep, AiDep
from inkpost.managers import limiter
from inkpost.schemas.ai import GeneratedPost, GenerateRequest, SummarizeRequest, SummaryResponse

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/ai", tags=["🤖 AI"])


@router.post(
    "/generate",
    response_class=ORJSONResponse,
    summary="Generate a post draft",
    response_model=GeneratedPost,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "title": "Goroutines for Python Developers",
                        "content": "If you have used asyncio...",
                        "excerpt": "How Go's lightweight threads compare to asyncio tasks.",
                        "tags": ["go", "concurrency", "python"],
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Not authenticated"}}},
        },
        503: {
            "description": "AI not configured",
            "content": {
                "application/json": {
                    "example": {
                        "detail": (
                            "Gemini API key is not configured. "
                            "Please add GEMINI_API_KEY to your environment variables."
                        ),
                    },
                },
            },
        },
    },
    operation_id="ai_generate",
)
@limiter.limit("10/minute")
async def generate_post(
    request: Request,
    generate: GenerateRequest,
    admin: AdminDep,
    ai_client: AiDep,
) -> GeneratedPost:
    """
    Draft a complete post from a prompt.

    The draft is returned for review; nothing is stored.
    """
    logger.info(f"Generating post draft ({len(generate.prompt)} prompt chars)")
    return await ai_client.generate_post(generate.prompt)


@router.post(
    "/summarize",
    response_class=ORJSONResponse,
    summary="Summarize post content",
    response_model=SummaryResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"summary": "A short tour of goroutines and channels."},
                },
            },
        },
        400: {
            "description": "Empty content",
            "content": {"application/json": {"example": {"detail": "Content cannot be empty."}}},
        },
    },
    operation_id="ai_summarize",
)
@limiter.limit("10/minute")
async def summarize_post(
    request: Request,
    summarize: SummarizeRequest,
    ai_client: AiDep,
) -> SummaryResponse:
    """
    Summarize post content.

    Rate Limited: 10 requests per minute for fair usage.
    """
    summary = await ai_client.summarize(summarize.content, summarize.max_length)
    return SummaryResponse(summary=summary)
