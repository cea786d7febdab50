"""Inkpost Backend - blog content management API."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from inkpost.configs import settings
from inkpost.db import ping_db
from inkpost.errors import (
    AiError,
    AuthenticationError,
    DatabaseError,
    PasswordHashingError,
    UploadError,
    ai_exception_handler,
    auth_exception_handler,
    database_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from inkpost.managers import limiter, rate_limit_exceeded_handler
from inkpost.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from inkpost.routes import ai_router, auth_router, posts_router
from inkpost.schemas import HealthCheckResponse, ServicesStatus
from inkpost.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog CMS API: public listing with search, tags and pagination; admin authoring with AI drafts.",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)


routes = [
    posts_router,
    ai_router,
    auth_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (AuthenticationError, auth_exception_handler),
    (PasswordHashingError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (AiError, ai_exception_handler),
    (UploadError, upload_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 10:00:00",
                        "services": {
                            "database": "available",
                            "ai_client": "configured",
                            "image_storage": "configured",
                        },
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Health check endpoint with service availability.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        ``ok`` when the document store answers, ``degraded`` otherwise.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "...", "services": { ... }}
    """
    database_ok = await ping_db()

    ai_client = getattr(request.app.state, "ai_client", None)
    image_storage = getattr(request.app.state, "image_storage", None)

    services = ServicesStatus(
        database="available" if database_ok else "unavailable",
        ai_client="configured" if ai_client and ai_client.is_configured else "not_configured",
        image_storage=(
            "configured" if image_storage and image_storage.is_configured else "not_configured"
        ),
    )

    return HealthCheckResponse(
        version=app.version,
        status="ok" if database_ok else "degraded",
        timestamp=today_str(),
        services=services,
    )
