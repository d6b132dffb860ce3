"""
FastAPI application factory and main app configuration.
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .adapters.cache.redis_cache_service import get_cache_service
from .api.errors import APIError, NotFoundError, ServiceUnavailableError, ValidationError
from .api.routers import health, patients, questions, realtime, reference, sessions, summaries, transcriptions
from .api.utils.responses import fail
from .core.config import get_settings
from .core.exceptions import ConfigurationError, ExternalServiceError
from .core.structured_logger import configure_logging
from .core.utils.file_utils import create_directory
from .domain import errors as domain_errors
from .domain.errors import DomainError
from .middleware import PerformanceMiddleware, RateLimitMiddleware, RequestIDMiddleware

logger = logging.getLogger("ackomer")

API_PREFIX = "/api"

DOMAIN_ERROR_STATUS = {
    domain_errors.SessionNotFoundError: 404,
    domain_errors.PatientNotFoundError: 404,
    domain_errors.TranscriptionNotFoundError: 404,
    domain_errors.SummaryNotFoundError: 404,
    domain_errors.ConditionNotFoundError: 404,
    domain_errors.SymptomNotFoundError: 404,
    domain_errors.DuplicatePatientError: 409,
}


def status_for_domain_error(exc: DomainError) -> int:
    """HTTP status for a domain error; anything unlisted is a client error."""
    for error_type, status_code in DOMAIN_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


def api_error_response(request: Request, exc: APIError) -> JSONResponse:
    return fail(request, exc.code, exc.message, exc.details, exc.http_status)


async def _init_database(app: FastAPI, settings) -> None:
    from beanie import init_beanie
    from motor.motor_asyncio import AsyncIOMotorClient
    import certifi

    from .adapters.db.mongo.models import DOCUMENT_MODELS

    mongo_uri = settings.database.uri
    timeout_ms = settings.database.server_selection_timeout_ms

    # Enable TLS only for Atlas SRV URIs
    if mongo_uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            mongo_uri,
            serverSelectionTimeoutMS=timeout_ms,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=timeout_ms)

    await init_beanie(database=client[settings.database.db_name], document_models=DOCUMENT_MODELS)
    app.state.mongo_client = client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.logging)
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"📊 Environment: {settings.app_env}")
    logger.info(f"🔧 Debug mode: {settings.debug}")

    if not create_directory(settings.file_storage.audio_storage_path):
        logger.warning(f"Could not create audio storage directory {settings.file_storage.audio_storage_path}")

    try:
        await _init_database(app, settings)
        logger.info("✅ Database connection established")
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        logger.error(f"Error type: {type(e).__name__}")
        logger.error(f"Traceback:\n{traceback.format_exc()}")
        sys.stderr.flush()
        raise

    cache = get_cache_service()
    await cache.connect()

    if not settings.azure_openai.is_configured:
        logger.warning("⚠️ Azure OpenAI not configured; summaries and questions are unavailable")
    if not settings.azure_speech.is_configured:
        logger.warning("⚠️ Azure Speech not configured; transcription is unavailable")

    yield

    logger.info(f"🛑 Shutting down {settings.app_name}")
    await cache.close()
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = status_for_domain_error(exc)
        logger.info(f"DomainError: {exc.error_code} ({status_code}) {exc.message}")
        return fail(request, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details, status_code)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return api_error_response(request, ValidationError(str(exc)))

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        req_id = getattr(request.state, "request_id", None)
        logger.error(f"APIError: {exc.code} ({exc.http_status}) {exc.message} | request_id={req_id}")
        return api_error_response(request, exc)

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"ConfigurationError on {request.url.path}: {exc.message}")
        return api_error_response(request, ServiceUnavailableError(exc.message))

    @app.exception_handler(ExternalServiceError)
    async def external_service_error_handler(request: Request, exc: ExternalServiceError):
        logger.error(f"{exc.service} failure on {request.url.path}: {exc.message}")
        return fail(
            request, exc.error_code or "DOWNSTREAM_ERROR", exc.message, {"service": exc.service}, 502
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        req_id = getattr(request.state, "request_id", None)
        errors = [
            {
                "field": " -> ".join(str(x) for x in error.get("loc", [])),
                "message": error.get("msg", "Validation error"),
                "type": error.get("type"),
            }
            for error in exc.errors()
        ]
        logger.warning(
            f"ValidationError on {request.method} {request.url.path}: {errors} | request_id={req_id}"
        )
        message = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        return api_error_response(
            request,
            ValidationError(
                f"Input validation failed: {message}",
                {"errors": errors, "path": request.url.path},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return api_error_response(request, NotFoundError("Route not found", {"path": request.url.path}))
        return fail(request, "HTTP_ERROR", str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        req_id = getattr(request.state, "request_id", None)
        logger.error(f"Unhandled error: {type(exc).__name__}: {exc} | request_id={req_id}", exc_info=True)
        return fail(
            request,
            "INTERNAL_ERROR",
            "An unexpected error has occurred. Please try again later.",
            status_code=500,
        )


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Medical transcription, clinical summary and reflexive question service",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    app.add_middleware(RateLimitMiddleware, settings=settings.rate_limit)
    app.add_middleware(PerformanceMiddleware)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"🌐 {request.method} {request.url.path} from {request.client.host if request.client else 'unknown'}")
        response = await call_next(request)
        logger.info(f"   Response: {response.status_code}")
        return response

    # Outermost, so every other layer sees request.state.request_id
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(health.api_router, prefix=API_PREFIX)
    app.include_router(sessions.router, prefix=API_PREFIX)
    app.include_router(transcriptions.router, prefix=API_PREFIX)
    app.include_router(summaries.router, prefix=API_PREFIX)
    app.include_router(questions.router, prefix=API_PREFIX)
    app.include_router(patients.router, prefix=API_PREFIX)
    app.include_router(reference.conditions_router, prefix=API_PREFIX)
    app.include_router(reference.symptoms_router, prefix=API_PREFIX)
    app.include_router(realtime.router)

    register_exception_handlers(app)

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "GET /health",
                "api_health": "GET /api/health",
                "sessions": "/api/sessions",
                "transcriptions": "/api/transcriptions",
                "summaries": "/api/summaries",
                "questions": "/api/questions",
                "patients": "/api/patients",
                "conditions": "/api/conditions",
                "symptoms": "/api/symptoms",
                "websocket": "WS /ws",
            },
        }

    return app


# Create the app instance
app = create_app()
