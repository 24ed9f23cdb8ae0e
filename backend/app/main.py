"""
FastAPI main application
REST API server for the product discount catalog.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.core.config import settings
from backend.app.api.v1.api import api_router
from backend.app.schemas.product import ErrorResponse
from backend.app.services.metrics import record_catalog_error
from src.exceptions import (
    CatalogError,
    CatalogValidationError,
    DatabaseOperationError,
    DiscountAlreadyAppliedError,
    ErrorCode,
    ProductNotFoundError,
)

# Logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Sentry (global)
if settings.SENTRY_ENABLED and settings.SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    def before_send_filter(event, hint):
        """Mask credentials"""
        if 'request' in event:
            headers = event['request'].get('headers', {})
            for key in ['Authorization', 'X-API-Key']:
                if key in headers:
                    headers[key] = '***MASKED***'
        return event

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.1,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        before_send=before_send_filter,
        send_default_pii=False,
        attach_stacktrace=True,
    )
    logger.info(f"✅ Sentry initialized (environment: {settings.SENTRY_ENVIRONMENT})")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifecycle

    Startup: create tables, optionally seed the demo catalog
    Shutdown: release the product store
    """
    logger.info("🚀 Starting application...")

    try:
        from backend.app.db.init_db import init_db
        await init_db(seed_demo=settings.SEED_DEMO_CATALOG)
    except Exception as e:
        # Tables may already exist; requests surface store faults as ERR_103
        logger.error(f"❌ Database initialization failed: {e}")

    logger.info("✅ Application started")

    yield

    logger.info("🛑 Shutting down...")

    from backend.app.api.deps import get_container
    await get_container().close()

    logger.info("✅ Shutdown complete")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "PUT"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)

if settings.PROMETHEUS_ENABLED:
    from backend.app.services.metrics import metrics_app
    app.mount("/metrics", metrics_app)
    logger.info("✅ Prometheus metrics endpoint enabled: /metrics")


@app.get("/")
async def root() -> dict:
    """Root endpoint"""
    return {
        "message": "Product Discount Service API",
        "version": settings.VERSION,
        "docs": f"{settings.API_PREFIX}/docs",
    }


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
    }


def _error_response(status_code: int, error_code: ErrorCode, message: str) -> JSONResponse:
    record_catalog_error(error_code.value)
    body = ErrorResponse(error_code=error_code.value, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _status_for(exc: CatalogError) -> int:
    if isinstance(exc, CatalogValidationError):
        return 400
    if isinstance(exc, ProductNotFoundError):
        return 404
    if isinstance(exc, DiscountAlreadyAppliedError):
        return 409
    return 500


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError):
    """Map catalog errors to HTTP status codes"""
    error_code = exc.error_code or ErrorCode.OPERATION_FAILED
    status_code = _status_for(exc)

    if status_code == 500:
        # Driver details stay in the log
        cause = exc.cause if isinstance(exc, DatabaseOperationError) else None
        logger.error(f"{exc.message} (cause: {cause!r})", exc_info=exc)
        return _error_response(status_code, error_code, error_code.description)

    logger.info(f"{request.method} {request.url.path} -> {status_code} {error_code.value}")
    return _error_response(status_code, error_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors, not 422"""
    logger.info(f"Malformed request to {request.url.path}: {exc.errors()}")
    return _error_response(
        400,
        ErrorCode.MALFORMED_REQUEST,
        ErrorCode.MALFORMED_REQUEST.description,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    if settings.SENTRY_ENABLED:
        import sentry_sdk
        with sentry_sdk.push_scope() as scope:
            scope.set_tag("endpoint", str(request.url))
            scope.set_context("request", {
                "method": request.method,
                "url": str(request.url),
            })
            sentry_sdk.capture_exception(exc)

    return _error_response(500, ErrorCode.OPERATION_FAILED, ErrorCode.OPERATION_FAILED.description)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
