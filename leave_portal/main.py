"""
Leave Portal - FastAPI application.

create_app() builds the application around an explicit Config. The
database handle is constructed in the lifespan, provisioned on startup
and disposed on shutdown; request handlers reach it through app.state.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional, Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from leave_portal.core.config import Config, settings as default_settings
from leave_portal.core.exceptions import AppException
from leave_portal.core.logging import setup_logging
from leave_portal.database import Database
from leave_portal.routers.api_router import api_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Config] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    # ========================================================================
    # LIFESPAN MANAGEMENT
    # ========================================================================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        - Startup: build the database handle and provision the schema
        - Shutdown: release the connection pool
        """
        logger.info(f"Starting {settings.app_name} v{settings.version} ({settings.environment})")
        database = Database(settings.database_url, echo=settings.database_echo)
        try:
            await database.init()
            logger.info("✓ Database initialized successfully")
        except Exception as e:
            logger.error(f"✗ Database initialization failed: {e}")
            await database.dispose()
            raise
        app.state.database = database

        yield  # Application runs here

        logger.info("Gracefully shutting down...")
        await database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Submit, review and delete employee leave requests",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ========================================================================
    # MIDDLEWARE
    # ========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # EXCEPTION HANDLERS
    # Every error leaves as {"error": "<message>"}
    # ========================================================================
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed JSON or path parameters that cannot be coerced."""
        logger.warning(f"Malformed request: {exc.errors()}", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request payload"},
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle domain-specific application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"AppException: {exc.message}", extra={"code": exc.error_code, "details": exc.details})
        else:
            logger.warning(f"AppException: {exc.message}", extra={"code": exc.error_code})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
        """Handle standard HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail if isinstance(exc.detail, str) else "Request failed"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Fallback handler for unhandled server errors."""
        logger.exception("Unhandled server error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # ========================================================================
    # ROUTERS
    # ========================================================================
    app.include_router(api_router, prefix=settings.api_prefix)

    # ========================================================================
    # OPERATIONAL ENDPOINTS (at root level)
    # ========================================================================
    @app.get("/", tags=["Health"])
    async def root():
        """API root endpoint."""
        return {
            "message": f"{settings.app_name} API",
            "version": settings.version,
            "docs": "/docs",
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe for load balancers and orchestrators."""
        return {
            "status": "up",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.version,
            "environment": settings.environment,
        }

    @app.get("/readiness", tags=["Health"])
    async def readiness_check(request: Request):
        """Readiness probe - verifies database connectivity."""
        try:
            await request.app.state.database.ping()
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            raise HTTPException(status_code=503, detail="Service not ready")
        return {
            "status": "ready",
            "components": {"database": "connected"},
        }

    return app


app = create_app()
