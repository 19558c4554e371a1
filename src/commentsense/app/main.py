# src/commentsense/app/main.py
"""
FastAPI Main Application
CommentSense comment and video analytics API
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException

from commentsense import __version__
from commentsense.app.config import get_config, validate_config, setup_logging
from commentsense.app.dependencies import get_session_store
from commentsense.domain.exceptions import (
    ConfigurationError,
    ServiceError,
    error_to_http_status,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Application Lifecycle Management
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown events
    """
    # ========== STARTUP ==========
    logger.info("🚀 Starting CommentSense...")

    config = get_config()
    setup_logging(config)

    validation_result = validate_config(config)
    if not validation_result["valid"]:
        logger.error("❌ Configuration validation failed!")
        for error in validation_result["errors"]:
            logger.error(f"  - {error}")
        raise ConfigurationError(
            "Invalid configuration", {"errors": validation_result["errors"]}
        )

    for warning in validation_result["warnings"]:
        logger.warning(f"  ⚠️  {warning}")

    logger.info("✅ Configuration loaded and validated")
    _print_startup_summary(config)

    yield

    # ========== SHUTDOWN ==========
    logger.info("🛑 Shutting down application...")
    store = get_session_store()
    logger.info(f"🧹 Discarding {len(store)} analysis sessions")
    store.clear()
    logger.info("✅ Application shutdown complete")


def _print_startup_summary(config) -> None:
    """Log startup summary"""
    logger.info(
        "\n"
        f"📋 CommentSense {__version__}\n"
        f"   • API: http://{config.api.host}:{config.api.port}{config.api.prefix}\n"
        f"   • Docs: http://{config.api.host}:{config.api.port}/docs\n"
        f"   • Debug Mode: {config.api.debug}\n"
        f"   • Max upload: {config.ingestion.max_file_size_mb} MB "
        f"({', '.join(config.ingestion.allowed_extensions_list) or 'any'})\n"
        f"   • Sessions kept: {config.session.max_sessions}\n"
        f"   • Assistant: {'✅' if config.features.enable_assistant else '❌'}\n"
        f"   • Export: {'✅' if config.features.enable_export else '❌'}"
    )


# ============================================================================
# FastAPI Application Instance
# ============================================================================


def create_app() -> FastAPI:
    """
    FastAPI application factory
    Creates and configures the FastAPI application
    """
    config = get_config()

    app = FastAPI(
        title="CommentSense",
        description="Heuristic comment and video analytics: sentiment, categories, spam, quality and engagement metrics",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=config.api.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    _register_routers(app, config)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers"""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Handle service-layer errors not converted by a router"""
        status_code = error_to_http_status(exc)
        logger.error(f"Service error: {status_code} - {exc.message}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions"""
        logger.error(f"HTTP error: {exc.status_code} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "status_code": exc.status_code,
                "path": str(request.url),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle validation errors"""
        logger.error(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder(
                {"error": "Validation Error", "details": exc.errors()}
            ),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions"""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": str(exc),
                "path": str(request.url),
            },
        )


def _register_routers(app: FastAPI, config) -> None:
    """Register API routers"""
    from commentsense.api.routers import analysis_router

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "version": __version__,
            "sessions": len(get_session_store()),
        }

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API information"""
        return {
            "message": "CommentSense API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "analysis": f"{config.api.prefix}/analysis",
        }

    @app.get("/system/info", tags=["System"])
    async def system_info():
        """Configuration summary"""
        return {"config": config.get_summary()}

    app.include_router(analysis_router, prefix=config.api.prefix)

    logger.info("✅ API routers registered")


# ============================================================================
# Application Instance
# ============================================================================

app = create_app()


# ============================================================================
# Development Server Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    config = get_config()

    uvicorn.run(
        "commentsense.app.main:app",
        host=config.api.host,
        port=config.api.port,
        reload=config.api.debug,
        log_level=config.logging.level.lower(),
    )
