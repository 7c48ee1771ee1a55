"""
ScentValue FastAPI Application

Main entry point for the API server.
Run with: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import get_settings
from api.middleware.errors import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.routers import assistant, capture, exports, health, ledger

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    pricing = settings.pricing

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(
        f"Pricing: tare={pricing.tare_grams}g rate={pricing.rate_per_gram} {pricing.currency}/g"
    )
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set - assistant and scanning will return empty results")

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="API for perfume inventory valuation: weight parsing, pricing, batch export and scanning",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Custom middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(
        ledger.router,
        prefix="/api/v1",
        tags=["Ledger"]
    )
    app.include_router(
        exports.router,
        prefix="/api/v1/exports",
        tags=["Exports"]
    )
    app.include_router(
        capture.router,
        prefix="/api/v1/capture",
        tags=["Capture"]
    )
    app.include_router(
        assistant.router,
        prefix="/api/v1/assistant",
        tags=["Assistant"]
    )

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
