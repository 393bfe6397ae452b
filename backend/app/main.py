"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from app.api.routes import router
from app.config import get_settings
from app.database.mongodb import mongodb
from app.errors import EmptyCartError, StorefrontError
from app.models.request import ErrorResponse
from app.utils.logger import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting application...")
    try:
        await mongodb.connect()
        yield
    finally:
        logger.info("Shutting down application...")
        await mongodb.disconnect()


async def storefront_exception_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Render a storefront error with its status code."""
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)

    body = ErrorResponse(
        error=type(exc).__name__,
        message=exc.message,
        redirect=exc.redirect if isinstance(exc, EmptyCartError) else None,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Storefront API: catalogue, cart, checkout, orders and wishlist",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    RateLimitMiddleware,
    max_requests=settings.rate_limit_requests,
    period=settings.rate_limit_period,
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(router)
register_exception_handlers(app)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
