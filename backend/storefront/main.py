"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.admin_routes import admin_router
from storefront.api.middleware import LoggingMiddleware, RateLimitMiddleware
from storefront.api.routes import router
from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.exceptions import OrderValidationError, PaymentError, StorefrontError
from storefront.utils.logger import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

settings = get_settings()

# Checkout writes that hit Paystack or create orders, plus guest order lookups
RATE_LIMITED_PATHS = (
    f"{settings.api_prefix}/paystack/initialize",
    f"{settings.api_prefix}/paystack/verify",
    f"{settings.api_prefix}/orders/create",
    f"{settings.api_prefix}/orders/verify-guest",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting application...")
    try:
        await mongodb.connect()
        logger.info("Database connection established")

        yield

    finally:
        # Shutdown
        logger.info("Shutting down application...")
        await mongodb.disconnect()
        logger.info("Database connection closed")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Sports merchandise storefront: catalog, cart, checkout and order tracking",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    requests_per_period=settings.rate_limit_requests,
    period_seconds=settings.rate_limit_period,
    paths=RATE_LIMITED_PATHS,
)

# Include routers
app.include_router(router)
app.include_router(admin_router)


# Exception handlers
@app.exception_handler(StorefrontError)
async def storefront_exception_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Translate domain errors into the error envelope."""
    content = {"success": False, "error": str(exc)}
    if isinstance(exc, OrderValidationError) and exc.missing_fields:
        content["missingFields"] = exc.missing_fields
    if isinstance(exc, PaymentError) and exc.details is not None:
        content["details"] = exc.details

    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    else:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report invalid request bodies as 400 with the missing field names."""
    errors = exc.errors()
    missing = [str(error["loc"][-1]) for error in errors if error.get("type") == "missing"]
    logger.warning("Invalid request on %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Missing required fields" if missing else "Invalid request",
            "missingFields": missing,
            "details": jsonable_encoder(errors),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An unexpected error occurred",
        },
    )


# Root endpoint
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
        "storefront.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
