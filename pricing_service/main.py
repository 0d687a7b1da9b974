"""
FastAPI application - pricing service entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from pricing_service.config import get_settings
from pricing_service.core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    PricingServiceError,
    RemoteServiceError
)
from pricing_service.core.logging import setup_logging, get_logger
from pricing_service.api.dependencies import close_http_clients
from pricing_service.api.v1.router import api_router

settings = get_settings()
setup_logging(
    log_level=settings.LOG_LEVEL,
    is_debug=settings.DEBUG,
    service_name=settings.APP_NAME
)
logger = get_logger(__name__)

# Domain errors that escape a handler
ERROR_STATUS = {
    InvalidArgumentError: (status.HTTP_400_BAD_REQUEST, "Invalid argument"),
    ConfigurationError: (status.HTTP_503_SERVICE_UNAVAILABLE, "Service misconfigured"),
    RemoteServiceError: (status.HTTP_502_BAD_GATEWAY, "Upstream service error"),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifecycle events
    Logs the configuration on startup, closes outbound sessions on shutdown
    """
    logger.info(
        "Starting pricing service",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        storefront_api_url=settings.STOREFRONT_API_URL,
        tier_cache_seconds=settings.BUNDLE_TIER_CACHE_SECONDS
    )

    yield

    close_http_clients()
    logger.info("Shutting down pricing service")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Bundle pricing, order discount breakdowns and checkout validation",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(PricingServiceError)
async def pricing_error_handler(request: Request, exc: PricingServiceError) -> JSONResponse:
    status_code, error = next(
        (mapped for cls, mapped in ERROR_STATUS.items() if isinstance(exc, cls)),
        (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    )
    logger.error(
        "Unhandled pricing service error",
        path=request.url.path,
        status_code=status_code,
        error=exc.message
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": {"error": error, "message": exc.message, "details": exc.details}}
    )


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")


@app.get("/ping", include_in_schema=False)
async def ping():
    return {"status": "pong"}
