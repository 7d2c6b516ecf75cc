"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.logging import request_log_middleware
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import events_router, grants_router, health_router, submissions_router
from core import config
from core.errors import DashboardError

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: report missing integrations
    if not config.AIRBRIDGE_API_KEY:
        logger.warning("AIRBRIDGE_API_KEY is not set; event lookups will fail")
    if not config.SLACK_WEBHOOK_URL:
        logger.warning("SLACK_WEBHOOK_URL is not set; grant requests will not be forwarded")
    if not config.ADMIN_SLACK_IDS:
        logger.info("No ADMIN_SLACK_IDS configured")

    yield


app = FastAPI(
    title="Boba Workshop Dashboard API",
    description="Organizer dashboard for boba workshop submissions and grant requests",
    version=config.API_VERSION,
    debug=config.API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if config.API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.middleware("http")(request_log_middleware)


def error_response(request: Request, status_code: int, body: ErrorResponse) -> JSONResponse:
    request.state.error_code = body.code
    request.state.error_message = body.error
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    """Expected failures carry their own status and code."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(
        request,
        exc.status_code,
        ErrorResponse(error=exc.message, code=exc.code, details=exc.details),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed parameters are a 400."""
    details = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return error_response(
        request,
        400,
        ErrorResponse(error="Invalid request", code=ErrorCodes.INVALID_REQUEST, details=details),
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        request,
        500,
        ErrorResponse(error="Internal server error", code=ErrorCodes.INTERNAL_ERROR, details=[]),
    )


# Include routers
app.include_router(health_router)
app.include_router(events_router)
app.include_router(submissions_router)
app.include_router(grants_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.API_DEBUG,
    )
