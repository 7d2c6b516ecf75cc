"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core import config

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if the upstream key is configured, 503 otherwise. A missing
    Slack webhook is reported but does not make the service unhealthy.
    """
    upstream_configured = bool(config.AIRBRIDGE_API_KEY)
    notifications_configured = bool(config.SLACK_WEBHOOK_URL)
    timestamp = datetime.now(timezone.utc).isoformat()

    if upstream_configured:
        return HealthResponse(
            status="healthy",
            version=config.API_VERSION,
            upstream_configured=True,
            notifications_configured=notifications_configured,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=config.API_VERSION,
                upstream_configured=False,
                notifications_configured=notifications_configured,
                timestamp=timestamp,
                error="AIRBRIDGE_API_KEY not configured",
            ).model_dump(),
        )
