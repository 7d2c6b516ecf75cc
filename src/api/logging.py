"""SQLite request logging for API."""

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from fastapi import Request

from core import config
from core.database import get_connection

logger = logging.getLogger(__name__)


@dataclass
class RequestLog:
    """Captured request/response data for logging. Never holds request bodies."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    record_count: int | None = None


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def log_request(log: RequestLog, db_path: Path | None = None) -> None:
    """Write request log to SQLite database."""
    conn = get_connection(db_path)
    try:
        conn.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip,
                status_code, error_code, error_message, processing_time_ms,
                record_count
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.record_count,
            ),
        )
        conn.commit()
    finally:
        conn.close()


async def request_log_middleware(request: Request, call_next):
    """Record every request in the api_requests table."""
    if not config.REQUEST_LOG_ENABLED:
        return await call_next(request)

    start_time = time.time()
    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
    )

    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        request_log.error_code = getattr(request.state, "error_code", None)
        request_log.error_message = getattr(request.state, "error_message", None)
        request_log.record_count = getattr(request.state, "record_count", None)
    except Exception:
        request_log.status_code = 500
        request_log.error_code = "INTERNAL_ERROR"
        request_log.error_message = "Internal server error"
        raise
    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        try:
            log_request(request_log)
        except Exception as e:
            # Don't fail the request if logging fails
            logger.warning("Could not write request log: %s", e)

    return response
