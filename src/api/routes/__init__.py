"""API route modules."""

from .events import router as events_router
from .grants import router as grants_router
from .health import router as health_router
from .submissions import router as submissions_router

__all__ = ["health_router", "events_router", "submissions_router", "grants_router"]
