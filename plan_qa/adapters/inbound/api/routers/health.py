"""Health check endpoints."""

from fastapi import APIRouter

from ..... import __version__
from .....composition.container import get_document_store
from .....config.settings import settings
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch the document store."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        document_store="not_checked",
    )


@router.get("/ready", response_model=HealthResponse)
def readiness_check() -> HealthResponse:
    """Readiness probe.

    Lists the document store and reports whether API credentials are set.
    A store error is reported in the body rather than failing the probe.
    """
    try:
        count = len(get_document_store().list_documents())
        store_status = f"ok ({count} documents)"
    except Exception as e:
        store_status = f"error: {e}"

    return HealthResponse(
        status="ready" if settings.is_configured else "unconfigured",
        version=__version__,
        document_store=store_status,
        configured=settings.is_configured,
    )
