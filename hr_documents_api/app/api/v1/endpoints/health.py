"""Liveness endpoint."""

from fastapi import APIRouter

from hr_documents_api.app.core.config import settings
from hr_documents_api.app.core.db import get_cursor
from hr_documents_api.app.core.responses import ok
from hr_documents_api.app.schemas.common import ApiResponse

router = APIRouter()


@router.get("/health", response_model=ApiResponse[dict])
async def health() -> ApiResponse:
    """Report the API version after a trivial database round trip."""
    with get_cursor() as cursor:
        cursor.execute("SELECT 1").fetchone()
    return ok({"status": "ok", "version": settings.api_version, "database": "ok"})
