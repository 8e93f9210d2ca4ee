"""Builders for the success envelope returned by every route."""

from typing import Any, Optional

from ..schemas.common import ApiResponse
from .pagination import build_pagination


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def paginated(items: list, total: int, page: int, limit: int, message: Optional[str] = None) -> ApiResponse:
    return ApiResponse(
        success=True,
        message=message,
        data=items,
        pagination=build_pagination(page, limit, total),
    )
