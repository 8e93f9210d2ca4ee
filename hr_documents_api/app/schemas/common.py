"""
Shared response models.

Every endpoint answers with the same envelope::

    {"success": true, "message": "...", "data": ..., "pagination": {...}}

and every failure with::

    {"success": false, "error": {"code", "message", "statusCode"},
     "timestamp": "...", "path": "/api/v1/..."}
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys.

    Requests may use either spelling because ``populate_by_name`` is on.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class PaginationInfo(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool = False
    has_previous_page: bool = False


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    pagination: Optional[PaginationInfo] = None


class ErrorDetail(CamelModel):
    code: str
    message: str
    status_code: int
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(CamelModel):
    """Failure envelope, used for OpenAPI documentation of error codes."""

    success: bool = False
    error: ErrorDetail
    timestamp: str
    path: str
