"""Page arithmetic shared by every paginated listing."""

import math

from ..schemas.common import PaginationInfo
from .exceptions import PageNotFoundError, ValidationError


def validate_page_params(page: int, limit: int) -> None:
    if page < 1 or limit < 1:
        raise ValidationError(
            "Parâmetros de paginação devem ser maiores que zero",
            details={"page": page, "limit": limit},
        )


def calculate_total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def validate_page(page: int, total: int, limit: int) -> None:
    """Raise ``PageNotFoundError`` when ``page`` lies past the last page.

    An empty result set accepts any page so clients can always ask for
    the first page of a filter that matches nothing.
    """
    if page < 1:
        raise PageNotFoundError(page, 1)
    if total == 0:
        return
    total_pages = calculate_total_pages(total, limit)
    if page > total_pages:
        raise PageNotFoundError(page, total_pages)


def build_pagination(page: int, limit: int, total: int) -> PaginationInfo:
    total_pages = calculate_total_pages(total, limit)
    return PaginationInfo(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit
