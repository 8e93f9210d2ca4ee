"""
Document type endpoints for API v1.

Listing defaults to active types only (configurable through
``DOCUMENT_TYPES_DEFAULT_STATUS``), unlike the employee listing.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hr_documents_api.app.api.v1.deps import valid_document_type_id
from hr_documents_api.app.core.config import settings
from hr_documents_api.app.core.exceptions import DocumentTypeNotFoundError
from hr_documents_api.app.core.responses import ok, paginated
from hr_documents_api.app.schemas.common import ApiResponse
from hr_documents_api.app.schemas.document_type import DocumentTypeCreate, DocumentTypeRead, DocumentTypeUpdate
from hr_documents_api.app.schemas.employee import EmployeeRead
from hr_documents_api.app.services.document_type_service import DocumentTypeService
from hr_documents_api.app.services.employee_service import EmployeeService

router = APIRouter()


@router.post("", response_model=ApiResponse[DocumentTypeRead], status_code=status.HTTP_201_CREATED)
async def create_document_type(document_type: DocumentTypeCreate) -> ApiResponse:
    """Create a type.  The name is stored trimmed and upper-cased."""
    created = await DocumentTypeService.create(document_type)
    return ok(created, "Tipo de documento criado com sucesso")


@router.get("", response_model=ApiResponse[List[DocumentTypeRead]])
async def list_document_types(
    status_filter: Optional[str] = Query(None, alias="status"),
    name: Optional[str] = Query(None),
    page: int = Query(1),
    limit: int = Query(settings.document_types_default_limit, le=settings.max_page_limit),
) -> ApiResponse:
    items, total = await DocumentTypeService.list(
        status_filter or settings.document_types_default_status, name, page, limit
    )
    return paginated(items, total, page, limit)


@router.get("/{document_type_id}", response_model=ApiResponse[DocumentTypeRead])
async def get_document_type(document_type_id: str = Depends(valid_document_type_id)) -> ApiResponse:
    return ok(await DocumentTypeService.get(document_type_id))


@router.put("/{document_type_id}", response_model=ApiResponse[DocumentTypeRead])
async def update_document_type(
    document_type: DocumentTypeUpdate,
    document_type_id: str = Depends(valid_document_type_id),
) -> ApiResponse:
    updated = await DocumentTypeService.update(document_type_id, document_type)
    return ok(updated, "Tipo de documento atualizado com sucesso")


@router.delete("/{document_type_id}", response_model=ApiResponse[DocumentTypeRead])
async def delete_document_type(document_type_id: str = Depends(valid_document_type_id)) -> ApiResponse:
    deleted = await DocumentTypeService.soft_delete(document_type_id)
    if deleted is None:
        raise DocumentTypeNotFoundError(document_type_id)
    return ok(deleted, "Tipo de documento removido com sucesso")


@router.patch("/{document_type_id}/restore", response_model=ApiResponse[DocumentTypeRead])
async def restore_document_type(document_type_id: str = Depends(valid_document_type_id)) -> ApiResponse:
    restored = await DocumentTypeService.restore(document_type_id)
    if restored is None:
        raise DocumentTypeNotFoundError(document_type_id)
    return ok(restored, "Tipo de documento restaurado com sucesso")


@router.get("/{document_type_id}/employees", response_model=ApiResponse[List[EmployeeRead]])
async def list_linked_employees(
    document_type_id: str = Depends(valid_document_type_id),
    page: int = Query(1),
    limit: int = Query(settings.employees_default_limit, le=settings.max_page_limit),
) -> ApiResponse:
    """Active employees currently required to hand in this type."""
    items, total = await EmployeeService.find_by_document_type(document_type_id, page, limit)
    return paginated(items, total, page, limit)
