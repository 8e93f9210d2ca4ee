"""Organisation-wide document queries."""

from typing import List, Optional

from fastapi import APIRouter, Query

from hr_documents_api.app.core.config import settings
from hr_documents_api.app.core.responses import paginated
from hr_documents_api.app.core.validation import validate_object_id
from hr_documents_api.app.schemas.common import ApiResponse
from hr_documents_api.app.schemas.document import PendingDocumentEntry
from hr_documents_api.app.services.employee_documentation_service import EmployeeDocumentationService

router = APIRouter()


@router.get("/pending", response_model=ApiResponse[List[PendingDocumentEntry]])
async def list_pending_documents(
    status_filter: Optional[str] = Query(None, alias="status", description="Situação do colaborador"),
    document_type_id: Optional[str] = Query(None, alias="documentTypeId"),
    page: int = Query(1),
    limit: int = Query(settings.document_types_default_limit, le=settings.max_page_limit),
) -> ApiResponse:
    """Listar documentos pendentes de todos os colaboradores.

    - **status**: filtra pela situação do colaborador (padrão ``active``).
    - **documentTypeId**: restringe a um tipo de documento.
    """
    if document_type_id:
        document_type_id = validate_object_id(document_type_id, "documentTypeId")
    items, total = await EmployeeDocumentationService.list_pending_documents(
        status_filter or settings.pending_documents_default_status, document_type_id, page, limit
    )
    return paginated(items, total, page, limit)
