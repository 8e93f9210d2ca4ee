"""
Employee endpoints for API v1.

Besides CRUD this router exposes everything hanging off one employee:
the required document types (``/required-documents``), document
submissions (``/documents``) and the documentation summaries.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Body, Depends, Query, status

from hr_documents_api.app.api.v1.deps import valid_document_type_id, valid_employee_id
from hr_documents_api.app.core.config import settings
from hr_documents_api.app.core.exceptions import EmployeeNotFoundError
from hr_documents_api.app.core.responses import ok, paginated
from hr_documents_api.app.core.validation import validate_object_ids
from hr_documents_api.app.schemas.common import ApiResponse
from hr_documents_api.app.schemas.document import (
    DeduplicationResult,
    DocumentationOverview,
    DocumentationStatus,
    DocumentRead,
    DocumentTypeIdsRequest,
    PendingDocument,
    RequiredDocumentLink,
    SendDocumentRequest,
    SentDocument,
)
from hr_documents_api.app.schemas.document_type import DocumentTypeRef
from hr_documents_api.app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate, EnrichedEmployee
from hr_documents_api.app.services.employee_documentation_service import EmployeeDocumentationService
from hr_documents_api.app.services.employee_link_service import EmployeeLinkService
from hr_documents_api.app.services.employee_service import EmployeeService

router = APIRouter()

LinkBody = Union[List[str], DocumentTypeIdsRequest]


def _type_ids(body: LinkBody) -> List[str]:
    ids = body.document_type_ids if isinstance(body, DocumentTypeIdsRequest) else body
    return validate_object_ids(ids, "documentTypeIds")


@router.post("", response_model=ApiResponse[EmployeeRead], status_code=status.HTTP_201_CREATED)
async def create_employee(employee: EmployeeCreate) -> ApiResponse:
    """Register an employee.  The CPF must not belong to another active employee."""
    created = await EmployeeService.create(employee)
    return ok(created, "Colaborador criado com sucesso")


@router.get("", response_model=ApiResponse[List[EmployeeRead]])
async def list_employees(
    status_filter: Optional[str] = Query(None, alias="status", description="active, inactive ou all"),
    name: Optional[str] = Query(None),
    page: int = Query(1),
    limit: int = Query(settings.employees_default_limit, le=settings.max_page_limit),
) -> ApiResponse:
    """Listar colaboradores.

    - **status**: `active`, `inactive` ou `all` (padrão definido em configuração).
    - **name**: filtro por parte do nome, sem diferenciar maiúsculas.
    - **page**, **limit**: paginação.
    """
    items, total = await EmployeeService.list(
        status_filter or settings.employees_default_status, name, page, limit
    )
    return paginated(items, total, page, limit)


@router.get("/search", response_model=ApiResponse[List[EnrichedEmployee]])
async def search_employees(
    query: str = Query("", description="Nome ou CPF"),
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1),
    limit: int = Query(settings.employees_default_limit, le=settings.max_page_limit),
) -> ApiResponse:
    """Search by CPF (exact) or name (substring) and attach documentation counters."""
    items, total = await EmployeeService.search_by_name_or_cpf(
        query, status_filter or settings.employees_default_status, page, limit
    )
    enriched = await EmployeeDocumentationService.enrich_employees_with_documentation_info(items)
    return paginated(enriched, total, page, limit)


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeRead])
async def get_employee(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    return ok(await EmployeeService.get(employee_id))


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeRead])
async def update_employee(
    employee: EmployeeUpdate,
    employee_id: str = Depends(valid_employee_id),
) -> ApiResponse:
    updated = await EmployeeService.update(employee_id, employee)
    return ok(updated, "Colaborador atualizado com sucesso")


@router.delete("/{employee_id}", response_model=ApiResponse[EmployeeRead])
async def delete_employee(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    """Soft delete.  Deleting an already inactive employee answers 404."""
    deleted = await EmployeeService.soft_delete(employee_id)
    if deleted is None:
        raise EmployeeNotFoundError(employee_id)
    return ok(deleted, "Colaborador removido com sucesso")


@router.patch("/{employee_id}/restore", response_model=ApiResponse[EmployeeRead])
async def restore_employee(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    restored = await EmployeeService.restore(employee_id)
    if restored is None:
        raise EmployeeNotFoundError(employee_id)
    return ok(restored, "Colaborador restaurado com sucesso")


@router.post(
    "/{employee_id}/required-documents",
    response_model=ApiResponse[List[RequiredDocumentLink]],
    status_code=status.HTTP_201_CREATED,
)
async def link_required_documents(
    body: LinkBody = Body(...),
    employee_id: str = Depends(valid_employee_id),
) -> ApiResponse:
    """Vincular tipos de documento obrigatórios.

    Aceita um array de IDs ou ``{"documentTypeIds": [...]}``.  Se algum
    tipo já estiver vinculado nenhum vínculo é criado.
    """
    links = await EmployeeLinkService.link_document_types(employee_id, _type_ids(body))
    return ok(links, "Tipos de documento vinculados com sucesso")


@router.delete("/{employee_id}/required-documents", response_model=ApiResponse[List[DocumentTypeRef]])
async def unlink_required_documents(
    body: LinkBody = Body(...),
    employee_id: str = Depends(valid_employee_id),
) -> ApiResponse:
    unlinked = await EmployeeLinkService.unlink_document_types(employee_id, _type_ids(body))
    return ok(unlinked, "Tipos de documento desvinculados com sucesso")


@router.get("/{employee_id}/required-documents", response_model=ApiResponse[List[RequiredDocumentLink]])
async def list_required_documents(
    employee_id: str = Depends(valid_employee_id),
    status_filter: str = Query("active", alias="status"),
) -> ApiResponse:
    return ok(await EmployeeLinkService.get_required_documents(employee_id, status_filter))


@router.post(
    "/{employee_id}/required-documents/deduplicate",
    response_model=ApiResponse[DeduplicationResult],
)
async def deduplicate_required_documents(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    deactivated = await EmployeeLinkService.remove_duplicate_links(employee_id)
    return ok(DeduplicationResult(deactivated=deactivated))


@router.delete(
    "/{employee_id}/required-documents/{document_type_id}",
    response_model=ApiResponse[List[DocumentTypeRef]],
)
async def unlink_required_document(
    employee_id: str = Depends(valid_employee_id),
    document_type_id: str = Depends(valid_document_type_id),
) -> ApiResponse:
    unlinked = await EmployeeLinkService.unlink_document_types(employee_id, [document_type_id])
    return ok(unlinked, "Tipo de documento desvinculado com sucesso")


@router.patch(
    "/{employee_id}/required-documents/{document_type_id}/restore",
    response_model=ApiResponse[RequiredDocumentLink],
)
async def restore_required_document(
    employee_id: str = Depends(valid_employee_id),
    document_type_id: str = Depends(valid_document_type_id),
) -> ApiResponse:
    link = await EmployeeLinkService.restore_document_type_link(employee_id, document_type_id)
    return ok(link, "Vínculo restaurado com sucesso")


@router.post("/{employee_id}/documents/{document_type_id}", response_model=ApiResponse[DocumentRead])
async def send_document(
    document: SendDocumentRequest,
    employee_id: str = Depends(valid_employee_id),
    document_type_id: str = Depends(valid_document_type_id),
) -> ApiResponse:
    """Record a submission.  The type must be linked to the employee."""
    sent = await EmployeeDocumentationService.send_document(employee_id, document_type_id, document.value)
    return ok(sent, "Documento enviado com sucesso")


@router.get("/{employee_id}/documents/sent", response_model=ApiResponse[List[SentDocument]])
async def list_sent_documents(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    return ok(await EmployeeDocumentationService.get_sent_documents(employee_id))


@router.get("/{employee_id}/documents/pending", response_model=ApiResponse[List[PendingDocument]])
async def list_employee_pending_documents(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    return ok(await EmployeeDocumentationService.get_pending_documents(employee_id))


@router.get("/{employee_id}/documentation-status", response_model=ApiResponse[DocumentationStatus])
async def documentation_status(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    return ok(await EmployeeDocumentationService.get_documentation_status(employee_id))


@router.get("/{employee_id}/documentation", response_model=ApiResponse[DocumentationOverview])
async def documentation_overview(employee_id: str = Depends(valid_employee_id)) -> ApiResponse:
    return ok(await EmployeeDocumentationService.get_documentation_overview(employee_id))
