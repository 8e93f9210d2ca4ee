"""
Sent/pending view of an employee's required documents.

A required type is *sent* when the employee has an active ``SENT``
document for it and *pending* otherwise.  Only actively linked types
count toward completion, so ``sent + pending`` always equals the number
of required types.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from hr_documents_api.app.core.db import get_cursor
from hr_documents_api.app.core.exceptions import DocumentTypeNotFoundError, EmployeeNotFoundError, ValidationError
from hr_documents_api.app.core.pagination import offset_for, validate_page, validate_page_params
from hr_documents_api.app.core.validation import clean_document_value, format_document_for_display, validate_status
from hr_documents_api.app.repositories.document_repository import DocumentRepository
from hr_documents_api.app.repositories.document_type_repository import DocumentTypeRepository
from hr_documents_api.app.repositories.employee_repository import EmployeeRepository
from hr_documents_api.app.repositories.link_repository import LinkRepository
from hr_documents_api.app.schemas.document import (
    DocumentationOverview,
    DocumentationStatus,
    DocumentationStatusItem,
    DocumentRead,
    DocumentStatus,
    PendingDocument,
    PendingDocumentEntry,
    SentDocument,
)
from hr_documents_api.app.schemas.document_type import DocumentTypeCategory
from hr_documents_api.app.schemas.employee import DocumentationSummary, EmployeeRead, EmployeeRef, EnrichedEmployee
from hr_documents_api.app.services.employee_link_service import TYPE_NOT_FOUND_PLACEHOLDER, document_type_ref

logger = logging.getLogger(__name__)


def completion_percentage(sent: int, required: int) -> int:
    """Share of required documents already sent, rounded half up."""
    if required <= 0:
        return 0
    return int(math.floor(sent / required * 100 + 0.5))


class EmployeeDocumentationService:

    @staticmethod
    def _require_employee(cursor, employee_id: str, active_only: bool = False) -> Dict[str, Any]:
        employee = EmployeeRepository.find_by_id(cursor, employee_id, active_only=active_only)
        if not employee:
            raise EmployeeNotFoundError(employee_id)
        return employee

    @staticmethod
    def _pending_for(cursor, employee_id: str, sent_type_ids) -> List[PendingDocument]:
        first_links: Dict[str, Dict[str, Any]] = {}
        for link in LinkRepository.for_employee(cursor, employee_id, "active"):
            if link["document_type_id"] not in sent_type_ids:
                first_links.setdefault(link["document_type_id"], link)
        types = DocumentTypeRepository.find_by_ids(cursor, first_links)
        return [
            PendingDocument(
                document_type=document_type_ref(type_id, types.get(type_id)),
                is_active=link["active"],
                required_since=link["created_at"],
            )
            for type_id, link in first_links.items()
        ]

    @staticmethod
    def _sent_for(cursor, employee_id: str) -> List[SentDocument]:
        sent = []
        for row in DocumentRepository.sent_for_employee(cursor, employee_id):
            type_row = None
            if row["type_id"] is not None:
                type_row = {"name": row["type_name"], "description": row["type_description"]}
            sent.append(
                SentDocument(
                    id=row["id"],
                    document_type=document_type_ref(row["document_type_id"], type_row),
                    value=row["value"],
                    display_value=format_document_for_display(row["value"]),
                    is_active=row["is_active"],
                    created_at=row["created_at"],
                    updated_at=row["updated_at"],
                )
            )
        return sent

    @classmethod
    async def get_documentation_status(cls, employee_id: str) -> DocumentationStatus:
        """Partition the employee's required types into sent and pending."""
        with get_cursor() as cursor:
            cls._require_employee(cursor, employee_id)
            type_ids = LinkRepository.active_type_ids(cursor, employee_id)
            if not type_ids:
                return DocumentationStatus()
            types = DocumentTypeRepository.find_by_ids(cursor, type_ids)
            values = DocumentRepository.sent_type_values(cursor, employee_id)

        result = DocumentationStatus()
        for type_id in type_ids:
            type_row = types.get(type_id) or {}
            item = DocumentationStatusItem(
                id=type_id,
                name=type_row.get("name") or TYPE_NOT_FOUND_PLACEHOLDER,
                description=type_row.get("description"),
                category=type_row.get("category") or DocumentTypeCategory.GENERAL,
                is_active=bool(type_row.get("is_active", False)),
                document_value=values.get(type_id),
            )
            (result.sent if type_id in values else result.pending).append(item)
        return result

    @classmethod
    async def send_document(cls, employee_id: str, document_type_id: str, value: str) -> DocumentRead:
        """Record a submission, replacing the value of an existing one."""
        cleaned = clean_document_value(value)
        with get_cursor() as cursor:
            employee = cls._require_employee(cursor, employee_id, active_only=True)
            type_row = DocumentTypeRepository.find_by_id(cursor, document_type_id, active_only=True)
            if not type_row:
                raise DocumentTypeNotFoundError(document_type_id)
            if not LinkRepository.has_active(cursor, employee_id, document_type_id):
                raise ValidationError(
                    "Tipo de documento não está vinculado ao colaborador",
                    details={"employeeId": employee_id, "documentTypeId": document_type_id},
                )
            if not cleaned:
                raise ValidationError("Valor do documento deve conter letras ou números", details={"field": "value"})
            if (
                type_row["category"] == DocumentTypeCategory.TAX_ID.value
                and cleaned != clean_document_value(employee["document"])
            ):
                raise ValidationError(
                    "Valor do CPF não confere com o documento do colaborador",
                    details={"field": "value"},
                )

            existing = DocumentRepository.find_active(cursor, employee_id, document_type_id)
            if existing:
                row = DocumentRepository.update_value(cursor, existing["id"], cleaned, DocumentStatus.SENT.value)
            else:
                row = DocumentRepository.insert(
                    cursor, employee_id, document_type_id, cleaned, DocumentStatus.SENT.value
                )
        logger.info("Employee %s sent document type %s", employee_id, document_type_id)
        return DocumentRead.model_validate(row)

    @classmethod
    async def get_sent_documents(cls, employee_id: str) -> List[SentDocument]:
        with get_cursor() as cursor:
            cls._require_employee(cursor, employee_id)
            return cls._sent_for(cursor, employee_id)

    @classmethod
    async def get_pending_documents(cls, employee_id: str) -> List[PendingDocument]:
        """One entry per required type still missing, dated from its first link."""
        with get_cursor() as cursor:
            cls._require_employee(cursor, employee_id)
            sent_type_ids = set(DocumentRepository.sent_type_values(cursor, employee_id))
            return cls._pending_for(cursor, employee_id, sent_type_ids)

    @classmethod
    async def enrich_employees_with_documentation_info(
        cls, employees: List[EmployeeRead]
    ) -> List[EnrichedEmployee]:
        with get_cursor() as cursor:
            sent_by_employee = DocumentRepository.sent_type_ids_for_employees(
                cursor, [employee.id for employee in employees]
            )
        enriched = []
        for employee in employees:
            required = len(employee.required_document_types)
            sent = len(set(employee.required_document_types) & sent_by_employee.get(employee.id, set()))
            summary = DocumentationSummary(
                required=required,
                sent=sent,
                pending=required - sent,
                has_required_documents=required > 0,
                is_complete=required > 0 and sent == required,
                completion_percentage=completion_percentage(sent, required),
            )
            enriched.append(EnrichedEmployee(**employee.model_dump(), documentation_summary=summary))
        return enriched

    @classmethod
    async def get_documentation_overview(cls, employee_id: str) -> DocumentationOverview:
        """Counters plus the full list of sent and pending documents."""
        with get_cursor() as cursor:
            employee = cls._require_employee(cursor, employee_id)
            type_ids = LinkRepository.active_type_ids(cursor, employee_id)
            sent_docs = cls._sent_for(cursor, employee_id)
            sent_type_ids = {doc.document_type.id for doc in sent_docs}
            pending_docs = cls._pending_for(cursor, employee_id, sent_type_ids)
            links = LinkRepository.for_employee(cursor, employee_id, "all")

        timestamps = [datetime.fromisoformat(employee["updated_at"])]
        timestamps.extend(datetime.fromisoformat(link["updated_at"]) for link in links)
        timestamps.extend(doc.updated_at for doc in sent_docs)
        sent_required = len(set(type_ids) & sent_type_ids)
        documents: List[Union[SentDocument, PendingDocument]] = [*sent_docs, *pending_docs]
        return DocumentationOverview(
            employee=EmployeeRef(id=employee["id"], name=employee["name"], document=employee["document"]),
            total=len(type_ids),
            sent=sent_required,
            pending=len(pending_docs),
            is_complete=bool(type_ids) and not pending_docs,
            last_updated=max(timestamps),
            documents=documents,
        )

    @classmethod
    async def list_pending_documents(
        cls,
        status: str,
        document_type_id: Optional[str],
        page: int,
        limit: int,
    ) -> Tuple[List[PendingDocumentEntry], int]:
        """Every employee/type pair still waiting for a submission."""
        validate_status(status)
        validate_page_params(page, limit)
        with get_cursor() as cursor:
            if document_type_id and not DocumentTypeRepository.find_by_id(cursor, document_type_id):
                raise DocumentTypeNotFoundError(document_type_id)
            total = LinkRepository.count_pending(cursor, status, document_type_id)
            validate_page(page, total, limit)
            rows = []
            if total:
                rows = LinkRepository.list_pending(
                    cursor, status, limit, offset_for(page, limit), document_type_id
                )

        entries = []
        for row in rows:
            type_row = None
            if row["type_name"] is not None:
                type_row = {"name": row["type_name"], "description": row["type_description"]}
            entries.append(
                PendingDocumentEntry(
                    employee=EmployeeRef(
                        id=row["employee_id"], name=row["employee_name"], document=row["employee_document"]
                    ),
                    document_type=document_type_ref(row["document_type_id"], type_row),
                    required_since=row["required_since"],
                )
            )
        return entries, total
