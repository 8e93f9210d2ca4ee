"""
Service layer for required-document links.

A link row says "this employee must hand in this document type".  The
``employee_document_type_links`` table is the only place this is
stored; the ``requiredDocumentTypes`` list returned with an employee is
read back from the active rows.

Link and unlink requests are all-or-nothing: every id is validated
before the first row is written and the writes share one transaction,
so a failure leaves the employee's links untouched.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from hr_documents_api.app.core.db import get_cursor
from hr_documents_api.app.core.exceptions import DocumentTypeNotFoundError, EmployeeNotFoundError, ValidationError
from hr_documents_api.app.core.validation import clean_document_value, validate_status
from hr_documents_api.app.repositories.document_repository import DocumentRepository
from hr_documents_api.app.repositories.document_type_repository import DocumentTypeRepository
from hr_documents_api.app.repositories.employee_repository import EmployeeRepository
from hr_documents_api.app.repositories.link_repository import LinkRepository
from hr_documents_api.app.schemas.document import DocumentStatus, RequiredDocumentLink
from hr_documents_api.app.schemas.document_type import DocumentTypeCategory, DocumentTypeRef

logger = logging.getLogger(__name__)

TYPE_NOT_FOUND_PLACEHOLDER = "Tipo não encontrado"
NAME_NOT_FOUND_PLACEHOLDER = "Nome não encontrado"


def document_type_ref(type_id: str, type_row: Optional[Dict[str, Any]]) -> DocumentTypeRef:
    """Describe a linked type, tolerating a missing row or an empty name."""
    if type_row is None:
        return DocumentTypeRef(id=type_id, name=TYPE_NOT_FOUND_PLACEHOLDER)
    return DocumentTypeRef(
        id=type_id,
        name=type_row.get("name") or NAME_NOT_FOUND_PLACEHOLDER,
        description=type_row.get("description"),
    )


def unique_ids(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


def sync_tax_id_document(cursor, employee: Dict[str, Any], document_type_id: str) -> Dict[str, Any]:
    """Store the employee's own CPF as the SENT document of a tax id type."""
    value = clean_document_value(employee["document"])
    existing = DocumentRepository.find_active(cursor, employee["id"], document_type_id)
    if existing:
        return DocumentRepository.update_value(cursor, existing["id"], value, DocumentStatus.SENT.value)
    return DocumentRepository.insert(cursor, employee["id"], document_type_id, value, DocumentStatus.SENT.value)


def sync_tax_id_documents(cursor, employee: Dict[str, Any]) -> int:
    """Refresh every actively linked tax id document after a CPF change."""
    type_ids = LinkRepository.active_type_ids(cursor, employee["id"])
    types = DocumentTypeRepository.find_by_ids(cursor, type_ids)
    synced = 0
    for type_id in type_ids:
        type_row = types.get(type_id)
        if type_row and type_row["category"] == DocumentTypeCategory.TAX_ID.value:
            sync_tax_id_document(cursor, employee, type_id)
            synced += 1
    return synced


class EmployeeLinkService:
    """Create, remove and inspect employee/document-type links."""

    @staticmethod
    def _to_link(link: Dict[str, Any], type_row: Optional[Dict[str, Any]]) -> RequiredDocumentLink:
        return RequiredDocumentLink(
            document_type=document_type_ref(link["document_type_id"], type_row),
            active=link["active"],
            created_at=link["created_at"],
            updated_at=link["updated_at"],
            deleted_at=link["deleted_at"],
        )

    @staticmethod
    def _require_employee(cursor, employee_id: str, active_only: bool = True) -> Dict[str, Any]:
        employee = EmployeeRepository.find_by_id(cursor, employee_id, active_only=active_only)
        if not employee:
            raise EmployeeNotFoundError(employee_id)
        return employee

    @classmethod
    async def link_document_types(cls, employee_id: str, document_type_ids: List[str]) -> List[RequiredDocumentLink]:
        """Require every listed type from the employee in one step.

        Fails without writing anything when a type is unknown or
        inactive, or when any of them is already linked.
        """
        type_ids = unique_ids(document_type_ids)
        if not type_ids:
            raise ValidationError("Informe ao menos um tipo de documento")
        with get_cursor() as cursor:
            employee = cls._require_employee(cursor, employee_id)
            types = DocumentTypeRepository.find_by_ids(cursor, type_ids)
            for type_id in type_ids:
                type_row = types.get(type_id)
                if not type_row or not type_row["is_active"]:
                    raise DocumentTypeNotFoundError(type_id)

            already_linked = [t for t in type_ids if LinkRepository.has_active(cursor, employee_id, t)]
            if already_linked:
                names = ", ".join(types[t]["name"] for t in already_linked)
                raise ValidationError(
                    "Os seguintes tipos de documento já estão vinculados a este colaborador: "
                    f"{names}. Nenhum vínculo foi criado.",
                    details={"documentTypeIds": already_linked},
                )

            created = []
            for type_id in type_ids:
                link = LinkRepository.insert(cursor, employee_id, type_id)
                if types[type_id]["category"] == DocumentTypeCategory.TAX_ID.value:
                    sync_tax_id_document(cursor, employee, type_id)
                created.append(cls._to_link(link, types[type_id]))
        logger.info("Linked %d document types to employee %s", len(created), employee_id)
        return created

    @classmethod
    async def unlink_document_types(cls, employee_id: str, document_type_ids: List[str]) -> List[DocumentTypeRef]:
        """Stop requiring the listed types.  Submitted documents are kept."""
        type_ids = unique_ids(document_type_ids)
        if not type_ids:
            raise ValidationError("Informe ao menos um tipo de documento")
        with get_cursor() as cursor:
            cls._require_employee(cursor, employee_id)
            types = DocumentTypeRepository.find_by_ids(cursor, type_ids)
            for type_id in type_ids:
                if type_id not in types:
                    raise DocumentTypeNotFoundError(type_id)

            not_linked = [t for t in type_ids if not LinkRepository.has_active(cursor, employee_id, t)]
            if not_linked:
                names = ", ".join(types[t]["name"] for t in not_linked)
                raise ValidationError(
                    "Os seguintes tipos de documento já estão desvinculados deste colaborador: "
                    f"{names}. Nenhuma desvinculação foi realizada.",
                    details={"documentTypeIds": not_linked},
                )
            LinkRepository.deactivate_types(cursor, employee_id, type_ids)
        logger.info("Unlinked %d document types from employee %s", len(type_ids), employee_id)
        return [document_type_ref(type_id, types[type_id]) for type_id in type_ids]

    @classmethod
    async def restore_document_type_link(cls, employee_id: str, document_type_id: str) -> RequiredDocumentLink:
        """Reactivate the latest link for the pair, creating one if none exists."""
        with get_cursor() as cursor:
            employee = cls._require_employee(cursor, employee_id)
            type_row = DocumentTypeRepository.find_by_id(cursor, document_type_id, active_only=True)
            if not type_row:
                raise DocumentTypeNotFoundError(document_type_id)

            latest = LinkRepository.latest(cursor, employee_id, document_type_id)
            if latest and latest["active"]:
                link = latest
            elif latest:
                link = LinkRepository.reactivate(cursor, latest["id"])
            else:
                link = LinkRepository.insert(cursor, employee_id, document_type_id)
            if type_row["category"] == DocumentTypeCategory.TAX_ID.value:
                sync_tax_id_document(cursor, employee, document_type_id)
        logger.info("Restored link between employee %s and document type %s", employee_id, document_type_id)
        return cls._to_link(link, type_row)

    @classmethod
    async def get_required_documents(cls, employee_id: str, status: str = "active") -> List[RequiredDocumentLink]:
        validate_status(status)
        with get_cursor() as cursor:
            cls._require_employee(cursor, employee_id, active_only=False)
            links = LinkRepository.for_employee(cursor, employee_id, status)
            types = DocumentTypeRepository.find_by_ids(cursor, {link["document_type_id"] for link in links})
        return [cls._to_link(link, types.get(link["document_type_id"])) for link in links]

    @classmethod
    async def remove_duplicate_links(cls, employee_id: str) -> int:
        """Keep only the newest link row per type; return how many were deactivated.

        Rows are grouped whatever their state, so an older active row is
        deactivated even when the newest row for its type is inactive.
        """
        with get_cursor() as cursor:
            cls._require_employee(cursor, employee_id, active_only=False)
            by_type: Dict[str, List[Dict[str, Any]]] = {}
            for link in LinkRepository.for_employee(cursor, employee_id, "all"):
                by_type.setdefault(link["document_type_id"], []).append(link)

            stale_ids = []
            for links in by_type.values():
                # rows come oldest first, so the last one is kept
                stale_ids.extend(link["id"] for link in links[:-1])
            deactivated = LinkRepository.deactivate_ids(cursor, stale_ids)
        if deactivated:
            logger.info("Removed %d duplicate links for employee %s", deactivated, employee_id)
        return deactivated
