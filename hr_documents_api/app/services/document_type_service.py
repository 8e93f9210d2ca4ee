"""
Service layer for document types.

Names are trimmed and upper-cased before they are stored or compared,
so ``" rg "`` and ``"RG"`` are the same type.  Only active types take
part in the uniqueness check.
"""

import logging
from typing import List, Optional, Tuple

from hr_documents_api.app.core.db import get_cursor
from hr_documents_api.app.core.exceptions import DocumentTypeNotFoundError, DuplicateDocumentTypeNameError, ValidationError
from hr_documents_api.app.core.pagination import offset_for, validate_page, validate_page_params
from hr_documents_api.app.core.validation import validate_status
from hr_documents_api.app.repositories.document_type_repository import DocumentTypeRepository
from hr_documents_api.app.schemas.document_type import DocumentTypeCreate, DocumentTypeRead, DocumentTypeUpdate

logger = logging.getLogger(__name__)


def normalize_type_name(name: Optional[str]) -> str:
    normalized = (name or "").strip().upper()
    if not normalized:
        raise ValidationError("Nome do tipo de documento é obrigatório", details={"field": "name"})
    return normalized


class DocumentTypeService:

    @classmethod
    async def create(cls, data: DocumentTypeCreate) -> DocumentTypeRead:
        name = normalize_type_name(data.name)
        with get_cursor() as cursor:
            if DocumentTypeRepository.find_active_by_name(cursor, name):
                raise DuplicateDocumentTypeNameError(name)
            row = DocumentTypeRepository.insert(cursor, name, data.description, data.category.value)
        logger.info("Created document type %s (%s)", row["id"], name)
        return DocumentTypeRead.model_validate(row)

    @classmethod
    async def get(cls, document_type_id: str) -> DocumentTypeRead:
        with get_cursor() as cursor:
            row = DocumentTypeRepository.find_by_id(cursor, document_type_id, active_only=True)
        if not row:
            raise DocumentTypeNotFoundError(document_type_id)
        return DocumentTypeRead.model_validate(row)

    @classmethod
    async def update(cls, document_type_id: str, data: DocumentTypeUpdate) -> DocumentTypeRead:
        """Update an active type; renaming to its own name is not a conflict."""
        fields = data.model_dump(exclude_unset=True)
        if "name" in fields:
            fields["name"] = normalize_type_name(fields["name"])
        if fields.get("category") is not None:
            fields["category"] = fields["category"].value
        else:
            fields.pop("category", None)
        with get_cursor() as cursor:
            if not DocumentTypeRepository.find_by_id(cursor, document_type_id, active_only=True):
                raise DocumentTypeNotFoundError(document_type_id)
            if "name" in fields and DocumentTypeRepository.find_active_by_name(
                cursor, fields["name"], exclude_id=document_type_id
            ):
                raise DuplicateDocumentTypeNameError(fields["name"])
            if fields:
                DocumentTypeRepository.update(cursor, document_type_id, fields)
            row = DocumentTypeRepository.find_by_id(cursor, document_type_id)
        logger.info("Updated document type %s", document_type_id)
        return DocumentTypeRead.model_validate(row)

    @classmethod
    async def soft_delete(cls, document_type_id: str) -> Optional[DocumentTypeRead]:
        with get_cursor() as cursor:
            if not DocumentTypeRepository.find_by_id(cursor, document_type_id, active_only=True):
                return None
            DocumentTypeRepository.set_active(cursor, document_type_id, False)
            row = DocumentTypeRepository.find_by_id(cursor, document_type_id)
        logger.info("Soft deleted document type %s", document_type_id)
        return DocumentTypeRead.model_validate(row)

    @classmethod
    async def restore(cls, document_type_id: str) -> Optional[DocumentTypeRead]:
        with get_cursor() as cursor:
            row = DocumentTypeRepository.find_by_id(cursor, document_type_id)
            if not row:
                return None
            if not row["is_active"]:
                if DocumentTypeRepository.find_active_by_name(cursor, row["name"], exclude_id=document_type_id):
                    raise DuplicateDocumentTypeNameError(row["name"])
                DocumentTypeRepository.set_active(cursor, document_type_id, True)
                row = DocumentTypeRepository.find_by_id(cursor, document_type_id)
                logger.info("Restored document type %s", document_type_id)
        return DocumentTypeRead.model_validate(row)

    @classmethod
    async def list(
        cls, status: str, name: Optional[str], page: int, limit: int
    ) -> Tuple[List[DocumentTypeRead], int]:
        validate_status(status)
        validate_page_params(page, limit)
        with get_cursor() as cursor:
            total = DocumentTypeRepository.count(cursor, status, name=name)
            validate_page(page, total, limit)
            rows = []
            if total:
                rows = DocumentTypeRepository.list(cursor, status, limit, offset_for(page, limit), name=name)
        return [DocumentTypeRead.model_validate(row) for row in rows], total
