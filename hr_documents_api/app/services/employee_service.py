"""
Service layer for employees.

Employees are never physically removed: ``soft_delete`` clears the
activity flag and stamps ``deleted_at`` and ``restore`` undoes it.  The
CPF must be unique among active employees only, so an inactive record
may share it with an active one, but restoring it is then refused.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from hr_documents_api.app.core.db import get_cursor
from hr_documents_api.app.core.exceptions import DocumentTypeNotFoundError, DuplicateEmployeeError, EmployeeNotFoundError
from hr_documents_api.app.core.pagination import offset_for, validate_page, validate_page_params
from hr_documents_api.app.core.validation import format_cpf, validate_status
from hr_documents_api.app.repositories.document_type_repository import DocumentTypeRepository
from hr_documents_api.app.repositories.employee_repository import EmployeeRepository
from hr_documents_api.app.repositories.link_repository import LinkRepository
from hr_documents_api.app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from hr_documents_api.app.services.employee_link_service import sync_tax_id_documents

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service class for employee CRUD and lookups."""

    @staticmethod
    def _to_read(cursor, row: Dict[str, Any]) -> EmployeeRead:
        required = LinkRepository.active_type_ids(cursor, row["id"])
        return EmployeeRead.model_validate(dict(row, required_document_types=required))

    @staticmethod
    def _to_read_many(cursor, rows: List[Dict[str, Any]]) -> List[EmployeeRead]:
        required = LinkRepository.active_type_ids_for_employees(cursor, [row["id"] for row in rows])
        return [
            EmployeeRead.model_validate(dict(row, required_document_types=required[row["id"]]))
            for row in rows
        ]

    @classmethod
    async def create(cls, data: EmployeeCreate) -> EmployeeRead:
        hired_at = (data.hired_at or date.today()).isoformat()
        with get_cursor() as cursor:
            if EmployeeRepository.find_active_by_document(cursor, data.document):
                raise DuplicateEmployeeError(data.document)
            row = EmployeeRepository.insert(cursor, data.name, data.document, hired_at)
            employee = cls._to_read(cursor, row)
        logger.info("Created employee %s", employee.id)
        return employee

    @classmethod
    async def get(cls, employee_id: str) -> EmployeeRead:
        with get_cursor() as cursor:
            row = EmployeeRepository.find_by_id(cursor, employee_id, active_only=True)
            if not row:
                raise EmployeeNotFoundError(employee_id)
            return cls._to_read(cursor, row)

    @classmethod
    async def update(cls, employee_id: str, data: EmployeeUpdate) -> EmployeeRead:
        """Apply the provided fields to an active employee.

        A CPF change is checked against the other active employees and
        refreshes the stored value of any linked tax id document.
        """
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        with get_cursor() as cursor:
            current = EmployeeRepository.find_by_id(cursor, employee_id, active_only=True)
            if not current:
                raise EmployeeNotFoundError(employee_id)
            document_changed = "document" in fields and fields["document"] != current["document"]
            if document_changed and EmployeeRepository.find_active_by_document(
                cursor, fields["document"], exclude_id=employee_id
            ):
                raise DuplicateEmployeeError(fields["document"])
            if "hired_at" in fields:
                fields["hired_at"] = fields["hired_at"].isoformat()
            if fields:
                EmployeeRepository.update(cursor, employee_id, fields)
            row = EmployeeRepository.find_by_id(cursor, employee_id)
            if document_changed:
                sync_tax_id_documents(cursor, row)
            employee = cls._to_read(cursor, row)
        logger.info("Updated employee %s", employee_id)
        return employee

    @classmethod
    async def soft_delete(cls, employee_id: str) -> Optional[EmployeeRead]:
        """Deactivate an employee.  Returns ``None`` if nothing was active."""
        with get_cursor() as cursor:
            row = EmployeeRepository.find_by_id(cursor, employee_id, active_only=True)
            if not row:
                return None
            EmployeeRepository.set_active(cursor, employee_id, False)
            employee = cls._to_read(cursor, EmployeeRepository.find_by_id(cursor, employee_id))
        logger.info("Soft deleted employee %s", employee_id)
        return employee

    @classmethod
    async def restore(cls, employee_id: str) -> Optional[EmployeeRead]:
        """Reactivate an employee.  Returns ``None`` for an unknown id."""
        with get_cursor() as cursor:
            row = EmployeeRepository.find_by_id(cursor, employee_id)
            if not row:
                return None
            if not row["is_active"]:
                if EmployeeRepository.find_active_by_document(cursor, row["document"], exclude_id=employee_id):
                    raise DuplicateEmployeeError(row["document"])
                EmployeeRepository.set_active(cursor, employee_id, True)
                row = EmployeeRepository.find_by_id(cursor, employee_id)
                logger.info("Restored employee %s", employee_id)
            return cls._to_read(cursor, row)

    @classmethod
    async def list(
        cls, status: str, name: Optional[str], page: int, limit: int
    ) -> Tuple[List[EmployeeRead], int]:
        validate_status(status)
        validate_page_params(page, limit)
        with get_cursor() as cursor:
            total = EmployeeRepository.count(cursor, status, name=name)
            validate_page(page, total, limit)
            rows = []
            if total:
                rows = EmployeeRepository.list(cursor, status, limit, offset_for(page, limit), name=name)
            return cls._to_read_many(cursor, rows), total

    @classmethod
    async def search_by_name_or_cpf(
        cls, query: str, status: str, page: int, limit: int
    ) -> Tuple[List[EmployeeRead], int]:
        """Exact CPF match when ``query`` looks like one, else a name substring."""
        validate_status(status)
        validate_page_params(page, limit)
        query = (query or "").strip()
        cpf = format_cpf(query)
        filters = {"document": cpf} if cpf else {"name": query}
        with get_cursor() as cursor:
            total = EmployeeRepository.count(cursor, status, **filters)
            validate_page(page, total, limit)
            rows = []
            if total:
                rows = EmployeeRepository.list(cursor, status, limit, offset_for(page, limit), **filters)
            return cls._to_read_many(cursor, rows), total

    @classmethod
    async def find_by_document_type(
        cls, document_type_id: str, page: int, limit: int
    ) -> Tuple[List[EmployeeRead], int]:
        """Active employees that currently must hand in the given type."""
        validate_page_params(page, limit)
        with get_cursor() as cursor:
            if not DocumentTypeRepository.find_by_id(cursor, document_type_id):
                raise DocumentTypeNotFoundError(document_type_id)
            total = EmployeeRepository.count_by_document_type(cursor, document_type_id)
            validate_page(page, total, limit)
            rows = []
            if total:
                rows = EmployeeRepository.list_by_document_type(
                    cursor, document_type_id, limit, offset_for(page, limit)
                )
            return cls._to_read_many(cursor, rows), total
