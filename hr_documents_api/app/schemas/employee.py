"""
Pydantic models for employee data.

The CPF (Brazilian tax id) is accepted either formatted
(``123.456.789-01``) or as eleven bare digits and is always stored in
the formatted form, which is what the uniqueness check compares.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.validation import format_cpf
from .common import CamelModel


def _normalize_cpf(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    formatted = format_cpf(value)
    if formatted is None:
        raise ValueError("CPF deve estar no formato 000.000.000-00")
    return formatted


def _strip_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    if len(stripped) < 3:
        raise ValueError("Nome deve ter ao menos 3 caracteres")
    return stripped


class EmployeeCreate(CamelModel):
    """Schema for registering an employee."""

    name: str = Field(..., max_length=100, examples=["Ana Souza"])
    document: str = Field(..., examples=["111.222.333-44"], description="CPF do colaborador")
    hired_at: Optional[date] = Field(None, examples=["2024-01-01"], description="Defaults to today")

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return _strip_name(value)

    @field_validator("document")
    @classmethod
    def check_document(cls, value):
        return _normalize_cpf(value)


class EmployeeUpdate(CamelModel):
    """Schema for updating an employee.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = Field(None, max_length=100)
    document: Optional[str] = None
    hired_at: Optional[date] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        return _strip_name(value)

    @field_validator("document")
    @classmethod
    def check_document(cls, value):
        return _normalize_cpf(value)


class EmployeeRead(CamelModel):
    """Schema for reading an employee from the API.

    ``required_document_types`` is derived from the active
    employee/document-type links every time the employee is read.
    """

    id: str
    name: str
    document: str
    hired_at: date
    is_active: bool
    required_document_types: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class EmployeeRef(CamelModel):
    id: str
    name: str
    document: Optional[str] = None


class DocumentationSummary(CamelModel):
    required: int
    sent: int
    pending: int
    has_required_documents: bool
    is_complete: bool
    completion_percentage: int


class EnrichedEmployee(EmployeeRead):
    """Employee plus the counters shown in search results."""

    documentation_summary: DocumentationSummary
