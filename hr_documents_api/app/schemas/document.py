"""
Pydantic models for required-document links and submissions.

A submission (``Document``) only ever moves from ``PENDING`` to
``SENT``; resubmitting replaces the stored value and keeps the status.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import Field

from .common import CamelModel
from .document_type import DocumentTypeCategory, DocumentTypeRef
from .employee import EmployeeRef


class DocumentStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"


class SendDocumentRequest(CamelModel):
    value: str = Field(..., min_length=1, examples=["MG1234567"])


class DocumentRead(CamelModel):
    id: str
    value: str
    status: DocumentStatus
    employee_id: str
    document_type_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RequiredDocumentLink(CamelModel):
    document_type: DocumentTypeRef
    active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class SentDocument(CamelModel):
    id: str
    document_type: DocumentTypeRef
    status: DocumentStatus = DocumentStatus.SENT
    value: str
    display_value: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class PendingDocument(CamelModel):
    document_type: DocumentTypeRef
    status: DocumentStatus = DocumentStatus.PENDING
    value: Optional[str] = None
    is_active: bool
    required_since: datetime


class DocumentationStatusItem(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: DocumentTypeCategory = DocumentTypeCategory.GENERAL
    is_active: bool = True
    document_value: Optional[str] = None


class DocumentationStatus(CamelModel):
    sent: List[DocumentationStatusItem] = Field(default_factory=list)
    pending: List[DocumentationStatusItem] = Field(default_factory=list)


class DocumentationOverview(CamelModel):
    employee: EmployeeRef
    total: int
    sent: int
    pending: int
    is_complete: bool
    last_updated: datetime
    documents: List[Union[SentDocument, PendingDocument]] = Field(default_factory=list)


class PendingDocumentEntry(CamelModel):
    """Row of the organisation-wide pending list."""

    employee: EmployeeRef
    document_type: DocumentTypeRef
    status: DocumentStatus = DocumentStatus.PENDING
    required_since: datetime


class DeduplicationResult(CamelModel):
    deactivated: int


class DocumentTypeIdsRequest(CamelModel):
    """Object form of a link/unlink body; a bare JSON array is also accepted."""

    document_type_ids: List[str] = Field(..., examples=[["65f1c2a9e4b0a1b2c3d4e5f6"]])
