"""
Pydantic models for document types.

A document type names something employees must hand in (RG, CTPS,
CPF...).  ``category`` marks the type that holds the employee's own tax
id; linking a type of that category fills in the submission
automatically from the employee record.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import CamelModel


class DocumentTypeCategory(str, Enum):
    TAX_ID = "tax_id"
    GENERAL = "general"


class DocumentTypeCreate(CamelModel):
    name: str = Field(..., max_length=100, examples=["RG"])
    description: Optional[str] = Field(None, max_length=500, examples=["Registro Geral"])
    category: DocumentTypeCategory = Field(DocumentTypeCategory.GENERAL)


class DocumentTypeUpdate(CamelModel):
    """All fields optional; a rename to the current name is accepted."""

    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[DocumentTypeCategory] = None


class DocumentTypeRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: DocumentTypeCategory = DocumentTypeCategory.GENERAL
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class DocumentTypeRef(CamelModel):
    """Type information embedded in link and document responses."""

    id: str
    name: str
    description: Optional[str] = None
