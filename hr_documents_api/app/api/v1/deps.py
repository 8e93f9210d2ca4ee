"""
Path parameter dependencies.

Identifiers are checked against the 24 hex character format before a
service is called, so malformed ids answer 400 instead of 404.
"""

from fastapi import Path

from ...core.validation import validate_object_id


def valid_employee_id(employee_id: str = Path(..., description="ID do colaborador")) -> str:
    return validate_object_id(employee_id, "employeeId")


def valid_document_type_id(
    document_type_id: str = Path(..., description="ID do tipo de documento"),
) -> str:
    return validate_object_id(document_type_id, "documentTypeId")
