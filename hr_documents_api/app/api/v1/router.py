"""
Top-level router for version 1 of the API.

Domain routers are mounted under their resource prefix; ``create_app``
mounts this router under ``/api/v1``.  The shared ``responses`` entry
documents the error envelope in the OpenAPI schema.
"""

from fastapi import APIRouter

from hr_documents_api.app.schemas.common import ErrorResponse

from .endpoints import document_types, documents, employees, health

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    409: {"model": ErrorResponse, "description": "Conflict with an active record"},
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(health.router, tags=["health"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(document_types.router, prefix="/document-types", tags=["document-types"])
router.include_router(documents.router, prefix="/documents", tags=["documents"])
