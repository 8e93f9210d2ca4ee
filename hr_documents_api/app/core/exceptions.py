"""
Domain exceptions.

Every error raised by the service layer derives from ``AppError`` and
carries a human readable ``message``, the HTTP ``status_code`` it maps
to, a machine readable ``code`` and optional structured ``details``.
The handlers in ``core.error_handlers`` turn them into the uniform
error envelope.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_SERVER_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Validation error (400)."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, code=code, details=details)


class InvalidObjectIdError(ValidationError):
    """Identifier that is not 24 hexadecimal characters."""

    def __init__(self, field_name: str = "ID"):
        super().__init__(
            f"{field_name} deve ser um ObjectId válido de 24 caracteres hexadecimais",
            code="INVALID_OBJECT_ID",
            details={"field": field_name},
        )


class PageNotFoundError(ValidationError):
    """Requested page lies beyond the last page of results."""

    def __init__(self, requested_page: int, total_pages: int):
        self.requested_page = requested_page
        self.total_pages = total_pages
        super().__init__(
            f"Página {requested_page} não encontrada. Total de páginas disponíveis: {total_pages}",
            code="PAGE_NOT_FOUND",
            details={"requestedPage": requested_page, "totalPages": total_pages},
        )


class NotFoundError(AppError):
    """Resource not found error (404)."""

    def __init__(self, message: str, code: str = "NOT_FOUND", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=404, code=code, details=details)


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: Optional[str] = None):
        message = (
            f"Colaborador com ID {employee_id} não encontrado"
            if employee_id
            else "Colaborador não encontrado"
        )
        super().__init__(message, code="EMPLOYEE_NOT_FOUND", details={"id": employee_id})


class DocumentTypeNotFoundError(NotFoundError):
    def __init__(self, document_type_id: Optional[str] = None):
        message = (
            f"Tipo de documento com ID {document_type_id} não encontrado"
            if document_type_id
            else "Tipo de documento não encontrado"
        )
        super().__init__(message, code="DOCUMENT_TYPE_NOT_FOUND", details={"id": document_type_id})


class ConflictError(AppError):
    """Duplicate resource error (409)."""

    def __init__(self, message: str, code: str = "CONFLICT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=409, code=code, details=details)


class DuplicateEmployeeError(ConflictError):
    def __init__(self, document: str):
        super().__init__(
            f"Já existe um colaborador cadastrado com o CPF {document}",
            code="DUPLICATE_EMPLOYEE_CPF",
            details={"document": document},
        )


class DuplicateDocumentTypeNameError(ConflictError):
    def __init__(self, name: str):
        super().__init__(
            f"Já existe um tipo de documento ativo com o nome {name}",
            code="DUPLICATE_DOCUMENT_TYPE_NAME",
            details={"name": name},
        )


class DatabaseError(AppError):
    """Storage failure (503).  Never retried by the API."""

    def __init__(self, operation: str = "database operation", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Erro na operação de banco de dados: {operation}",
            status_code=503,
            code="DATABASE_ERROR",
            details=details,
        )
