"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API can start
without any configuration; in a production deployment override them via
environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "HR Documents API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # When enabled, unexpected errors are returned to the client verbatim
    # instead of being masked with a generic message.
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  Relative paths are resolved against the
    # project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "hr_documents.db")

    # Default ``status`` filter per list endpoint.  Employees historically
    # list every record while document types only list active ones; both
    # are configurable rather than hard-coded in the routers.
    employees_default_status: str = os.getenv("EMPLOYEES_DEFAULT_STATUS", "all")
    document_types_default_status: str = os.getenv("DOCUMENT_TYPES_DEFAULT_STATUS", "active")
    pending_documents_default_status: str = os.getenv("PENDING_DOCUMENTS_DEFAULT_STATUS", "active")

    employees_default_limit: int = int(os.getenv("EMPLOYEES_DEFAULT_LIMIT", "20"))
    document_types_default_limit: int = int(os.getenv("DOCUMENT_TYPES_DEFAULT_LIMIT", "10"))
    max_page_limit: int = int(os.getenv("MAX_PAGE_LIMIT", "100"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must be
# set before this module is imported.
settings = Settings()
