"""
Pydantic schema definitions for API payloads.

Each domain (employees, document types, documents) defines its own
Pydantic models for request and response bodies.  Schemas are separated
from the SQL rows to decouple the API representation from persistence.
Field names are snake_case in Python and camelCase on the wire.
"""
