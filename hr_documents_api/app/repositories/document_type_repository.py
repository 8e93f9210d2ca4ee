"""Queries against the ``document_types`` table."""

import sqlite3
from typing import Any, Dict, Iterable, List, Optional, Tuple

from hr_documents_api.app.core.db import new_object_id, utc_now
from hr_documents_api.app.repositories.base import build_update, name_contains, placeholders, row_to_dict, rows_to_dicts, status_condition


class DocumentTypeRepository:

    @staticmethod
    def insert(
        cursor: sqlite3.Cursor, name: str, description: Optional[str], category: str
    ) -> Dict[str, Any]:
        now = utc_now()
        type_id = new_object_id()
        cursor.execute(
            """
            INSERT INTO document_types (id, name, description, category, is_active, created_at, updated_at)
            VALUES (?, ?, ?, ?, 1, ?, ?)
            """,
            (type_id, name, description, category, now, now),
        )
        return DocumentTypeRepository.find_by_id(cursor, type_id)

    @staticmethod
    def find_by_id(cursor: sqlite3.Cursor, type_id: str, active_only: bool = False) -> Optional[Dict[str, Any]]:
        query = "SELECT * FROM document_types WHERE id = ?"
        if active_only:
            query += " AND is_active = 1"
        return row_to_dict(cursor.execute(query, (type_id,)).fetchone())

    @staticmethod
    def find_by_ids(cursor: sqlite3.Cursor, type_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Map each existing id to its row, whatever its state."""
        ids = list(type_ids)
        if not ids:
            return {}
        rows = cursor.execute(
            f"SELECT * FROM document_types WHERE id IN ({placeholders(ids)})", ids
        ).fetchall()
        return {row["id"]: row_to_dict(row) for row in rows}

    @staticmethod
    def find_active_by_name(
        cursor: sqlite3.Cursor, name: str, exclude_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        query = "SELECT * FROM document_types WHERE name = ? COLLATE NOCASE AND is_active = 1"
        params: List[Any] = [name]
        if exclude_id:
            query += " AND id != ?"
            params.append(exclude_id)
        return row_to_dict(cursor.execute(query, params).fetchone())

    @staticmethod
    def update(cursor: sqlite3.Cursor, type_id: str, fields: Dict[str, Any]) -> None:
        fields = dict(fields, updated_at=utc_now())
        assignments, params = build_update(fields)
        cursor.execute(f"UPDATE document_types SET {assignments} WHERE id = ?", params + [type_id])

    @staticmethod
    def set_active(cursor: sqlite3.Cursor, type_id: str, active: bool) -> None:
        now = utc_now()
        cursor.execute(
            "UPDATE document_types SET is_active = ?, deleted_at = ?, updated_at = ? WHERE id = ?",
            (1 if active else 0, None if active else now, now, type_id),
        )

    @staticmethod
    def _filters(status: str, name: Optional[str]) -> Tuple[str, List[Any]]:
        clause, params = status_condition(status)
        conditions = [clause]
        if name:
            name_clause, name_params = name_contains(name)
            conditions.append(name_clause)
            params.extend(name_params)
        return " AND ".join(conditions), params

    @staticmethod
    def count(cursor: sqlite3.Cursor, status: str, name: Optional[str] = None) -> int:
        where, params = DocumentTypeRepository._filters(status, name)
        row = cursor.execute(f"SELECT COUNT(*) AS total FROM document_types WHERE {where}", params).fetchone()
        return row["total"]

    @staticmethod
    def list(
        cursor: sqlite3.Cursor, status: str, limit: int, offset: int, name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        where, params = DocumentTypeRepository._filters(status, name)
        rows = cursor.execute(
            f"SELECT * FROM document_types WHERE {where} ORDER BY name ASC LIMIT ? OFFSET ?",
            params + [limit, offset],
        ).fetchall()
        return rows_to_dicts(rows)
