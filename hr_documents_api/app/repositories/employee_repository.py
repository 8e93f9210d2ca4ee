"""Queries against the ``employees`` table."""

import sqlite3
from typing import Any, Dict, List, Optional, Tuple

from hr_documents_api.app.core.db import new_object_id, utc_now
from hr_documents_api.app.repositories.base import build_update, name_contains, row_to_dict, rows_to_dicts, status_condition


class EmployeeRepository:

    @staticmethod
    def insert(cursor: sqlite3.Cursor, name: str, document: str, hired_at: str) -> Dict[str, Any]:
        now = utc_now()
        employee_id = new_object_id()
        cursor.execute(
            """
            INSERT INTO employees (id, name, document, hired_at, is_active, created_at, updated_at)
            VALUES (?, ?, ?, ?, 1, ?, ?)
            """,
            (employee_id, name, document, hired_at, now, now),
        )
        return EmployeeRepository.find_by_id(cursor, employee_id)

    @staticmethod
    def find_by_id(cursor: sqlite3.Cursor, employee_id: str, active_only: bool = False) -> Optional[Dict[str, Any]]:
        query = "SELECT * FROM employees WHERE id = ?"
        if active_only:
            query += " AND is_active = 1"
        return row_to_dict(cursor.execute(query, (employee_id,)).fetchone())

    @staticmethod
    def find_active_by_document(
        cursor: sqlite3.Cursor, document: str, exclude_id: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        query = "SELECT * FROM employees WHERE document = ? AND is_active = 1"
        params: List[Any] = [document]
        if exclude_id:
            query += " AND id != ?"
            params.append(exclude_id)
        return row_to_dict(cursor.execute(query, params).fetchone())

    @staticmethod
    def update(cursor: sqlite3.Cursor, employee_id: str, fields: Dict[str, Any]) -> None:
        fields = dict(fields, updated_at=utc_now())
        assignments, params = build_update(fields)
        cursor.execute(f"UPDATE employees SET {assignments} WHERE id = ?", params + [employee_id])

    @staticmethod
    def set_active(cursor: sqlite3.Cursor, employee_id: str, active: bool) -> None:
        now = utc_now()
        cursor.execute(
            "UPDATE employees SET is_active = ?, deleted_at = ?, updated_at = ? WHERE id = ?",
            (1 if active else 0, None if active else now, now, employee_id),
        )

    @staticmethod
    def _filters(status: str, name: Optional[str], document: Optional[str]) -> Tuple[str, List[Any]]:
        clause, params = status_condition(status)
        conditions = [clause]
        if document:
            conditions.append("document = ?")
            params.append(document)
        if name:
            name_clause, name_params = name_contains(name)
            conditions.append(name_clause)
            params.extend(name_params)
        return " AND ".join(conditions), params

    @staticmethod
    def count(
        cursor: sqlite3.Cursor, status: str, name: Optional[str] = None, document: Optional[str] = None
    ) -> int:
        where, params = EmployeeRepository._filters(status, name, document)
        row = cursor.execute(f"SELECT COUNT(*) AS total FROM employees WHERE {where}", params).fetchone()
        return row["total"]

    @staticmethod
    def list(
        cursor: sqlite3.Cursor,
        status: str,
        limit: int,
        offset: int,
        name: Optional[str] = None,
        document: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        where, params = EmployeeRepository._filters(status, name, document)
        rows = cursor.execute(
            f"SELECT * FROM employees WHERE {where} ORDER BY name COLLATE NOCASE ASC, created_at ASC LIMIT ? OFFSET ?",
            params + [limit, offset],
        ).fetchall()
        return rows_to_dicts(rows)

    @staticmethod
    def count_by_document_type(cursor: sqlite3.Cursor, document_type_id: str) -> int:
        row = cursor.execute(
            """
            SELECT COUNT(DISTINCT e.id) AS total
            FROM employees e
            JOIN employee_document_type_links l ON l.employee_id = e.id
            WHERE l.document_type_id = ? AND l.active = 1 AND e.is_active = 1
            """,
            (document_type_id,),
        ).fetchone()
        return row["total"]

    @staticmethod
    def list_by_document_type(
        cursor: sqlite3.Cursor, document_type_id: str, limit: int, offset: int
    ) -> List[Dict[str, Any]]:
        rows = cursor.execute(
            """
            SELECT DISTINCT e.*
            FROM employees e
            JOIN employee_document_type_links l ON l.employee_id = e.id
            WHERE l.document_type_id = ? AND l.active = 1 AND e.is_active = 1
            ORDER BY e.name COLLATE NOCASE ASC
            LIMIT ? OFFSET ?
            """,
            (document_type_id, limit, offset),
        ).fetchall()
        return rows_to_dicts(rows)
