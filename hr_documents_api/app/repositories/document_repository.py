"""Queries against the ``documents`` table."""

import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from hr_documents_api.app.core.db import new_object_id, utc_now
from hr_documents_api.app.repositories.base import placeholders, row_to_dict, rows_to_dicts


class DocumentRepository:

    @staticmethod
    def find_active(cursor: sqlite3.Cursor, employee_id: str, document_type_id: str) -> Optional[Dict[str, Any]]:
        """Most recent active document for the pair, whatever its status."""
        row = cursor.execute(
            """
            SELECT * FROM documents
            WHERE employee_id = ? AND document_type_id = ? AND is_active = 1
            ORDER BY created_at DESC, rowid DESC
            LIMIT 1
            """,
            (employee_id, document_type_id),
        ).fetchone()
        return row_to_dict(row)

    @staticmethod
    def insert(
        cursor: sqlite3.Cursor, employee_id: str, document_type_id: str, value: str, status: str
    ) -> Dict[str, Any]:
        now = utc_now()
        document_id = new_object_id()
        cursor.execute(
            """
            INSERT INTO documents
                (id, value, status, employee_id, document_type_id, is_active, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, 1, ?, ?)
            """,
            (document_id, value, status, employee_id, document_type_id, now, now),
        )
        return DocumentRepository.find_by_id(cursor, document_id)

    @staticmethod
    def find_by_id(cursor: sqlite3.Cursor, document_id: str) -> Optional[Dict[str, Any]]:
        return row_to_dict(cursor.execute("SELECT * FROM documents WHERE id = ?", (document_id,)).fetchone())

    @staticmethod
    def update_value(cursor: sqlite3.Cursor, document_id: str, value: str, status: str) -> Dict[str, Any]:
        cursor.execute(
            "UPDATE documents SET value = ?, status = ?, updated_at = ? WHERE id = ?",
            (value, status, utc_now(), document_id),
        )
        return DocumentRepository.find_by_id(cursor, document_id)

    @staticmethod
    def sent_for_employee(cursor: sqlite3.Cursor, employee_id: str) -> List[Dict[str, Any]]:
        """Active SENT documents joined with their type, newest first."""
        rows = cursor.execute(
            """
            SELECT d.*, t.name AS type_name, t.description AS type_description,
                   t.id AS type_id
            FROM documents d
            LEFT JOIN document_types t ON t.id = d.document_type_id
            WHERE d.employee_id = ? AND d.is_active = 1 AND d.status = 'SENT'
            ORDER BY d.created_at DESC, d.rowid DESC
            """,
            (employee_id,),
        ).fetchall()
        return rows_to_dicts(rows)

    @staticmethod
    def sent_type_values(cursor: sqlite3.Cursor, employee_id: str) -> Dict[str, str]:
        """Map document type id to the value of its current SENT document."""
        values: Dict[str, str] = {}
        for row in DocumentRepository.sent_for_employee(cursor, employee_id):
            values.setdefault(row["document_type_id"], row["value"])
        return values

    @staticmethod
    def sent_type_ids_for_employees(cursor: sqlite3.Cursor, employee_ids: Iterable[str]) -> Dict[str, set]:
        ids = list(employee_ids)
        result: Dict[str, set] = {employee_id: set() for employee_id in ids}
        if not ids:
            return result
        rows = cursor.execute(
            f"""
            SELECT DISTINCT employee_id, document_type_id FROM documents
            WHERE is_active = 1 AND status = 'SENT' AND employee_id IN ({placeholders(ids)})
            """,
            ids,
        ).fetchall()
        for row in rows:
            result[row["employee_id"]].add(row["document_type_id"])
        return result
