"""Queries against ``employee_document_type_links``.

Rows are ordered oldest first unless a method says otherwise; "most
recent" always means the latest ``created_at`` with insertion order as
the tie breaker.
"""

import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from hr_documents_api.app.core.db import new_object_id, utc_now
from hr_documents_api.app.repositories.base import placeholders, row_to_dict, rows_to_dicts, status_condition


class LinkRepository:

    @staticmethod
    def insert(cursor: sqlite3.Cursor, employee_id: str, document_type_id: str) -> Dict[str, Any]:
        now = utc_now()
        link_id = new_object_id()
        cursor.execute(
            """
            INSERT INTO employee_document_type_links
                (id, employee_id, document_type_id, active, created_at, updated_at)
            VALUES (?, ?, ?, 1, ?, ?)
            """,
            (link_id, employee_id, document_type_id, now, now),
        )
        return row_to_dict(
            cursor.execute("SELECT * FROM employee_document_type_links WHERE id = ?", (link_id,)).fetchone()
        )

    @staticmethod
    def for_employee(cursor: sqlite3.Cursor, employee_id: str, status: str = "active") -> List[Dict[str, Any]]:
        clause, params = status_condition(status, column="active")
        rows = cursor.execute(
            f"""
            SELECT * FROM employee_document_type_links
            WHERE employee_id = ? AND {clause}
            ORDER BY created_at ASC, rowid ASC
            """,
            [employee_id] + params,
        ).fetchall()
        return rows_to_dicts(rows)

    @staticmethod
    def active_type_ids(cursor: sqlite3.Cursor, employee_id: str) -> List[str]:
        """Distinct actively linked type ids in the order they were first linked."""
        seen: Dict[str, None] = {}
        for link in LinkRepository.for_employee(cursor, employee_id, "active"):
            seen.setdefault(link["document_type_id"], None)
        return list(seen)

    @staticmethod
    def active_type_ids_for_employees(
        cursor: sqlite3.Cursor, employee_ids: Iterable[str]
    ) -> Dict[str, List[str]]:
        ids = list(employee_ids)
        result: Dict[str, List[str]] = {employee_id: [] for employee_id in ids}
        if not ids:
            return result
        rows = cursor.execute(
            f"""
            SELECT employee_id, document_type_id FROM employee_document_type_links
            WHERE active = 1 AND employee_id IN ({placeholders(ids)})
            ORDER BY created_at ASC, rowid ASC
            """,
            ids,
        ).fetchall()
        for row in rows:
            linked = result[row["employee_id"]]
            if row["document_type_id"] not in linked:
                linked.append(row["document_type_id"])
        return result

    @staticmethod
    def latest(cursor: sqlite3.Cursor, employee_id: str, document_type_id: str) -> Optional[Dict[str, Any]]:
        row = cursor.execute(
            """
            SELECT * FROM employee_document_type_links
            WHERE employee_id = ? AND document_type_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT 1
            """,
            (employee_id, document_type_id),
        ).fetchone()
        return row_to_dict(row)

    @staticmethod
    def has_active(cursor: sqlite3.Cursor, employee_id: str, document_type_id: str) -> bool:
        row = cursor.execute(
            """
            SELECT 1 FROM employee_document_type_links
            WHERE employee_id = ? AND document_type_id = ? AND active = 1
            LIMIT 1
            """,
            (employee_id, document_type_id),
        ).fetchone()
        return row is not None

    @staticmethod
    def deactivate_types(cursor: sqlite3.Cursor, employee_id: str, document_type_ids: List[str]) -> int:
        now = utc_now()
        cursor.execute(
            f"""
            UPDATE employee_document_type_links
            SET active = 0, deleted_at = ?, updated_at = ?
            WHERE employee_id = ? AND active = 1 AND document_type_id IN ({placeholders(document_type_ids)})
            """,
            [now, now, employee_id] + list(document_type_ids),
        )
        return cursor.rowcount

    @staticmethod
    def deactivate_ids(cursor: sqlite3.Cursor, link_ids: List[str]) -> int:
        if not link_ids:
            return 0
        now = utc_now()
        cursor.execute(
            f"""
            UPDATE employee_document_type_links
            SET active = 0, deleted_at = ?, updated_at = ?
            WHERE active = 1 AND id IN ({placeholders(link_ids)})
            """,
            [now, now] + list(link_ids),
        )
        return cursor.rowcount

    @staticmethod
    def reactivate(cursor: sqlite3.Cursor, link_id: str) -> Dict[str, Any]:
        cursor.execute(
            """
            UPDATE employee_document_type_links
            SET active = 1, deleted_at = NULL, updated_at = ?
            WHERE id = ?
            """,
            (utc_now(), link_id),
        )
        return row_to_dict(
            cursor.execute("SELECT * FROM employee_document_type_links WHERE id = ?", (link_id,)).fetchone()
        )

    @staticmethod
    def pending_filters(status: str, document_type_id: Optional[str]):
        clause, params = status_condition(status, column="e.is_active")
        conditions = ["l.active = 1", clause]
        if document_type_id:
            conditions.append("l.document_type_id = ?")
            params.append(document_type_id)
        conditions.append(
            """NOT EXISTS (
                SELECT 1 FROM documents d
                WHERE d.employee_id = l.employee_id
                  AND d.document_type_id = l.document_type_id
                  AND d.is_active = 1 AND d.status = 'SENT'
            )"""
        )
        return " AND ".join(conditions), params

    @staticmethod
    def count_pending(cursor: sqlite3.Cursor, status: str, document_type_id: Optional[str] = None) -> int:
        where, params = LinkRepository.pending_filters(status, document_type_id)
        row = cursor.execute(
            f"""
            SELECT COUNT(*) AS total FROM (
                SELECT l.employee_id, l.document_type_id
                FROM employee_document_type_links l
                JOIN employees e ON e.id = l.employee_id
                WHERE {where}
                GROUP BY l.employee_id, l.document_type_id
            )
            """,
            params,
        ).fetchone()
        return row["total"]

    @staticmethod
    def list_pending(
        cursor: sqlite3.Cursor, status: str, limit: int, offset: int, document_type_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Employee/type pairs with an active link and no submitted document."""
        where, params = LinkRepository.pending_filters(status, document_type_id)
        rows = cursor.execute(
            f"""
            SELECT l.employee_id, l.document_type_id, MIN(l.created_at) AS required_since,
                   e.name AS employee_name, e.document AS employee_document,
                   t.name AS type_name, t.description AS type_description
            FROM employee_document_type_links l
            JOIN employees e ON e.id = l.employee_id
            LEFT JOIN document_types t ON t.id = l.document_type_id
            WHERE {where}
            GROUP BY l.employee_id, l.document_type_id
            ORDER BY required_since ASC, e.name ASC
            LIMIT ? OFFSET ?
            """,
            params + [limit, offset],
        ).fetchall()
        return rows_to_dicts(rows)
