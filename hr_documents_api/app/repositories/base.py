"""Helpers shared by the repositories."""

import sqlite3
from typing import Any, Dict, Iterable, List, Optional, Tuple


def row_to_dict(row: Optional[sqlite3.Row]) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    data = dict(row)
    for flag in ("is_active", "active"):
        if flag in data and data[flag] is not None:
            data[flag] = bool(data[flag])
    return data


def rows_to_dicts(rows: Iterable[sqlite3.Row]) -> List[Dict[str, Any]]:
    return [row_to_dict(row) for row in rows]


def status_condition(status: str, column: str = "is_active") -> Tuple[str, List[Any]]:
    """Translate an ``active``/``inactive``/``all`` filter into SQL."""
    if status == "active":
        return f"{column} = 1", []
    if status == "inactive":
        return f"{column} = 0", []
    return "1 = 1", []


def name_contains(fragment: str, column: str = "name") -> Tuple[str, List[Any]]:
    """Case-insensitive literal substring match on ``column``.

    Folding happens in Python through the ``casefold`` SQL function
    registered by ``get_connection`` since SQLite's ``LOWER`` only folds
    ASCII letters.  ``%``, ``_`` and ``\\`` in ``fragment`` match themselves.
    """
    escaped = fragment.casefold().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"casefold({column}) LIKE ? ESCAPE '\\'", [f"%{escaped}%"]


def placeholders(values: List[Any]) -> str:
    return ", ".join("?" for _ in values)


def build_update(fields: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """Return the ``SET`` clause and parameters for a partial update."""
    assignments = ", ".join(f"{column} = ?" for column in fields)
    return assignments, list(fields.values())
