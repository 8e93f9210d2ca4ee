"""
Input validation and normalisation helpers.

Identifiers, CPF numbers and submitted document values are checked and
cleaned here so that the services and routers share one definition of
what a well formed value looks like.
"""

import re
from typing import Iterable, List, Optional

from .exceptions import InvalidObjectIdError, ValidationError

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")
CPF_FORMATTED_RE = re.compile(r"^[0-9]{3}\.[0-9]{3}\.[0-9]{3}-[0-9]{2}$")
CPF_DIGITS_RE = re.compile(r"^[0-9]{11}$")
NON_ALPHANUMERIC_RE = re.compile(r"[^a-zA-Z0-9]")

VALID_STATUSES = ("active", "inactive", "all")


def is_valid_object_id(value: str) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_RE.match(value))


def validate_object_id(value: str, field_name: str = "ID") -> str:
    """Return ``value`` lower-cased or raise ``InvalidObjectIdError``."""
    if not is_valid_object_id(value):
        raise InvalidObjectIdError(field_name)
    return value.lower()


def validate_object_ids(values: Iterable[str], field_name: str = "ID") -> List[str]:
    return [validate_object_id(value, field_name) for value in values]


def clean_document_value(value: str) -> str:
    """Strip every character that is not an ASCII letter or digit.

    >>> clean_document_value("123.456.789-01")
    '12345678901'
    """
    if not value:
        return ""
    return NON_ALPHANUMERIC_RE.sub("", value)


def format_cpf(value: str) -> Optional[str]:
    """Return the canonical ``000.000.000-00`` form of a CPF.

    Accepts the already formatted string or its eleven bare digits;
    anything else yields ``None``.
    """
    if value is None:
        return None
    candidate = value.strip()
    if CPF_FORMATTED_RE.match(candidate):
        return candidate
    if CPF_DIGITS_RE.match(candidate):
        return f"{candidate[:3]}.{candidate[3:6]}.{candidate[6:9]}-{candidate[9:]}"
    return None


def format_document_for_display(value: str) -> str:
    """Re-apply punctuation to stored document values (CPF and RG)."""
    if not value:
        return value
    if CPF_DIGITS_RE.match(value):
        return format_cpf(value)
    if re.match(r"^[0-9]{8}[0-9X]$", value, re.IGNORECASE):
        return f"{value[:2]}.{value[2:5]}.{value[5:8]}-{value[8:]}"
    return value


def validate_status(status: str) -> str:
    """Check a ``status`` filter against ``active``/``inactive``/``all``."""
    if status not in VALID_STATUSES:
        raise ValidationError(
            f"Parâmetro 'status' inválido: {status}. Valores aceitos: {', '.join(VALID_STATUSES)}",
            details={"status": status},
        )
    return status
