import pytest

from hr_documents_api.app.core.exceptions import InvalidObjectIdError, PageNotFoundError, ValidationError
from hr_documents_api.app.core.pagination import build_pagination, validate_page, validate_page_params
from hr_documents_api.app.core.validation import (
    clean_document_value,
    format_cpf,
    format_document_for_display,
    validate_object_id,
    validate_status,
)


def test_object_id_is_lower_cased():
    assert validate_object_id("65F1C2A9E4B0A1B2C3D4E5F6") == "65f1c2a9e4b0a1b2c3d4e5f6"


@pytest.mark.parametrize("value", ["123", "z" * 24, "a" * 25, ""])
def test_malformed_object_id_is_rejected(value):
    with pytest.raises(InvalidObjectIdError) as excinfo:
        validate_object_id(value, "employeeId")
    assert excinfo.value.code == "INVALID_OBJECT_ID"
    assert excinfo.value.status_code == 400


def test_format_cpf():
    assert format_cpf("123.456.789-01") == "123.456.789-01"
    assert format_cpf(" 12345678901 ") == "123.456.789-01"
    assert format_cpf("123456789") is None
    assert format_cpf("123-456-789.01") is None


def test_clean_document_value_keeps_only_ascii_alphanumerics():
    assert clean_document_value("MG-12.345.678") == "MG12345678"
    assert clean_document_value("") == ""


def test_display_formats_cpf_and_rg():
    assert format_document_for_display("12345678901") == "123.456.789-01"
    assert format_document_for_display("12345678X") == "12.345.678-X"
    assert format_document_for_display("MG1234567") == "MG1234567"


def test_validate_status():
    assert validate_status("inactive") == "inactive"
    with pytest.raises(ValidationError):
        validate_status("ACTIVE")


def test_page_bounds():
    validate_page(1, 0, 10)
    validate_page(3, 21, 10)
    with pytest.raises(PageNotFoundError) as excinfo:
        validate_page(4, 21, 10)
    assert excinfo.value.details == {"requestedPage": 4, "totalPages": 3}
    with pytest.raises(ValidationError):
        validate_page_params(0, 10)
    with pytest.raises(ValidationError):
        validate_page_params(1, 0)


def test_pagination_info():
    info = build_pagination(2, 10, 25)
    assert info.total_pages == 3
    assert info.has_next_page is True
    assert info.has_previous_page is True
    assert build_pagination(1, 10, 0).has_next_page is False


def test_cpf_requires_ascii_digits():
    arabic_indic = "١٢٣٤٥٦٧٨٩٠١"
    assert format_cpf(arabic_indic) is None
    assert format_cpf("١٢٣.٤٥٦.٧٨٩-٠١") is None
    assert format_document_for_display(arabic_indic) == arabic_indic
