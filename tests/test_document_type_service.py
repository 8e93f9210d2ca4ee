import pytest

from hr_documents_api.app.core.exceptions import (
    DocumentTypeNotFoundError,
    DuplicateDocumentTypeNameError,
    ValidationError,
)
from hr_documents_api.app.schemas.document_type import DocumentTypeCategory, DocumentTypeUpdate
from hr_documents_api.app.services.document_type_service import DocumentTypeService
from tests.factories import make_document_type


@pytest.mark.asyncio
async def test_name_is_trimmed_and_upper_cased():
    document_type = await make_document_type("  ctps  ", "Carteira de Trabalho")
    assert document_type.name == "CTPS"
    assert document_type.category == DocumentTypeCategory.GENERAL


@pytest.mark.asyncio
async def test_duplicate_active_name_is_rejected_case_insensitively():
    await make_document_type("RG")
    with pytest.raises(DuplicateDocumentTypeNameError):
        await make_document_type("rg")


@pytest.mark.asyncio
async def test_blank_name_is_rejected():
    with pytest.raises(ValidationError):
        await make_document_type("   ")


@pytest.mark.asyncio
async def test_rename_to_own_name_is_allowed():
    rg = await make_document_type("RG")
    updated = await DocumentTypeService.update(rg.id, DocumentTypeUpdate(name="rg", description="Identidade"))
    assert updated.name == "RG"
    assert updated.description == "Identidade"


@pytest.mark.asyncio
async def test_rename_to_another_active_name_conflicts():
    await make_document_type("RG")
    ctps = await make_document_type("CTPS")
    with pytest.raises(DuplicateDocumentTypeNameError):
        await DocumentTypeService.update(ctps.id, DocumentTypeUpdate(name="RG"))


@pytest.mark.asyncio
async def test_soft_delete_restore_cycle():
    rg = await make_document_type("RG")
    deleted = await DocumentTypeService.soft_delete(rg.id)
    assert deleted.is_active is False
    assert await DocumentTypeService.soft_delete(rg.id) is None

    with pytest.raises(DocumentTypeNotFoundError):
        await DocumentTypeService.get(rg.id)

    restored = await DocumentTypeService.restore(rg.id)
    assert restored.is_active is True
    assert await DocumentTypeService.restore("c" * 24) is None


@pytest.mark.asyncio
async def test_restore_refused_when_name_reused():
    rg = await make_document_type("RG")
    await DocumentTypeService.soft_delete(rg.id)
    await make_document_type("RG")
    with pytest.raises(DuplicateDocumentTypeNameError):
        await DocumentTypeService.restore(rg.id)


@pytest.mark.asyncio
async def test_list_by_status_and_name():
    rg = await make_document_type("RG")
    await make_document_type("CTPS")
    await make_document_type("CNH")
    await DocumentTypeService.soft_delete(rg.id)

    items, total = await DocumentTypeService.list("active", None, 1, 10)
    assert [t.name for t in items] == ["CNH", "CTPS"]
    items, total = await DocumentTypeService.list("inactive", None, 1, 10)
    assert [t.name for t in items] == ["RG"]
    items, total = await DocumentTypeService.list("all", "ct", 1, 10)
    assert total == 1


@pytest.mark.asyncio
async def test_list_name_filter_folds_accented_letters():
    certidao = await make_document_type("certidão de nascimento")
    await make_document_type("RG")
    assert certidao.name == "CERTIDÃO DE NASCIMENTO"

    types, total = await DocumentTypeService.list("active", "certidão", 1, 10)
    assert total == 1
    assert types[0].id == certidao.id

    types, total = await DocumentTypeService.list("active", "_", 1, 10)
    assert (types, total) == ([], 0)


@pytest.mark.asyncio
async def test_list_huge_page_of_empty_result():
    assert await DocumentTypeService.list("inactive", None, 10**19, 10) == ([], 0)
