import pytest

from hr_documents_api.app.core.db import get_cursor
from hr_documents_api.app.core.exceptions import (
    DocumentTypeNotFoundError,
    EmployeeNotFoundError,
    ValidationError,
)
from hr_documents_api.app.repositories.document_repository import DocumentRepository
from hr_documents_api.app.repositories.document_type_repository import DocumentTypeRepository
from hr_documents_api.app.repositories.link_repository import LinkRepository
from hr_documents_api.app.schemas.employee import EmployeeUpdate
from hr_documents_api.app.services.document_type_service import DocumentTypeService
from hr_documents_api.app.services.employee_link_service import (
    NAME_NOT_FOUND_PLACEHOLDER,
    TYPE_NOT_FOUND_PLACEHOLDER,
    EmployeeLinkService,
    document_type_ref,
)
from hr_documents_api.app.services.employee_service import EmployeeService
from tests.factories import make_cpf_type, make_document_type, make_employee


@pytest.mark.asyncio
async def test_link_creates_active_links_and_required_view():
    employee = await make_employee()
    rg = await make_document_type("RG")
    ctps = await make_document_type("CTPS")

    links = await EmployeeLinkService.link_document_types(employee.id, [rg.id, ctps.id, rg.id])

    assert [link.document_type.name for link in links] == ["RG", "CTPS"]
    assert all(link.active for link in links)
    refreshed = await EmployeeService.get(employee.id)
    assert refreshed.required_document_types == [rg.id, ctps.id]


@pytest.mark.asyncio
async def test_link_is_all_or_nothing_when_one_is_already_linked():
    employee = await make_employee()
    rg = await make_document_type("RG")
    ctps = await make_document_type("CTPS")
    await EmployeeLinkService.link_document_types(employee.id, [rg.id])

    with pytest.raises(ValidationError) as excinfo:
        await EmployeeLinkService.link_document_types(employee.id, [ctps.id, rg.id])

    assert "RG" in excinfo.value.message
    assert "Nenhum vínculo foi criado" in excinfo.value.message
    refreshed = await EmployeeService.get(employee.id)
    assert refreshed.required_document_types == [rg.id]


@pytest.mark.asyncio
async def test_link_unknown_or_inactive_type_creates_nothing():
    employee = await make_employee()
    rg = await make_document_type("RG")
    old = await make_document_type("TITULO")
    await DocumentTypeService.soft_delete(old.id)

    with pytest.raises(DocumentTypeNotFoundError):
        await EmployeeLinkService.link_document_types(employee.id, [rg.id, "d" * 24])
    with pytest.raises(DocumentTypeNotFoundError):
        await EmployeeLinkService.link_document_types(employee.id, [rg.id, old.id])

    assert (await EmployeeService.get(employee.id)).required_document_types == []


@pytest.mark.asyncio
async def test_link_requires_existing_employee_and_ids():
    rg = await make_document_type("RG")
    with pytest.raises(EmployeeNotFoundError):
        await EmployeeLinkService.link_document_types("e" * 24, [rg.id])
    employee = await make_employee()
    with pytest.raises(ValidationError):
        await EmployeeLinkService.link_document_types(employee.id, [])


@pytest.mark.asyncio
async def test_linking_tax_id_type_sends_cpf_automatically():
    employee = await make_employee(document="123.456.789-01")
    cpf = await make_cpf_type()

    await EmployeeLinkService.link_document_types(employee.id, [cpf.id])

    with get_cursor() as cursor:
        document = DocumentRepository.find_active(cursor, employee.id, cpf.id)
    assert document["status"] == "SENT"
    assert document["value"] == "12345678901"


@pytest.mark.asyncio
async def test_cpf_change_refreshes_tax_id_document():
    employee = await make_employee(document="123.456.789-01")
    cpf = await make_cpf_type()
    await EmployeeLinkService.link_document_types(employee.id, [cpf.id])

    await EmployeeService.update(employee.id, EmployeeUpdate(document="98765432100"))

    with get_cursor() as cursor:
        document = DocumentRepository.find_active(cursor, employee.id, cpf.id)
    assert document["value"] == "98765432100"


@pytest.mark.asyncio
async def test_unlink_is_all_or_nothing():
    employee = await make_employee()
    rg = await make_document_type("RG")
    ctps = await make_document_type("CTPS")
    await EmployeeLinkService.link_document_types(employee.id, [rg.id])

    with pytest.raises(ValidationError) as excinfo:
        await EmployeeLinkService.unlink_document_types(employee.id, [rg.id, ctps.id])
    assert "CTPS" in excinfo.value.message
    assert (await EmployeeService.get(employee.id)).required_document_types == [rg.id]

    unlinked = await EmployeeLinkService.unlink_document_types(employee.id, [rg.id])
    assert [ref.name for ref in unlinked] == ["RG"]
    assert (await EmployeeService.get(employee.id)).required_document_types == []


@pytest.mark.asyncio
async def test_unlink_keeps_submitted_documents():
    employee = await make_employee(document="123.456.789-01")
    cpf = await make_cpf_type()
    await EmployeeLinkService.link_document_types(employee.id, [cpf.id])
    await EmployeeLinkService.unlink_document_types(employee.id, [cpf.id])

    with get_cursor() as cursor:
        assert DocumentRepository.find_active(cursor, employee.id, cpf.id) is not None


@pytest.mark.asyncio
async def test_relink_after_unlink_is_allowed():
    employee = await make_employee()
    rg = await make_document_type("RG")
    await EmployeeLinkService.link_document_types(employee.id, [rg.id])
    await EmployeeLinkService.unlink_document_types(employee.id, [rg.id])
    await EmployeeLinkService.link_document_types(employee.id, [rg.id])

    all_links = await EmployeeLinkService.get_required_documents(employee.id, "all")
    assert [link.active for link in all_links] == [False, True]


@pytest.mark.asyncio
async def test_restore_link_reuses_latest_row():
    employee = await make_employee()
    rg = await make_document_type("RG")
    await EmployeeLinkService.link_document_types(employee.id, [rg.id])
    await EmployeeLinkService.unlink_document_types(employee.id, [rg.id])

    restored = await EmployeeLinkService.restore_document_type_link(employee.id, rg.id)

    assert restored.active is True
    assert restored.deleted_at is None
    assert len(await EmployeeLinkService.get_required_documents(employee.id, "all")) == 1


@pytest.mark.asyncio
async def test_restore_link_creates_row_when_none_exists():
    employee = await make_employee()
    rg = await make_document_type("RG")
    restored = await EmployeeLinkService.restore_document_type_link(employee.id, rg.id)
    assert restored.document_type.id == rg.id
    assert (await EmployeeService.get(employee.id)).required_document_types == [rg.id]


@pytest.mark.asyncio
async def test_required_documents_filtered_by_status():
    employee = await make_employee()
    rg = await make_document_type("RG")
    ctps = await make_document_type("CTPS")
    await EmployeeLinkService.link_document_types(employee.id, [rg.id, ctps.id])
    await EmployeeLinkService.unlink_document_types(employee.id, [ctps.id])

    active = await EmployeeLinkService.get_required_documents(employee.id, "active")
    inactive = await EmployeeLinkService.get_required_documents(employee.id, "inactive")
    assert [link.document_type.name for link in active] == ["RG"]
    assert [link.document_type.name for link in inactive] == ["CTPS"]
    with pytest.raises(ValidationError):
        await EmployeeLinkService.get_required_documents(employee.id, "removed")


@pytest.mark.asyncio
async def test_required_documents_use_placeholder_for_empty_type_name():
    employee = await make_employee()
    with get_cursor() as cursor:
        nameless = DocumentTypeRepository.insert(cursor, "", None, "general")
        LinkRepository.insert(cursor, employee.id, nameless["id"])

    links = await EmployeeLinkService.get_required_documents(employee.id)
    assert links[0].document_type.name == NAME_NOT_FOUND_PLACEHOLDER


def test_type_reference_placeholder_for_missing_row():
    ref = document_type_ref("f" * 24, None)
    assert ref.name == TYPE_NOT_FOUND_PLACEHOLDER
    assert ref.description is None


@pytest.mark.asyncio
async def test_remove_duplicate_links_keeps_newest():
    employee = await make_employee()
    rg = await make_document_type("RG")
    ctps = await make_document_type("CTPS")
    with get_cursor() as cursor:
        LinkRepository.insert(cursor, employee.id, rg.id)
        LinkRepository.insert(cursor, employee.id, rg.id)
        newest = LinkRepository.insert(cursor, employee.id, rg.id)
        LinkRepository.insert(cursor, employee.id, ctps.id)

    assert await EmployeeLinkService.remove_duplicate_links(employee.id) == 2
    assert await EmployeeLinkService.remove_duplicate_links(employee.id) == 0

    with get_cursor() as cursor:
        remaining = LinkRepository.for_employee(cursor, employee.id, "active")
    assert {link["document_type_id"] for link in remaining} == {rg.id, ctps.id}
    assert newest["id"] in {link["id"] for link in remaining}


@pytest.mark.asyncio
async def test_remove_duplicate_links_groups_inactive_rows_too():
    employee = await make_employee()
    rg = await make_document_type("RG")
    with get_cursor() as cursor:
        older = LinkRepository.insert(cursor, employee.id, rg.id)
        newest = LinkRepository.insert(cursor, employee.id, rg.id)
        LinkRepository.deactivate_ids(cursor, [newest["id"]])

    assert await EmployeeLinkService.remove_duplicate_links(employee.id) == 1

    with get_cursor() as cursor:
        assert LinkRepository.for_employee(cursor, employee.id, "active") == []
        inactive = LinkRepository.for_employee(cursor, employee.id, "inactive")
    assert {link["id"] for link in inactive} == {older["id"], newest["id"]}
