import pytest

from hr_documents_api.app.core.exceptions import (
    DuplicateEmployeeError,
    EmployeeNotFoundError,
    PageNotFoundError,
    ValidationError,
)
from hr_documents_api.app.schemas.employee import EmployeeUpdate
from hr_documents_api.app.services.employee_link_service import EmployeeLinkService
from hr_documents_api.app.services.employee_service import EmployeeService
from tests.factories import make_document_type, make_employee


@pytest.mark.asyncio
async def test_create_normalizes_bare_cpf_digits():
    employee = await make_employee(document="12345678901")
    assert employee.document == "123.456.789-01"
    assert employee.is_active is True
    assert employee.required_document_types == []
    assert len(employee.id) == 24


@pytest.mark.asyncio
async def test_create_rejects_cpf_of_active_employee():
    await make_employee(document="111.222.333-44")
    with pytest.raises(DuplicateEmployeeError):
        await make_employee(name="Bruno Lima", document="11122233344")


@pytest.mark.asyncio
async def test_soft_deleted_employee_frees_its_cpf():
    first = await make_employee()
    await EmployeeService.soft_delete(first.id)
    second = await make_employee(name="Outra Pessoa")
    assert second.id != first.id


@pytest.mark.asyncio
async def test_soft_delete_is_idempotent():
    employee = await make_employee()
    deleted = await EmployeeService.soft_delete(employee.id)
    assert deleted.is_active is False
    assert deleted.deleted_at is not None
    assert await EmployeeService.soft_delete(employee.id) is None
    assert await EmployeeService.soft_delete("a" * 24) is None


@pytest.mark.asyncio
async def test_restore_reverses_soft_delete():
    employee = await make_employee()
    await EmployeeService.soft_delete(employee.id)
    restored = await EmployeeService.restore(employee.id)
    assert restored.is_active is True
    assert restored.deleted_at is None
    assert (await EmployeeService.get(employee.id)).name == employee.name


@pytest.mark.asyncio
async def test_restore_unknown_id_returns_none():
    assert await EmployeeService.restore("b" * 24) is None


@pytest.mark.asyncio
async def test_restore_refused_while_cpf_is_taken():
    first = await make_employee()
    await EmployeeService.soft_delete(first.id)
    await make_employee(name="Nova Pessoa")
    with pytest.raises(DuplicateEmployeeError):
        await EmployeeService.restore(first.id)


@pytest.mark.asyncio
async def test_get_inactive_employee_is_not_found():
    employee = await make_employee()
    await EmployeeService.soft_delete(employee.id)
    with pytest.raises(EmployeeNotFoundError):
        await EmployeeService.get(employee.id)


@pytest.mark.asyncio
async def test_update_checks_uniqueness_against_others_only():
    ana = await make_employee()
    bruno = await make_employee(name="Bruno Lima", document="555.666.777-88")

    same = await EmployeeService.update(ana.id, EmployeeUpdate(document="111.222.333-44", name="Ana Maria"))
    assert same.name == "Ana Maria"

    with pytest.raises(DuplicateEmployeeError):
        await EmployeeService.update(bruno.id, EmployeeUpdate(document="111.222.333-44"))


@pytest.mark.asyncio
async def test_update_inactive_employee_is_not_found():
    employee = await make_employee()
    await EmployeeService.soft_delete(employee.id)
    with pytest.raises(EmployeeNotFoundError):
        await EmployeeService.update(employee.id, EmployeeUpdate(name="Qualquer"))


@pytest.mark.asyncio
async def test_list_filters_by_status():
    ana = await make_employee()
    await make_employee(name="Bruno Lima", document="555.666.777-88")
    await EmployeeService.soft_delete(ana.id)

    items, total = await EmployeeService.list("all", None, 1, 10)
    assert total == 2
    items, total = await EmployeeService.list("active", None, 1, 10)
    assert [e.name for e in items] == ["Bruno Lima"]
    items, total = await EmployeeService.list("inactive", None, 1, 10)
    assert [e.id for e in items] == [ana.id]


@pytest.mark.asyncio
async def test_list_rejects_unknown_status():
    with pytest.raises(ValidationError):
        await EmployeeService.list("deleted", None, 1, 10)


@pytest.mark.asyncio
async def test_page_past_the_end_reports_total_pages():
    await make_employee(name="Ana Souza", document="111.222.333-44")
    await make_employee(name="Bruno Lima", document="222.333.444-55")
    await make_employee(name="Carla Dias", document="333.444.555-66")

    items, total = await EmployeeService.list("all", None, 2, 2)
    assert total == 3
    assert [e.name for e in items] == ["Carla Dias"]

    with pytest.raises(PageNotFoundError) as excinfo:
        await EmployeeService.list("all", None, 5, 2)
    assert excinfo.value.requested_page == 5
    assert excinfo.value.total_pages == 2


@pytest.mark.asyncio
async def test_first_page_of_empty_result_is_allowed():
    items, total = await EmployeeService.list("all", None, 1, 10)
    assert items == []
    assert total == 0


@pytest.mark.asyncio
async def test_search_by_formatted_or_bare_cpf_matches_exactly():
    ana = await make_employee()
    await make_employee(name="Bruno Lima", document="555.666.777-88")

    for query in ("111.222.333-44", "11122233344"):
        items, total = await EmployeeService.search_by_name_or_cpf(query, "all", 1, 10)
        assert total == 1
        assert items[0].id == ana.id


@pytest.mark.asyncio
async def test_search_by_name_is_case_insensitive_substring():
    await make_employee(name="Ana Souza")
    await make_employee(name="Mariana Alves", document="555.666.777-88")
    await make_employee(name="Bruno Lima", document="999.888.777-66")

    items, total = await EmployeeService.search_by_name_or_cpf("ANA", "all", 1, 10)
    assert total == 2
    assert {e.name for e in items} == {"Ana Souza", "Mariana Alves"}


@pytest.mark.asyncio
async def test_find_by_document_type_lists_linked_active_employees():
    rg = await make_document_type("RG")
    ana = await make_employee()
    bruno = await make_employee(name="Bruno Lima", document="555.666.777-88")
    await make_employee(name="Carla Dias", document="333.444.555-66")
    await EmployeeLinkService.link_document_types(ana.id, [rg.id])
    await EmployeeLinkService.link_document_types(bruno.id, [rg.id])
    await EmployeeService.soft_delete(bruno.id)

    items, total = await EmployeeService.find_by_document_type(rg.id, 1, 10)
    assert total == 1
    assert items[0].id == ana.id
    assert items[0].required_document_types == [rg.id]


@pytest.mark.asyncio
async def test_search_by_name_folds_accented_letters():
    joao = await make_employee(name="JOÃO CONCEIÇÃO", document="999.888.777-66")
    await make_employee(name="Joana Lima", document="555.666.777-88")

    found, total = await EmployeeService.search_by_name_or_cpf("joão", "all", 1, 10)
    assert total == 1
    assert [e.id for e in found] == [joao.id]

    found, total = await EmployeeService.list("all", "conceição", 1, 10)
    assert [e.id for e in found] == [joao.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["%", "_", "\\", "a%a"])
async def test_search_treats_like_wildcards_literally(query):
    await make_employee(name="Ana Souza")
    found, total = await EmployeeService.search_by_name_or_cpf(query, "all", 1, 10)
    assert (found, total) == ([], 0)


@pytest.mark.asyncio
async def test_search_matches_literal_percent_in_name():
    await make_employee(name="Ana Souza")
    promo = await make_employee(name="Turma 100% RH", document="999.888.777-66")
    found, total = await EmployeeService.search_by_name_or_cpf("100%", "all", 1, 10)
    assert total == 1
    assert found[0].id == promo.id


@pytest.mark.asyncio
async def test_huge_page_of_empty_result_returns_nothing():
    rg = await make_document_type("RG")
    huge = 10**19
    assert await EmployeeService.list("all", "ninguém", huge, 10) == ([], 0)
    assert await EmployeeService.search_by_name_or_cpf("ninguém", "all", huge, 10) == ([], 0)
    assert await EmployeeService.find_by_document_type(rg.id, huge, 10) == ([], 0)
