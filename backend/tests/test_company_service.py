"""
BizTime Backend - Company Service Unit Tests
=============================================

What:  CompanyService against a mocked AsyncSession (no database).

What we test:
    ✅ Rows are shaped into the right envelopes
    ✅ Zero-row keyed statements raise NotFoundError
    ✅ The invoice-id lookup only runs after the company was found
    ✅ Driver errors become ConstraintViolationError / DatabaseError
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import IntegrityError, OperationalError

from biztime.exceptions import ConstraintViolationError, DatabaseError, NotFoundError
from biztime.schemas.company import CompanyCreate, CompanyUpdate
from biztime.services.company_service import CompanyService

ACME = {"code": "acme", "name": "Acme Corp", "description": "Maker of everything"}


class TestCompanyServiceRead:

    @pytest.mark.asyncio
    async def test_list_companies_projects_code_and_name(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(
            all_rows=[{"code": "acme", "name": "Acme Corp"}, {"code": "ibm", "name": "IBM"}]
        )

        result = await CompanyService(mock_db_session).list_companies()

        assert result.model_dump() == {
            "companies": [
                {"code": "acme", "name": "Acme Corp"},
                {"code": "ibm", "name": "IBM"},
            ]
        }

    @pytest.mark.asyncio
    async def test_list_companies_empty(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(all_rows=[])

        result = await CompanyService(mock_db_session).list_companies()

        assert result.companies == []

    @pytest.mark.asyncio
    async def test_get_company_attaches_invoice_ids(self, mock_db_session, make_result):
        mock_db_session.execute = AsyncMock(side_effect=[
            make_result(first=ACME),
            make_result(scalars=[3, 7, 12]),
        ])

        result = await CompanyService(mock_db_session).get_company("acme")

        assert result.company.code == "acme"
        assert result.company.description == "Maker of everything"
        assert result.company.invoices == [3, 7, 12]
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_get_company_not_found_skips_invoice_query(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(first=None)

        with pytest.raises(NotFoundError, match="Company not found: nope"):
            await CompanyService(mock_db_session).get_company("nope")

        assert mock_db_session.execute.await_count == 1


class TestCompanyServiceWrite:

    @pytest.mark.asyncio
    async def test_create_company_echoes_row(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(one=ACME)

        result = await CompanyService(mock_db_session).create_company(CompanyCreate(**ACME))

        assert result.model_dump() == {"company": ACME}

    @pytest.mark.asyncio
    async def test_create_duplicate_raises_constraint_violation(self, mock_db_session):
        mock_db_session.execute.side_effect = IntegrityError(
            "INSERT INTO companies ...", {}, Exception("UNIQUE constraint failed: companies.code")
        )

        with pytest.raises(ConstraintViolationError) as exc_info:
            await CompanyService(mock_db_session).create_company(CompanyCreate(**ACME))

        assert "acme" in exc_info.value.message
        assert exc_info.value.context["operation"] == "create_company"

    @pytest.mark.asyncio
    async def test_update_company(self, mock_db_session, make_result):
        updated = {**ACME, "description": "Now with rockets"}
        mock_db_session.execute.return_value = make_result(first=updated)

        result = await CompanyService(mock_db_session).update_company(
            "acme", CompanyUpdate(name="Acme Corp", description="Now with rockets")
        )

        assert result.company.code == "acme"
        assert result.company.description == "Now with rockets"

    @pytest.mark.asyncio
    async def test_update_unknown_company(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(first=None)

        with pytest.raises(NotFoundError):
            await CompanyService(mock_db_session).update_company(
                "nope", CompanyUpdate(name="X", description="Y")
            )

    @pytest.mark.asyncio
    async def test_delete_company(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(row=("acme",))

        result = await CompanyService(mock_db_session).delete_company("acme")

        assert result.model_dump() == {"status": "deleted"}

    @pytest.mark.asyncio
    async def test_delete_unknown_company(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(row=None)

        with pytest.raises(NotFoundError):
            await CompanyService(mock_db_session).delete_company("nope")

    @pytest.mark.asyncio
    async def test_delete_company_with_invoices(self, mock_db_session):
        mock_db_session.execute.side_effect = IntegrityError(
            "DELETE FROM companies ...", {}, Exception("FOREIGN KEY constraint failed")
        )

        with pytest.raises(ConstraintViolationError, match="still has invoices"):
            await CompanyService(mock_db_session).delete_company("acme")

    @pytest.mark.asyncio
    async def test_operational_error_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT ...", {}, Exception("connection reset")
        )

        with pytest.raises(DatabaseError):
            await CompanyService(mock_db_session).list_companies()
