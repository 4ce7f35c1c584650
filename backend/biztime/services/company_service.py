"""
BizTime Backend - Company Service
==================================

What:  Parameterized SQL for the /companies endpoints.
How:   Each method issues one statement (two for `get_company`) on the session
       the service was built with, checks for a zero-row result, and shapes the
       rows into a response envelope.
Who:   Built per request by `routes.companies.get_company_service`.

Statements:
    list_companies   SELECT code, name FROM companies ORDER BY name
    get_company      SELECT code, name, description FROM companies WHERE code = :code
                     SELECT id FROM invoices WHERE comp_code = :code ORDER BY id
    create_company   INSERT INTO companies (code, name, description) ... RETURNING ...
    update_company   UPDATE companies SET name = :name, description = :description
                     WHERE code = :code RETURNING ...
    delete_company   DELETE FROM companies WHERE code = :code RETURNING code
"""

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.database import translate_db_errors
from biztime.exceptions import NotFoundError
from biztime.models.company import Company
from biztime.models.invoice import Invoice
from biztime.schemas.common import StatusResponse
from biztime.schemas.company import (
    CompanyCreate,
    CompanyDetail,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyRecord,
    CompanyResponse,
    CompanySummary,
    CompanyUpdate,
)

logger = logging.getLogger(__name__)

# Bulk UPDATE/DELETE: no ORM objects are loaded, nothing to synchronize
_NO_SYNC = {"synchronize_session": False}


class CompanyService:
    """
    CRUD over the `companies` table.

    The session is injected at construction; the service holds no other state.
    Errors from the driver are translated by `translate_db_errors`; NotFoundError
    is raised here whenever a keyed statement matched no row.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_companies(self) -> CompanyListResponse:
        with translate_db_errors("list_companies", "Could not list companies"):
            result = await self.db.execute(
                select(Company.code, Company.name).order_by(Company.name)
            )
            rows = result.mappings().all()

        return CompanyListResponse(
            companies=[CompanySummary(**row) for row in rows]
        )

    async def get_company(self, code: str) -> CompanyDetailResponse:
        """
        Fetch one company and the ids of its invoices.

        The code must match exactly; there is no case folding. The invoice
        lookup runs only after the company is found and uses the same key.

        Raises:
            NotFoundError: No company has this code (→ 404)
        """
        with translate_db_errors("get_company", "Could not load company"):
            result = await self.db.execute(
                select(Company.code, Company.name, Company.description)
                .where(Company.code == code)
            )
            row = result.mappings().first()

            if row is None:
                raise NotFoundError(resource="Company", resource_id=code)

            invoice_result = await self.db.execute(
                select(Invoice.id)
                .where(Invoice.comp_code == code)
                .order_by(Invoice.id)
            )
            invoice_ids = list(invoice_result.scalars().all())

        return CompanyDetailResponse(
            company=CompanyDetail(**row, invoices=invoice_ids)
        )

    async def create_company(self, payload: CompanyCreate) -> CompanyResponse:
        """
        Insert a company and echo back exactly the stored code, name and description.

        Raises:
            ConstraintViolationError: Code or name already taken (→ 409)
        """
        with translate_db_errors(
            "create_company",
            f"Company '{payload.code}' conflicts with an existing company",
        ):
            result = await self.db.execute(
                insert(Company)
                .values(
                    code=payload.code,
                    name=payload.name,
                    description=payload.description,
                )
                .returning(Company.code, Company.name, Company.description)
            )
            row = result.mappings().one()

        logger.info("Company created: %s", row["code"])
        return CompanyResponse(company=CompanyRecord(**row))

    async def update_company(self, code: str, payload: CompanyUpdate) -> CompanyResponse:
        """
        Replace name and description of an existing company. `code` is never changed.

        Raises:
            NotFoundError: No company has this code (→ 404)
            ConstraintViolationError: New name is already taken (→ 409)
        """
        with translate_db_errors(
            "update_company",
            f"Company name '{payload.name}' is already in use",
        ):
            result = await self.db.execute(
                update(Company)
                .where(Company.code == code)
                .values(name=payload.name, description=payload.description)
                .returning(Company.code, Company.name, Company.description),
                execution_options=_NO_SYNC,
            )
            row = result.mappings().first()

        if row is None:
            raise NotFoundError(resource="Company", resource_id=code)

        logger.info("Company updated: %s", code)
        return CompanyResponse(company=CompanyRecord(**row))

    async def delete_company(self, code: str) -> StatusResponse:
        """
        Delete a company by code.

        Dependent invoices are not checked first; the foreign key decides.

        Raises:
            NotFoundError: No company has this code (→ 404)
            ConstraintViolationError: The company still owns invoices (→ 409)
        """
        with translate_db_errors(
            "delete_company",
            f"Company '{code}' still has invoices and cannot be deleted",
        ):
            result = await self.db.execute(
                delete(Company)
                .where(Company.code == code)
                .returning(Company.code),
                execution_options=_NO_SYNC,
            )
            deleted = result.first()

        if deleted is None:
            raise NotFoundError(resource="Company", resource_id=code)

        logger.info("Company deleted: %s", code)
        return StatusResponse()
