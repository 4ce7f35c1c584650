"""
BizTime Backend - Invoice Service
==================================

What:  Parameterized SQL for the /invoices endpoints.
How:   Same shape as CompanyService: one statement per operation (two for the
       detail lookup), a NotFound check on keyed statements, rows shaped into
       response envelopes.

Invoice ids in paths:
    The path segment arrives as a string. Only plain ASCII digits (with an
    optional leading minus) within the column's range are accepted; anything
    else ("+1", "0_1", " 7", non-ASCII digits) is treated as "no such
    invoice" and raises NotFoundError, the same as an id that isn't there.
"""

import logging
import re

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.database import translate_db_errors
from biztime.exceptions import NotFoundError
from biztime.models.company import Company
from biztime.models.invoice import Invoice
from biztime.schemas.common import StatusResponse
from biztime.schemas.company import CompanyRecord
from biztime.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceDetailResponse,
    InvoiceListResponse,
    InvoiceRecord,
    InvoiceResponse,
    InvoiceSummary,
    InvoiceUpdate,
)

logger = logging.getLogger(__name__)

# Upper bound of a 32-bit INTEGER primary key
MAX_INVOICE_ID = 2**31 - 1

_INVOICE_ID_PATTERN = re.compile(r"-?[0-9]+", re.ASCII)

_NO_SYNC = {"synchronize_session": False}

_INVOICE_COLUMNS = (
    Invoice.id,
    Invoice.comp_code,
    Invoice.amt,
    Invoice.paid,
    Invoice.add_date,
    Invoice.paid_date,
)


def parse_invoice_id(raw: str) -> int:
    """
    Coerce a path segment to an invoice id.

    >>> parse_invoice_id("42")
    42
    >>> parse_invoice_id("abc")
    Traceback (most recent call last):
    ...
    biztime.exceptions.NotFoundError: Invoice not found: abc
    """
    if not isinstance(raw, str) or not _INVOICE_ID_PATTERN.fullmatch(raw):
        raise NotFoundError(resource="Invoice", resource_id=str(raw))
    invoice_id = int(raw)
    if not -MAX_INVOICE_ID - 1 <= invoice_id <= MAX_INVOICE_ID:
        raise NotFoundError(resource="Invoice", resource_id=str(raw))
    return invoice_id


class InvoiceService:
    """CRUD over the `invoices` table, built per request with its session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_invoices(self) -> InvoiceListResponse:
        with translate_db_errors("list_invoices", "Could not list invoices"):
            result = await self.db.execute(
                select(Invoice.id, Invoice.comp_code).order_by(Invoice.id)
            )
            rows = result.mappings().all()

        return InvoiceListResponse(
            invoices=[InvoiceSummary(**row) for row in rows]
        )

    async def get_invoice(self, raw_id: str) -> InvoiceDetailResponse:
        """
        Fetch one invoice with its owning company nested.

        Two statements in order: the invoice row, then the company joined
        through the same invoice id.

        Raises:
            NotFoundError: No invoice has this id, or the id is not numeric (→ 404)
        """
        invoice_id = parse_invoice_id(raw_id)

        with translate_db_errors("get_invoice", "Could not load invoice"):
            result = await self.db.execute(
                select(
                    Invoice.id,
                    Invoice.amt,
                    Invoice.paid,
                    Invoice.add_date,
                    Invoice.paid_date,
                ).where(Invoice.id == invoice_id)
            )
            row = result.mappings().first()

            if row is None:
                raise NotFoundError(resource="Invoice", resource_id=raw_id)

            company_result = await self.db.execute(
                select(Company.code, Company.name, Company.description)
                .join(Invoice, Invoice.comp_code == Company.code)
                .where(Invoice.id == invoice_id)
            )
            company_row = company_result.mappings().first()

        company = CompanyRecord(**company_row) if company_row is not None else None
        return InvoiceDetailResponse(invoice=InvoiceDetail(**row, company=company))

    async def create_invoice(self, payload: InvoiceCreate) -> InvoiceResponse:
        """
        Insert an invoice; `paid`, `add_date` and `paid_date` take store defaults.

        Raises:
            ConstraintViolationError: comp_code names no existing company (→ 409)
        """
        with translate_db_errors(
            "create_invoice",
            f"Company '{payload.comp_code}' does not exist",
        ):
            result = await self.db.execute(
                insert(Invoice)
                .values(comp_code=payload.comp_code, amt=payload.amt)
                .returning(*_INVOICE_COLUMNS)
            )
            row = result.mappings().one()

        logger.info("Invoice created: %s for %s", row["id"], row["comp_code"])
        return InvoiceResponse(invoice=InvoiceRecord(**row))

    async def update_invoice(self, raw_id: str, payload: InvoiceUpdate) -> InvoiceResponse:
        """
        Change the amount of an invoice. Every other column is left as it is.

        Raises:
            NotFoundError: No invoice has this id (→ 404)
        """
        invoice_id = parse_invoice_id(raw_id)

        with translate_db_errors("update_invoice", "Invoice amount was rejected"):
            result = await self.db.execute(
                update(Invoice)
                .where(Invoice.id == invoice_id)
                .values(amt=payload.amt)
                .returning(*_INVOICE_COLUMNS),
                execution_options=_NO_SYNC,
            )
            row = result.mappings().first()

        if row is None:
            raise NotFoundError(resource="Invoice", resource_id=raw_id)

        logger.info("Invoice updated: %s", invoice_id)
        return InvoiceResponse(invoice=InvoiceRecord(**row))

    async def delete_invoice(self, raw_id: str) -> StatusResponse:
        invoice_id = parse_invoice_id(raw_id)

        with translate_db_errors("delete_invoice", "Invoice could not be deleted"):
            result = await self.db.execute(
                delete(Invoice)
                .where(Invoice.id == invoice_id)
                .returning(Invoice.id),
                execution_options=_NO_SYNC,
            )
            deleted = result.first()

        if deleted is None:
            raise NotFoundError(resource="Invoice", resource_id=raw_id)

        logger.info("Invoice deleted: %s", invoice_id)
        return StatusResponse()
