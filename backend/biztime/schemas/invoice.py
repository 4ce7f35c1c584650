"""
BizTime Backend - Invoice Request/Response Schemas
===================================================

What:  Pydantic models defining the JSON contract of the /invoices endpoints.

Envelopes:
    GET    /invoices        → {"invoices": [{id, comp_code}, ...]}
    GET    /invoices/{id}   → {"invoice": {id, amt, paid, add_date, paid_date,
                                           company: {code, name, description}}}
    POST   /invoices        → {"invoice": {id, comp_code, amt, paid, add_date, paid_date}}
    PUT    /invoices/{id}   → {"invoice": {id, comp_code, amt, paid, add_date, paid_date}}

Amounts:
    `amt` is a Decimal end to end. Pydantic serializes Decimal as a JSON string,
    so a NUMERIC(10, 2) value of 100 reaches the client as "100.00".
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from biztime.schemas.company import CompanyRecord


class InvoiceCreate(BaseModel):
    comp_code: str = Field(description="Code of the owning company")
    amt: Decimal = Field(description="Invoice amount")


class InvoiceUpdate(BaseModel):
    amt: Decimal = Field(description="New invoice amount")


class InvoiceSummary(BaseModel):
    id: int
    comp_code: str

    model_config = {"from_attributes": True}


class InvoiceRecord(BaseModel):
    """Full invoice row as returned by INSERT/UPDATE ... RETURNING."""
    id: int
    comp_code: str
    amt: Decimal
    paid: bool
    add_date: date
    paid_date: Optional[date] = None

    model_config = {"from_attributes": True}


class InvoiceDetail(BaseModel):
    """
    Invoice detail with the owning company nested in place of `comp_code`.

    `company` is None only if the invoice disappeared between the two
    statements of the lookup.
    """
    id: int
    amt: Decimal
    paid: bool
    add_date: date
    paid_date: Optional[date] = None
    company: Optional[CompanyRecord] = None


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceSummary]


class InvoiceResponse(BaseModel):
    invoice: InvoiceRecord


class InvoiceDetailResponse(BaseModel):
    invoice: InvoiceDetail
