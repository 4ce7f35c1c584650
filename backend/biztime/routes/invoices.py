"""
BizTime Backend - Invoice Route Handlers
=========================================

What:  CRUD endpoints for invoices.

The `{invoice_id}` path parameter is declared as a string on purpose: a
non-numeric id is answered with 404 by the service, not with FastAPI's 422.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.database import get_db_session
from biztime.schemas.common import ErrorResponse, StatusResponse
from biztime.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetailResponse,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceUpdate,
)
from biztime.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])

_NOT_FOUND = {404: {"description": "Invoice not found", "model": ErrorResponse}}


def get_invoice_service(db: AsyncSession = Depends(get_db_session)) -> InvoiceService:
    return InvoiceService(db)


@router.get("", response_model=InvoiceListResponse, summary="List invoices")
async def list_invoices(
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceListResponse:
    return await service.list_invoices()


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailResponse,
    responses=_NOT_FOUND,
    summary="Get an invoice with its company",
)
async def get_invoice(
    invoice_id: str,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceDetailResponse:
    return await service.get_invoice(invoice_id)


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Unknown company", "model": ErrorResponse}},
    summary="Create an invoice",
)
async def create_invoice(
    payload: InvoiceCreate,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    return await service.create_invoice(payload)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses=_NOT_FOUND,
    summary="Update an invoice amount",
)
async def update_invoice(
    invoice_id: str,
    payload: InvoiceUpdate,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    return await service.update_invoice(invoice_id, payload)


@router.delete(
    "/{invoice_id}",
    response_model=StatusResponse,
    responses=_NOT_FOUND,
    summary="Delete an invoice",
)
async def delete_invoice(
    invoice_id: str,
    service: InvoiceService = Depends(get_invoice_service),
) -> StatusResponse:
    return await service.delete_invoice(invoice_id)
