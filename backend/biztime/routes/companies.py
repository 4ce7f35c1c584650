"""
BizTime Backend - Company Route Handlers
=========================================

What:  CRUD endpoints for companies.
How:   Each handler receives a CompanyService bound to the request's session
       (FastAPI dependency) and returns the service's envelope unchanged.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from biztime.database import get_db_session
from biztime.schemas.common import ErrorResponse, StatusResponse
from biztime.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
)
from biztime.services.company_service import CompanyService

router = APIRouter(prefix="/companies", tags=["Companies"])

_NOT_FOUND = {404: {"description": "Company not found", "model": ErrorResponse}}
_CONFLICT = {409: {"description": "Constraint violation", "model": ErrorResponse}}


def get_company_service(db: AsyncSession = Depends(get_db_session)) -> CompanyService:
    """Builds the service around the session of the current request."""
    return CompanyService(db)


@router.get(
    "",
    response_model=CompanyListResponse,
    summary="List companies",
    description="Returns every company as {code, name}, ordered by name.",
)
async def list_companies(
    service: CompanyService = Depends(get_company_service),
) -> CompanyListResponse:
    return await service.list_companies()


@router.get(
    "/{code}",
    response_model=CompanyDetailResponse,
    responses=_NOT_FOUND,
    summary="Get a company with its invoice ids",
)
async def get_company(
    code: str,
    service: CompanyService = Depends(get_company_service),
) -> CompanyDetailResponse:
    return await service.get_company(code)


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_CONFLICT,
    summary="Create a company",
)
async def create_company(
    payload: CompanyCreate,
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    return await service.create_company(payload)


@router.put(
    "/{code}",
    response_model=CompanyResponse,
    responses={**_NOT_FOUND, **_CONFLICT},
    summary="Update a company's name and description",
)
async def update_company(
    code: str,
    payload: CompanyUpdate,
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    return await service.update_company(code, payload)


@router.delete(
    "/{code}",
    response_model=StatusResponse,
    responses={**_NOT_FOUND, **_CONFLICT},
    summary="Delete a company",
    description=(
        "Deletes the company. A company that still owns invoices is rejected "
        "by the database foreign key and answered with 409."
    ),
)
async def delete_company(
    code: str,
    service: CompanyService = Depends(get_company_service),
) -> StatusResponse:
    return await service.delete_company(code)
