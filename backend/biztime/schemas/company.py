"""
BizTime Backend - Company Request/Response Schemas
===================================================

What:  Pydantic models defining the JSON contract of the /companies endpoints.
How:   FastAPI validates request bodies against the *Create/*Update models and
       serializes service results through the *Response envelopes.

Envelopes:
    GET    /companies          → {"companies": [{code, name}, ...]}
    GET    /companies/{code}   → {"company": {code, name, description, invoices: [id, ...]}}
    POST   /companies          → {"company": {code, name, description}}
    PUT    /companies/{code}   → {"company": {code, name, description}}

Request bodies are checked for shape only (fields present, strings). Format and
uniqueness are left to the database constraints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CompanyCreate(BaseModel):
    code: str = Field(description="Company key, e.g. 'apple'")
    name: str = Field(description="Display name")
    description: str = Field(description="Free text description")


class CompanyUpdate(BaseModel):
    """Body of PUT /companies/{code}. The key itself cannot be changed."""
    name: str = Field(description="New display name")
    description: str = Field(description="New description")


# ══════════════════════════════════════════════════════════════════════════
# Row Models
# ══════════════════════════════════════════════════════════════════════════


class CompanySummary(BaseModel):
    """List projection: description is omitted."""
    code: str
    name: str

    model_config = {"from_attributes": True}


class CompanyRecord(BaseModel):
    code: str
    name: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class CompanyDetail(CompanyRecord):
    """A company plus the ids of the invoices it owns, ascending."""
    invoices: List[int] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class CompanyListResponse(BaseModel):
    companies: List[CompanySummary]


class CompanyResponse(BaseModel):
    company: CompanyRecord


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail
