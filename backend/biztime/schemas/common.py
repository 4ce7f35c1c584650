"""
BizTime Backend - Shared Response Schemas
==========================================

What:  Envelopes used by more than one resource: the delete marker, the error
       body produced by the global exception handlers, and the health check.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    """Returned by DELETE /companies/{code} and DELETE /invoices/{id}."""
    status: Literal["deleted"] = "deleted"


class ErrorBody(BaseModel):
    message: str = Field(description="Human-readable error description")
    status: int = Field(description="HTTP status code, repeated in the body")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class ErrorResponse(BaseModel):
    """
    Error envelope for every handled error.

    Example:
        {"error": {"message": "Company not found: disney", "status": 404,
                   "request_id": "1f0c9a2e"}}
    """
    error: ErrorBody


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
