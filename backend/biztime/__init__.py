"""
BizTime Backend - Application Package Initializer
==================================================

What: Marks the `biztime` directory as a Python package.
Who:  Imported by uvicorn (`biztime.main:app`), pytest and the services layer.

Architecture Note:
    The backend is layered the same way for both resources:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← paths, status codes, envelopes
    ├─────────────────────────────────────┤
    │         Services (Queries)          │  ← parameterized SQL, NotFound checks
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async engine, per-request session
    └─────────────────────────────────────┘

    Routes never touch the session directly; they build a service around the
    request's session and return whatever envelope the service produces.
"""

__version__ = "1.0.0"
