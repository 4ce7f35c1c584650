# Services package init
"""
BizTime Backend - Services Layer
=================================

What:  The SQL behind every endpoint, one service per resource.
How:   Services are constructed with the request's AsyncSession and return
       Pydantic response envelopes. They raise NotFoundError on zero-row keyed
       results and let `translate_db_errors` turn driver failures into
       ConstraintViolationError or DatabaseError.

Service Inventory:
    - CompanyService: list, get (with invoice ids), create, update, delete
    - InvoiceService: list, get (with nested company), create, update amount, delete
"""
