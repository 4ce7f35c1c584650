# Routes package init
"""
BizTime Backend - API Routes Package
=====================================

Route Inventory:
    - companies.py:  GET/POST        /companies
                     GET/PUT/DELETE  /companies/{code}
    - invoices.py:   GET/POST        /invoices
                     GET/PUT/DELETE  /invoices/{id}
    - health.py:     GET             /health

Routes are thin: they pick the status code, build the service for the request
and return its envelope. Error responses come from the handlers in main.py.
"""
