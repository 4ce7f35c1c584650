# Middleware package init
"""
BizTime Backend - Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation id used by every later log line
    2. Logging: one access line per request, with status and duration
    3. GZip / CORS: Starlette's stock middleware

Starlette runs middleware in reverse order of `add_middleware`, so main.py adds
them as CORS, GZip, Logging, Request ID.
"""
