"""
Townhall Backend — Middleware Package
=======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the logging middleware and the exception
    handlers can read the correlation id from its ContextVar.
"""
