# Middleware package init
"""
Repairs API — Middleware Package
=================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for log lines and error responses
    2. Logging: access log with the request id attached
    3. GZip / CORS: FastAPI's bundled middleware
"""
