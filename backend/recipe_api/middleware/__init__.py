# Middleware package init
"""
Recipe API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: set the correlation ID before anything logs
    2. Logging: access line with the ID, status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
