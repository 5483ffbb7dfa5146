# Middleware package init
"""
Blade Stock Backend — Middleware Package
==========================================

What:  Cross-cutting concerns applied to requests.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Rate Limit] → Route Handler

    1. CORS: FastAPI's CORSMiddleware (handles preflight, decorates every
       response including 429)
    2. Request ID: correlation ID for logs and error bodies
    3. Logging: one access line per request, tagged with the request ID
    4. Rate Limit: refuses password-guessing floods before any route work

The stock password gate (password_gate.py) is not Starlette middleware: it is a
route dependency, because only mutating routes carry a password and it needs
the parsed JSON body.
"""
