"""
Chambre API: Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first so every later log line can be correlated
    - Logging captures response status and duration on the way back out
"""
