"""
Chambre API: Access Log Middleware
====================================

What:  Writes one line to the `chambre.access` logger per handled request.
How:   Times the downstream call and logs once the response object exists.

Line format:
    POST /rooms 201 4.2ms [a1b2c3d4] from 127.0.0.1

The same values are attached as `extra` record attributes (request_id,
method, path, status, duration_ms, client_ip) for handlers that emit
structured output. Room payloads are never logged.

Levels:
    5xx       ERROR    store or server failure
    4xx       WARNING  bad payload, unknown room, unknown route
    otherwise INFO

GET /health is not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from chambre.middleware.request_id import request_id_var

logger = logging.getLogger("chambre.access")

QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            fields,
            extra=fields,
        )
        return response
