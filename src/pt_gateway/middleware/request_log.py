"""Per-request logging and request-id propagation.

A well-formed ``X-Request-ID`` from the caller is reused so a trade can be
traced across client and server logs; otherwise a ``req_<hex>`` id is minted.
The id lands in ``request.state.request_id`` (copied into ApiResponse) and is
echoed back in the response header.

Ledger store and quote outages surface as 5xx, so those requests log at
WARNING. Health checks log at DEBUG.

    INFO pt.request POST /api/v1/trades 200 4.2ms req_a1b2c3d4e5f6
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("pt.request")

REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")
_QUIET_PATHS = frozenset({"/health"})


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _CLIENT_ID_PATTERN.match(incoming):
        return incoming
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s failed after %.1fms %s",
                request.method, request.url.path,
                (time.perf_counter() - started) * 1000, request_id,
            )
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        if request.url.path in _QUIET_PATHS:
            level = logging.DEBUG
        elif response.status_code >= 500:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            "%s %s %d %.1fms %s",
            request.method, request.url.path, response.status_code, elapsed_ms, request_id,
        )
        return response
