"""Request tracing and latency metrics middleware"""

import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from finny.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

# Probes scraped every few seconds; kept out of the latency histogram
UNTRACKED_PATHS = {"/health", "/metrics"}


def _route_template(request: Request) -> str:
    """Matched route path (/income/{income_id}) so ids stay out of metric labels"""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it on the response"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")[:MAX_REQUEST_ID_LENGTH]
        request.state.request_id = incoming or str(uuid.uuid4())

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe latency per method, route template and status code"""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in UNTRACKED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=_route_template(request),
            status=response.status_code,
        ).observe(time.perf_counter() - started)
        return response
