# marketfresh/api/middleware.py
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from marketfresh.utils.logging import get_logger
from marketfresh.utils.settings import MAX_BODY_BYTES

logger = get_logger("marketfresh.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.error(f"{request.method} {request.url.path} 500 {duration_ms}ms [{request_id}]")
            raise
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        line = f"{request.method} {request.url.path} {response.status_code} {duration_ms}ms [{request_id}]"
        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)

        response.headers["X-Request-ID"] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    # interactive docs load their assets from a CDN, no CSP there
    DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        if not request.url.path.startswith(self.DOCS_PATHS):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        return response


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests whose declared Content-Length exceeds the limit."""

    def __init__(self, app, max_bytes: int = MAX_BODY_BYTES):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        length = request.headers.get("content-length")
        if length is not None:
            try:
                too_large = int(length) > self.max_bytes
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content={"error": "INVALID_REQUEST", "message": "Invalid Content-Length"},
                )
            if too_large:
                logger.warning(f"{request.method} {request.url.path} rejected: body of {length} bytes")
                return JSONResponse(
                    status_code=413,
                    content={"error": "PAYLOAD_TOO_LARGE", "message": "Request body too large"},
                )

        return await call_next(request)
