"""
Request context middleware.

Assigns every request an ID, resolves the client IP and binds both into
structlog's context variables so all log lines emitted while handling
the request carry them. The ID is echoed back as X-Request-ID.

    request.state.request_id
    request.state.ip_address
"""

import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        ip_address = self._extract_client_ip(request)

        request.state.request_id = request_id
        request.state.ip_address = ip_address

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, ip_address=ip_address)

        logger.debug("Request started", method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_client_ip(self, request: Request) -> str | None:
        """
        Client IP, honouring X-Forwarded-For only when forwarding is
        enabled and the direct peer is a configured trusted proxy.
        """
        direct_ip = request.client.host if request.client else None

        if not settings.TRUST_X_FORWARDED_FOR or direct_ip not in settings.TRUSTED_PROXY_IPS:
            return direct_ip

        forwarded_for = request.headers.get("x-forwarded-for")
        if not forwarded_for:
            return direct_ip

        # "client, proxy1, proxy2"
        return forwarded_for.split(",")[0].strip()
